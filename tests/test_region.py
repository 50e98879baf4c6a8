"""Tests for termly.region -- the update cycle, erasing and disposal."""

from __future__ import annotations

import pytest

from termly.config import LiveOptions
from termly.cursor import CursorController
from termly.region import LiveRegion, RegionState, RegionWriter
from termly.registry import LiveRegistry
from termly.terminal import TerminalLostError

from .virtual_terminal import VirtualTerminal


class Label(LiveRegion):
    """A fixed-width region painting whatever text it is given."""

    def __init__(self, registry: LiveRegistry, width: int, **kwargs) -> None:
        self._width = width
        super().__init__(registry, **kwargs)

    @property
    def max_width(self) -> int:
        return self._width

    def show(self, text: str, clear: bool = False) -> None:
        def paint(writer: RegionWriter) -> None:
            writer.write(text)

        self.update(paint, clear=clear)


# ---------------------------------------------------------------------------
# Update cycle
# ---------------------------------------------------------------------------


class TestUpdateCycle:
    """Exact cursor and erase operations issued per update."""

    def test_repaint_erases_margins_by_default(self, vt, registry) -> None:
        vt.set_cursor(2, 4)
        label = Label(registry, 3, margin=(1, 2))
        vt.clear_ops()
        label.show("abc")
        assert vt.ops == [
            ("move_to", 2, 4),
            ("write", " "),
            ("move_to", 2, 8),
            ("write", "  "),
            ("move_to", 2, 5),
            ("write", "abc"),
            ("flush",),
        ]

    def test_flicker_free_policy_skips_margins(self, vt) -> None:
        registry = LiveRegistry(vt, LiveOptions(erase_margins=False))
        label = Label(registry, 3, margin=(1, 2))
        vt.clear_ops()
        label.show("abc")
        assert vt.ops == [("move_to", 0, 1), ("write", "abc"), ("flush",)]

    def test_per_region_policy_override(self, vt, registry) -> None:
        label = Label(registry, 3, margin=(1, 1), erase_margins=False)
        vt.clear_ops()
        label.show("abc")
        assert vt.ops[0] == ("move_to", 0, 1)

    def test_clearing_update_blanks_whole_footprint(self, vt, registry) -> None:
        label = Label(registry, 3, margin=(1, 2))
        vt.clear_ops()
        label.show("x", clear=True)
        assert vt.ops == [
            ("move_to", 0, 0),
            ("write", "      "),
            ("move_to", 0, 1),
            ("write", "x"),
            ("flush",),
        ]

    def test_zero_width_margins_write_nothing(self, vt, registry) -> None:
        label = Label(registry, 2)
        vt.clear_ops()
        label.show("ab")
        assert vt.writes == ["ab"]

    def test_content_lands_inside_margins(self, vt, registry) -> None:
        vt.fill(0, "xxxxxxxx")
        vt.set_cursor(0, 1)
        label = Label(registry, 3, margin=(1, 1))
        label.show("abc")
        assert vt.line(0)[:8] == "x abc xx"

    def test_wider_paint_widens_later_erases(self, vt, registry) -> None:
        label = Label(registry, 2)
        label.show("abcdef")
        assert label.content_width == 6
        vt.clear_ops()
        label.dispose()
        assert " " * 6 in vt.writes
        assert vt.line(0)[:6] == " " * 6


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_states(self, registry) -> None:
        label = Label(registry, 1)
        assert label.state is RegionState.ACTIVE
        label.dispose()
        assert label.state is RegionState.DISPOSED
        assert label.disposed

    def test_dispose_erases_and_deregisters(self, vt, registry) -> None:
        label = Label(registry, 5, margin=(1, 1))
        label.show("hello")
        label.dispose()
        assert label not in registry
        assert vt.line(0).strip() == ""

    def test_double_dispose_equals_single(self, vt, registry) -> None:
        label = Label(registry, 5)
        label.show("hello")
        label.dispose()
        after_first = list(vt.ops)
        label.dispose()
        assert vt.ops == after_first

    def test_update_after_dispose_is_noop(self, vt, registry) -> None:
        label = Label(registry, 5)
        label.dispose()
        vt.clear_ops()
        label.show("late")
        assert vt.ops == []

    def test_context_manager_disposes(self, registry) -> None:
        with Label(registry, 2) as label:
            assert label in registry
        assert label.disposed
        assert label not in registry

    def test_context_manager_disposes_on_error(self, registry) -> None:
        with pytest.raises(RuntimeError):
            with Label(registry, 2) as label:
                raise RuntimeError("boom")
        assert label.disposed
        assert len(registry) == 0


class TestDisabledRegion:
    """A region on a redirected stream never touches the terminal."""

    def test_zero_operations(self) -> None:
        vt = VirtualTerminal(interactive=False)
        registry = LiveRegistry(vt)
        label = Label(registry, 4, margin=(1, 1))
        label.show("abcd")
        label.show("ab", clear=True)
        label.hide_cursor()
        label.dispose()
        label.dispose()
        assert vt.ops == []
        assert label.disposed


# ---------------------------------------------------------------------------
# Cursor visibility
# ---------------------------------------------------------------------------


class TestCursorVisibility:
    def test_dispose_restores_hidden_cursor(self, vt, registry) -> None:
        label = Label(registry, 1)
        label.hide_cursor()
        assert vt.cursor_visible is False
        label.dispose()
        assert vt.cursor_visible is True

    def test_cursor_stays_hidden_until_last_region_goes(self, vt, registry) -> None:
        a = Label(registry, 1)
        b = Label(registry, 1)
        a.hide_cursor()
        b.hide_cursor()
        a.dispose()
        assert vt.cursor_visible is False
        b.dispose()
        assert vt.cursor_visible is True

    def test_hidden_block_restores_on_error(self, vt) -> None:
        cursor = CursorController(vt)
        with pytest.raises(ValueError):
            with cursor.hidden():
                assert vt.cursor_visible is False
                raise ValueError
        assert vt.cursor_visible is True

    def test_show_without_hide_is_noop(self, vt) -> None:
        cursor = CursorController(vt)
        cursor.show_cursor()
        assert vt.ops == []


class TestBlank:
    def test_blank_is_chunked(self, vt) -> None:
        cursor = CursorController(vt, blank_chunk=4)
        cursor.blank(10)
        assert vt.writes == ["    ", "    ", "  "]

    def test_blank_wider_than_default_chunk(self, vt) -> None:
        cursor = CursorController(vt)
        cursor.blank(170)
        assert "".join(vt.writes) == " " * 170
        assert vt.cursor_col == 170

    def test_blank_zero_or_negative(self, vt) -> None:
        cursor = CursorController(vt)
        cursor.blank(0)
        cursor.blank(-3)
        assert vt.ops == []


# ---------------------------------------------------------------------------
# Device loss
# ---------------------------------------------------------------------------


class TestDeviceLoss:
    def test_update_propagates_lost_terminal(self, vt, registry) -> None:
        label = Label(registry, 3)
        vt.fail_writes = True
        with pytest.raises(TerminalLostError):
            label.show("abc")

    def test_dispose_swallows_lost_terminal(self, vt, registry) -> None:
        label = Label(registry, 3)
        label.hide_cursor()
        vt.fail_writes = True
        label.dispose()  # should not raise
        assert label.disposed
        assert label not in registry

    def test_lost_terminal_is_an_oserror(self) -> None:
        assert issubclass(TerminalLostError, OSError)
