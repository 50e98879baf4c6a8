"""Demo: ``python -m termly`` draws each widget on stderr."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Callable

from termly.colorizer import Color, write_line_in_color
from termly.widgets import ProgressBar, ProgressSpinner, Status, Stopwatch


def _do_work(report: Callable[[int], None], delay: float) -> None:
    report(0)
    for i in range(101):
        report(i)
        time.sleep(delay)


def main() -> None:
    parser = argparse.ArgumentParser(description="termly: live terminal widget demo")
    parser.add_argument("--delay", type=float, default=0.05, help="Seconds per progress step (default: 0.05)")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    out = sys.stderr
    write_line_in_color(out, "{0:blue}, {1:white|green}!", "Hello", "World")
    write_line_in_color(out, "{0:,.2f:cyan}", 12345.67)

    with ProgressSpinner() as spinner:
        _do_work(spinner.report, args.delay)

    with ProgressSpinner(style=ProgressSpinner.BRAILLE, done="✓") as spinner, Status() as status:
        status.write("Doing work...", Color.BLUE)
        _do_work(spinner.report, args.delay)
        status.write("Done!", Color.GREEN)
    out.write("\n")

    with ProgressBar() as bar, Status() as percentage:
        def report(value: int) -> None:
            bar.report(value)
            percentage.write(f"{value}%")

        _do_work(report, args.delay)
        percentage.write("")
    out.write("\n")

    with ProgressBar(width=20, block=ProgressBar.SQUARE) as bar, Stopwatch(time_format="mm:ss.ff", resolution=0.1) as watch:
        watch.start()
        _do_work(bar.report, args.delay)
    out.write("\n")


if __name__ == "__main__":
    main()
