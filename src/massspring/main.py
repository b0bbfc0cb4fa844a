"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) objects and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Parses the command line and sets up logging.
2. Instantiates the ParameterStore (Model) and the SimulationDriver
   (Controller).
3. Passes them into the MainWindow (View).
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from massspring import __version__, config
from massspring.application import create_app
from massspring.controller.driver import SimulationDriver
from massspring.controller.scheduler import QtFrameScheduler
from massspring.logging_config import setup_logging
from massspring.model.state import ParameterStore
from massspring.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def playback_speed(text: str) -> float:
    """Speed multiplier within the range offered by the control panel."""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    low, high, _step = config.PLAYBACK_SPEED_RANGE
    if not low <= value <= high:
        raise argparse.ArgumentTypeError(f"must be between {low:g} and {high:g}, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="massspring",
        description="Interactive simple harmonic motion lab (mass-spring system).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO).",
    )
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    parser.add_argument(
        "--fps", type=int, default=1000 // config.DEFAULT_FRAME_INTERVAL_MS,
        help="Frame timer rate in frames per second.",
    )
    parser.add_argument(
        "--speed", type=playback_speed, default=config.DEFAULT_PLAYBACK_SPEED,
        help="Initial playback speed multiplier (0.1 to 5).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=args.log_level, log_file=args.log_file)

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize Model + Controller
    store = ParameterStore()
    driver = SimulationDriver(store, playback_speed=args.speed)
    if isinstance(driver.scheduler, QtFrameScheduler):
        driver.scheduler.set_fps(args.fps)

    # 4. Initialize the Main Window
    window = MainWindow(driver)
    window.show()
    logger.info(f"Started with parameters {store.params}")

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
