from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication

from catpoint.bootstrap import build_app_system
from catpoint.core.errors import CatPointError
from catpoint.logging_config import configure_logging
from catpoint.ui.main_window import MainWindow
from catpoint.ui.theme import APP_QSS

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="CatPoint home security panel.")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (defaults to $CATPOINT_CONFIG, then ./config.yaml).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override the log level from the config file.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Start the desktop UI.

    Usage
    -----
        python -m catpoint.dev.run_app --config path/to/config.yaml
    """
    args = parse_args(argv)

    try:
        wiring = build_app_system(config_path=args.config)
    except (CatPointError, FileNotFoundError) as e:
        configure_logging("ERROR")
        logger.error("Cannot start: %s", e)
        return 2

    if args.log_level:
        configure_logging(args.log_level)

    app = QApplication(sys.argv[:1])
    app.setStyleSheet(APP_QSS)

    win = MainWindow(service=wiring.service)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
