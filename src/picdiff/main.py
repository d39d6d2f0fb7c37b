# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

import logging
from pathlib import Path

from picdiff.config import ConfigError, load_config
from picdiff.constants import APP_NAME
from picdiff.utils.logger import get_logger, setup_session_logging


def main() -> None:
    """Configure logging from settings and run the CLI."""
    from picdiff.cli.compare_cli import app

    try:
        settings = load_config()
    except ConfigError:
        # compare reports invalid settings itself
        settings = {}
    logging_cfg = settings.get("logging", {})
    level = logging.getLevelName(str(logging_cfg.get("level", "INFO")).upper())
    get_logger(APP_NAME, level=level if isinstance(level, int) else logging.INFO)
    if logging_cfg.get("session_log", False):
        setup_session_logging(Path.cwd(), APP_NAME)
    app(prog_name=APP_NAME)


if __name__ == "__main__":
    main()
