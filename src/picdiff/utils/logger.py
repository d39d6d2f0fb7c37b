# -*- coding: utf-8 -*-
"""Logger factory for console and session-file logging."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def get_logger(name: str, log_file: str | Path | None = None, level: int = logging.INFO) -> logging.Logger:
    """Return a configured logger instance."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def setup_session_logging(base_dir: str | Path, app_name: str, level: int = logging.DEBUG) -> Path | None:
    """Attach a per-run log file under ``<base_dir>/logs`` to the root logger.

    Calling it again in the same process returns the existing session log.
    """
    root = logging.getLogger()
    if getattr(root, "_picdiff_logging_configured", False):
        return getattr(root, "_picdiff_session_log", None)

    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    logs_dir = Path(base_dir) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    safe_app_name = app_name.lower().replace(" ", "-")
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    session_log_path: Path | None = logs_dir / f"{safe_app_name}-{timestamp}.log"

    try:
        file_handler = logging.FileHandler(session_log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        root.info("Session log file established: %s", session_log_path)
    except OSError as e:
        root.error("Failed to establish session log file: %s", e)
        session_log_path = None

    root._picdiff_logging_configured = True  # type: ignore[attr-defined]
    root._picdiff_session_log = session_log_path  # type: ignore[attr-defined]
    return session_log_path
