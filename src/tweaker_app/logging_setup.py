# SPDX-License-Identifier: MIT

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import colorlog

LOG_FILE_NAME = "tweaker.log"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _build_console_handler() -> logging.Handler:
    handler = colorlog.StreamHandler(sys.stdout)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            "%(log_color)s%(message)s",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )
    )
    return handler


class TweakerLogFilter(logging.Filter):
    """Only pass records emitted by the tweaker packages."""

    def filter(self, record):
        return record.name.startswith(("tweaker_library", "tweaker_app"))


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the tweaker loggers.

    Only the tweaker loggers are touched, so a host program keeps its own
    root logging configuration.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handlers = [_build_console_handler()]
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    log_filter = TweakerLogFilter()
    for handler in handlers:
        handler._tweaker_handler = True  # type: ignore[attr-defined]
        handler.addFilter(log_filter)

    for name in ("tweaker_library", "tweaker_app"):
        package_logger = logging.getLogger(name)
        package_logger.setLevel(level)
        package_logger.propagate = False
        for existing in list(package_logger.handlers):
            if getattr(existing, "_tweaker_handler", False):
                package_logger.removeHandler(existing)
                existing.close()
        for handler in handlers:
            package_logger.addHandler(handler)

    # Silence request lines from the embedded server
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return logging.getLogger("tweaker_app")
