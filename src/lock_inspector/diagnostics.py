# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""Diagnostic logging setup.

The observation log (what the workers saw) goes through
``lock_inspector.logger``. This module only configures stdlib logging for
operational messages: worker lifecycle, dropped routes, shutdown problems.
Override the level with LOCK_INSPECTOR_LOG_LEVEL and add a file handler with
LOCK_INSPECTOR_LOG_DIR.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_FILE_NAME = "lock_inspector.log"


def get_logger(name: str = "lock_inspector") -> logging.Logger:
    root = logging.getLogger("lock_inspector")
    if not root.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(stream_handler)
        log_dir = os.getenv("LOCK_INSPECTOR_LOG_DIR")
        if log_dir:
            path = Path(log_dir)
            path.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path / LOG_FILE_NAME, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(file_handler)
        root.propagate = False
        level = os.getenv("LOCK_INSPECTOR_LOG_LEVEL", "INFO").upper()
        if isinstance(logging.getLevelName(level), int):
            root.setLevel(level)
        else:
            root.setLevel(logging.INFO)
            root.warning("unknown LOCK_INSPECTOR_LOG_LEVEL %r; using INFO", level)
    return logging.getLogger(name)


def set_level(level: str) -> None:
    get_logger().setLevel(level.upper())


__all__ = ["get_logger", "set_level"]
