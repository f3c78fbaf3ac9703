# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""Scripted multi-worker dispatcher for observing database locking.

A script assigns SQL commands to numbered workers. Each worker holds its own
transaction on a dedicated connection, so the interleaving written in the
script reproduces lock waits, serialization failures and isolation anomalies
in a repeatable way.
"""

from .command import Command, CommandType, parse_command
from .config import Settings, load_settings
from .dispatcher import Dispatcher, run_script
from .errors import (
    ConfigError,
    DispatchInterrupted,
    LockInspectorError,
    ScriptError,
)
from .script import load_script, read_script

__version__ = "1.0"

__all__: list[str] = [
    "Command",
    "CommandType",
    "ConfigError",
    "DispatchInterrupted",
    "Dispatcher",
    "LockInspectorError",
    "ScriptError",
    "Settings",
    "load_script",
    "load_settings",
    "parse_command",
    "read_script",
    "run_script",
]
