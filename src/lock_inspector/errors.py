# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""Exception hierarchy for lock_inspector."""

from __future__ import annotations


class LockInspectorError(Exception):
    """Base class for all lock_inspector errors."""


class ConfigError(LockInspectorError):
    pass


class ScriptError(LockInspectorError):
    """Raised when a script line cannot be parsed."""

    def __init__(self, reason: str, line: str, line_number: int | None = None) -> None:
        self.reason = reason
        self.line = line
        self.line_number = line_number
        if line_number is None:
            super().__init__(f"{reason}: {line!r}")
        else:
            super().__init__(f"line {line_number}: {reason}: {line!r}")


class DispatchInterrupted(LockInspectorError):
    """Raised when the dispatch loop is interrupted; shutdown has already run."""
