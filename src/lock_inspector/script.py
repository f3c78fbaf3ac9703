# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""Load lock-inspection scripts into an ordered tuple of commands."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Tuple

from .command import Command, parse_command
from .errors import ScriptError

Script = Tuple[Command, ...]


def load_script(lines: Iterable[str]) -> Script:
    commands: list[Command] = []
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip() or line.startswith("#"):
            continue
        try:
            commands.append(parse_command(line))
        except ScriptError as exc:
            raise ScriptError(exc.reason, line, line_number) from None
    return tuple(commands)


def read_script(path: Path) -> Script:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScriptError(f"cannot read script: {exc}", str(path)) from exc
    return load_script(text.splitlines())


__all__ = ["Script", "load_script", "read_script"]
