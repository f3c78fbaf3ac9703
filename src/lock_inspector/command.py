# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""Script commands and the line grammar that produces them."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .errors import ScriptError


class CommandType(enum.Enum):
    SERIALIZABLE = "SR"
    REPEATABLE_READ = "RR"
    READ_COMMITTED = "RC"
    QUERY = "Q"
    UPDATE = "U"
    COMMIT = "C"
    ROLLBACK = "R"
    SLEEP = "S"
    EXIT = "E"

    @property
    def is_isolation(self) -> bool:
        return self in ISOLATION_TYPES

    @property
    def has_query(self) -> bool:
        return self in (CommandType.QUERY, CommandType.UPDATE)


ISOLATION_TYPES = frozenset(
    {CommandType.SERIALIZABLE, CommandType.REPEATABLE_READ, CommandType.READ_COMMITTED}
)

# Short script tokens and the long names echoed to the log both parse.
WORKER_TOKENS: dict[str, CommandType] = {
    token: kind
    for kind in CommandType
    if kind is not CommandType.SLEEP
    for token in (kind.value, kind.name)
}
SLEEP_MARKERS = frozenset({CommandType.SLEEP.value, CommandType.SLEEP.name})


@dataclass(frozen=True)
class Command:
    """One parsed script instruction.

    ``query`` is only set for QUERY and UPDATE, ``sleep_seconds`` only for
    SLEEP. ``worker_id`` carries no meaning for SLEEP and is left at 0.
    """

    kind: CommandType
    worker_id: int = 0
    query: str = ""
    sleep_seconds: int = 0

    @classmethod
    def exit(cls, worker_id: int) -> "Command":
        return cls(CommandType.EXIT, worker_id)

    def __str__(self) -> str:
        if self.kind.has_query:
            return f"{self.worker_id}:{self.kind.name}:{self.query}"
        if self.kind is CommandType.SLEEP:
            return f"{self.kind.name}:{self.sleep_seconds}"
        return f"{self.worker_id}:{self.kind.name}"


def _parse_int(value: str, what: str, line: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ScriptError(f"{what} is not an integer", line) from None


def parse_command(line: str) -> Command:
    """Parse one non-blank, non-comment script line.

    The SQL payload of QUERY/UPDATE is everything after the second ``:``,
    so it may itself contain ``:``.
    """
    head, sep, rest = line.partition(":")
    if not sep:
        raise ScriptError("missing ':' separator", line)
    head = head.strip()

    if head in SLEEP_MARKERS:
        if ":" in rest:
            raise ScriptError("too many fields for SLEEP", line)
        seconds = _parse_int(rest, "sleep seconds", line)
        if seconds < 0:
            raise ScriptError("sleep seconds must not be negative", line)
        return Command(CommandType.SLEEP, sleep_seconds=seconds)

    worker_id = _parse_int(head, "worker id", line)
    token, sep, payload = rest.partition(":")
    token = token.strip()
    kind = WORKER_TOKENS.get(token)
    if kind is None:
        raise ScriptError(f"unknown command {token!r}", line)

    if kind.has_query:
        if not sep or not payload.strip():
            raise ScriptError(f"{kind.name} requires a SQL statement", line)
        return Command(kind, worker_id, query=payload)
    if sep:
        raise ScriptError(f"too many fields for {kind.name}", line)
    return Command(kind, worker_id)


__all__ = ["Command", "CommandType", "ISOLATION_TYPES", "parse_command"]
