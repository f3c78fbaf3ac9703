# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""psycopg-backed sessions, one per worker."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, List, Sequence, Tuple

import psycopg
from psycopg import IsolationLevel
from psycopg.conninfo import conninfo_to_dict
from psycopg.rows import tuple_row

from .command import CommandType
from .config import Settings

ISOLATION_LEVELS = {
    CommandType.SERIALIZABLE: IsolationLevel.SERIALIZABLE,
    CommandType.REPEATABLE_READ: IsolationLevel.REPEATABLE_READ,
    CommandType.READ_COMMITTED: IsolationLevel.READ_COMMITTED,
}

Rows = Tuple[List[str], Iterable[Sequence[object]]]


class Session:
    """A transactional connection; auto-commit is always off."""

    def __init__(self, conn: psycopg.Connection) -> None:
        self._conn = conn

    def set_isolation(self, kind: CommandType) -> None:
        # psycopg refuses the change while a transaction is open.
        self._conn.isolation_level = ISOLATION_LEVELS[kind]

    @contextmanager
    def query(self, sql: str) -> Iterator[Rows]:
        with self._conn.cursor() as cur:
            cur.execute(sql)
            if cur.description is None:
                raise psycopg.ProgrammingError("the statement did not return rows")
            columns = [column.name for column in cur.description]
            yield columns, cur

    def update(self, sql: str) -> int:
        with self._conn.cursor() as cur:
            cur.execute(sql)
            return max(cur.rowcount, 0)

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def close(self) -> None:
        # Closing without commit discards any open transaction server side.
        self._conn.close()


ConnectionProvider = Callable[[Settings], Session]


def connect_options(url: str, statement_timeout_ms: int) -> str:
    """Append the statement timeout to any libpq options already in the URL."""
    existing = conninfo_to_dict(url).get("options") or ""
    timeout = f"-c statement_timeout={statement_timeout_ms}"
    return f"{existing} {timeout}".strip()


def connect_kwargs(settings: Settings) -> Dict[str, Any]:
    return {
        "user": settings.user,
        "password": settings.password,
        "autocommit": False,
        "row_factory": tuple_row,
        "options": connect_options(settings.url, settings.statement_timeout_ms),
    }


def connect(settings: Settings) -> Session:
    conn = psycopg.connect(settings.url, **connect_kwargs(settings))
    return Session(conn)


__all__ = [
    "ConnectionProvider",
    "ISOLATION_LEVELS",
    "Session",
    "connect",
    "connect_kwargs",
    "connect_options",
]
