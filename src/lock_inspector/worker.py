# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""A worker thread executing one id's commands on its own session."""

from __future__ import annotations

import queue
import threading
from typing import Optional, Sequence

import psycopg

from .command import Command, CommandType
from .config import Settings
from .db import ConnectionProvider, Session, connect
from .diagnostics import get_logger
from .logger import MessageLog

logger = get_logger(__name__)

COLUMN_WIDTH = 10


def _cell(value: object) -> str:
    return "null" if value is None else str(value)


def format_row(values: Sequence[object]) -> str:
    cells = "".join(f"{_cell(value):<{COLUMN_WIDTH}} " for value in values)
    return f"({cells})"


class Worker:
    def __init__(
        self,
        worker_id: int,
        settings: Settings,
        log: MessageLog,
        provider: ConnectionProvider = connect,
    ) -> None:
        self.worker_id = worker_id
        self._settings = settings
        self._log = log
        self._provider = provider
        self._commands: "queue.Queue[Command]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self.aborted = False

    def start(self) -> None:
        if self._thread is None:
            self._thread = threading.Thread(target=self.run, name=f"worker{self.worker_id}")
            self._thread.start()

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def offer(self, command: Command) -> bool:
        """Queue a command unless the thread has already ended."""
        if self._thread is not None and not self._thread.is_alive():
            return False
        self._commands.put(command)
        return True

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def run(self) -> None:
        try:
            session = self._provider(self._settings)
        except psycopg.Error as exc:
            self._abort(exc)
            return
        logger.debug("worker %d connected", self.worker_id)
        try:
            self._loop(session)
        except psycopg.Error as exc:
            self._abort(exc)
        finally:
            try:
                session.close()
            except psycopg.Error:
                logger.exception("worker %d failed to close its connection", self.worker_id)
        logger.debug("worker %d finished", self.worker_id)

    def _loop(self, session: Session) -> None:
        while True:
            command = self._commands.get()
            self._log.emit(str(command))
            kind = command.kind
            if kind is CommandType.EXIT:
                return
            if kind.is_isolation:
                session.set_isolation(kind)
            elif kind is CommandType.QUERY:
                try:
                    self._query(session, command.query)
                finally:
                    self._log.emit(f"({self.worker_id}:{kind.name})")
            elif kind is CommandType.UPDATE:
                count = 0
                try:
                    count = session.update(command.query)
                finally:
                    self._log.emit(f"({self.worker_id}:{kind.name}:COUNT={count})")
            elif kind is CommandType.COMMIT:
                session.commit()
            elif kind is CommandType.ROLLBACK:
                session.rollback()
            else:
                logger.error("worker %d cannot execute %s", self.worker_id, command)

    def _query(self, session: Session, sql: str) -> None:
        with session.query(sql) as (columns, rows):
            self._log.emit(format_row(columns))
            for row in rows:
                self._log.emit(format_row(row))

    def _abort(self, exc: psycopg.Error) -> None:
        self.aborted = True
        detail = str(exc).strip()
        self._log.emit(f"({self.worker_id}:{type(exc).__name__}: {detail})")
        self._log.emit(f"{self.worker_id}:ABORT")
        logger.info("worker %d aborted: %s", self.worker_id, type(exc).__name__)


__all__ = ["COLUMN_WIDTH", "Worker", "format_row"]
