# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

import io
import threading
from contextlib import contextmanager

import pytest

from lock_inspector.config import Settings


class FakeDatabase:
    """Scripted results shared by every session a provider hands out."""

    def __init__(self):
        self.queries = {}
        self.updates = {}
        self.connect_errors = {}
        self.sessions = []
        self.blockers = {}
        self._lock = threading.Lock()

    def provider(self, settings):
        with self._lock:
            index = len(self.sessions)
            error = self.connect_errors.get(index)
            if error is not None:
                self.sessions.append(None)
                raise error
            session = FakeSession(self, settings)
            self.sessions.append(session)
            return session


class FakeSession:
    def __init__(self, db, settings):
        self.db = db
        self.settings = settings
        self.calls = []
        self.closed = False

    def set_isolation(self, kind):
        self.calls.append(("isolation", kind.name))

    @contextmanager
    def query(self, sql):
        self.calls.append(("query", sql))
        self._block(sql)
        result = self.db.queries.get(sql, (["?column?"], [(1,)]))
        if isinstance(result, Exception):
            raise result
        columns, rows = result
        yield list(columns), iter(rows)

    def update(self, sql):
        self.calls.append(("update", sql))
        self._block(sql)
        result = self.db.updates.get(sql, 0)
        if isinstance(result, Exception):
            raise result
        return result

    def commit(self):
        self.calls.append(("commit",))

    def rollback(self):
        self.calls.append(("rollback",))

    def close(self):
        self.closed = True

    def _block(self, sql):
        event = self.db.blockers.get(sql)
        if event is not None:
            event.wait(5)


@pytest.fixture
def settings():
    return Settings(url="postgresql://fake/db", user="u", password="p", sleep_time=0, query_timeout=5)


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def sink():
    return io.StringIO()