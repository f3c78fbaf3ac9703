# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""Route script commands to workers at a fixed pace.

The dispatcher owns the worker map for the length of one run. Workers are
created the first time their id appears and always receive a synthesized
EXIT during shutdown, which runs even when the loop itself fails. The log
printer is stopped last so trailing worker output is not lost.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional, TextIO

from .command import Command, CommandType
from .config import Settings
from .db import ConnectionProvider, connect
from .diagnostics import get_logger
from .errors import DispatchInterrupted
from .logger import Logger, MessageLog
from .script import Script
from .worker import Worker

logger = get_logger(__name__)


class Dispatcher:
    def __init__(
        self,
        settings: Settings,
        provider: ConnectionProvider = connect,
        sink: Optional[TextIO] = None,
    ) -> None:
        self._settings = settings
        self._provider = provider
        self._sink = sink
        self._interrupted = threading.Event()

    def interrupt(self) -> None:
        """Abort the run in progress at its next pause."""
        self._interrupted.set()

    def run(self, script: Script) -> Dict[int, Worker]:
        log = MessageLog()
        printer = Logger(log, self._sink)
        workers: Dict[int, Worker] = {}
        self._interrupted.clear()
        printer.start()
        try:
            for command in script:
                if command.kind is CommandType.SLEEP:
                    log.emit(str(command))
                    self._pause(command.sleep_seconds)
                    log.emit(f"({command.kind.name})")
                else:
                    worker = workers.get(command.worker_id)
                    if worker is None:
                        worker = Worker(command.worker_id, self._settings, log, self._provider)
                        workers[command.worker_id] = worker
                        worker.start()
                    if not worker.offer(command):
                        logger.warning(
                            "worker %d has stopped; dropped %s", command.worker_id, command
                        )
                self._pause(self._settings.sleep_time)
        except KeyboardInterrupt as exc:
            raise DispatchInterrupted("dispatch interrupted") from exc
        finally:
            try:
                self._shutdown(workers)
            finally:
                printer.stop()
        return workers

    def _pause(self, seconds: float) -> None:
        if seconds > 0:
            if self._interrupted.wait(seconds):
                raise DispatchInterrupted("dispatch interrupted")
        elif self._interrupted.is_set():
            raise DispatchInterrupted("dispatch interrupted")

    def _shutdown(self, workers: Dict[int, Worker]) -> None:
        for worker_id, worker in workers.items():
            if not worker.offer(Command.exit(worker_id)):
                logger.warning("worker %d has already stopped; EXIT not delivered", worker_id)
        for worker in workers.values():
            worker.join()
        logger.debug("all %d workers stopped", len(workers))


def run_script(
    settings: Settings,
    script: Script,
    provider: ConnectionProvider = connect,
    sink: Optional[TextIO] = None,
) -> Dict[int, Worker]:
    return Dispatcher(settings, provider, sink).run(script)


__all__ = ["Dispatcher", "run_script"]
