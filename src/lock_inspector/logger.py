# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""The observation log: one shared channel, one printing thread.

Workers and the dispatcher only ever enqueue complete lines; the Logger
thread is the sole writer to the sink, so lines never interleave.
"""

from __future__ import annotations

import queue
import sys
import threading
from typing import Optional, TextIO

_STOP = object()


class MessageLog:
    """Unbounded multi-producer channel of formatted log lines."""

    def __init__(self) -> None:
        self._queue: "queue.SimpleQueue[object]" = queue.SimpleQueue()

    def emit(self, message: str) -> None:
        self._queue.put(message)

    def get(self) -> object:
        return self._queue.get()

    def get_nowait(self) -> object:
        return self._queue.get_nowait()

    def signal_stop(self) -> None:
        self._queue.put(_STOP)


class Logger:
    def __init__(self, channel: MessageLog, sink: Optional[TextIO] = None) -> None:
        self._channel = channel
        self._sink = sink if sink is not None else sys.stdout
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, name="logger", daemon=True)
            self._thread.start()

    def stop(self) -> None:
        """End the consumer thread, then print whatever is still buffered."""
        if self._thread is not None:
            self._channel.signal_stop()
            self._thread.join()
        while True:
            try:
                message = self._channel.get_nowait()
            except queue.Empty:
                break
            if message is not _STOP:
                self._write(message)
        self._sink.flush()

    def _write(self, message: object) -> None:
        self._sink.write(f"{message}\n")

    def _run(self) -> None:
        while True:
            message = self._channel.get()
            if message is _STOP:
                break
            self._write(message)
            self._sink.flush()


__all__ = ["Logger", "MessageLog"]
