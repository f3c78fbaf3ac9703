# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

import logging

import pytest

from lock_inspector import diagnostics


@pytest.fixture
def fresh_logger():
    root = logging.getLogger("lock_inspector")
    saved = (list(root.handlers), root.level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    yield root
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    handlers, level = saved
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_file_logging_creation(monkeypatch, tmp_path, fresh_logger):
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("LOCK_INSPECTOR_LOG_DIR", str(log_dir))
    monkeypatch.setenv("LOCK_INSPECTOR_LOG_LEVEL", "debug")
    logger = diagnostics.get_logger("lock_inspector.test")
    logger.debug("test debug line")
    logger.info("info line")
    for handler in fresh_logger.handlers:
        handler.flush()
    content = (log_dir / diagnostics.LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "test debug line" in content
    assert "[lock_inspector.test] info line" in content


def test_set_level(monkeypatch, fresh_logger):
    monkeypatch.delenv("LOCK_INSPECTOR_LOG_DIR", raising=False)
    diagnostics.set_level("warning")
    assert fresh_logger.level == logging.WARNING
    with pytest.raises(ValueError):
        diagnostics.set_level("chatty")


def test_unknown_env_level_falls_back_to_info(monkeypatch, fresh_logger):
    monkeypatch.delenv("LOCK_INSPECTOR_LOG_DIR", raising=False)
    monkeypatch.setenv("LOCK_INSPECTOR_LOG_LEVEL", "chatty")
    diagnostics.get_logger("lock_inspector.test")
    assert fresh_logger.level == logging.INFO
