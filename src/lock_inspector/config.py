# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""Connection and pacing settings read from a properties file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from .errors import ConfigError

ENV_PREFIX = "LOCK_INSPECTOR_"

# canonical key -> accepted spellings, first match wins
KEY_ALIASES: Dict[str, tuple[str, ...]] = {
    "db_url": ("db_url", "jdbc_url"),
    "db_user": ("db_user", "jdbc_user"),
    "db_pass": ("db_pass", "jdbc_pass"),
    "sleep_time": ("sleep_time",),
    "query_timeout": ("query_timeout",),
}


@dataclass(frozen=True)
class Settings:
    url: str
    user: Optional[str] = None
    password: Optional[str] = None
    sleep_time: float = 1.0
    query_timeout: float = 0.0

    @property
    def statement_timeout_ms(self) -> int:
        return int(self.query_timeout * 1000)


def load_properties(path: Path) -> Dict[str, str]:
    props: Dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read properties file {path}: {exc}") from exc
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(("#", "!")):
            continue
        cut = min((i for i in (line.find("="), line.find(":")) if i >= 0), default=-1)
        if cut < 0:
            continue
        props[line[:cut].strip()] = line[cut + 1 :].strip()
    return props


def _lookup(props: Mapping[str, str], env: Mapping[str, str], key: str) -> Optional[str]:
    env_value = env.get(ENV_PREFIX + key.upper())
    if env_value is not None:
        return env_value
    for alias in KEY_ALIASES[key]:
        if alias in props:
            return props[alias]
    return None


def _seconds(value: Optional[str], key: str, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        seconds = float(value)
    except ValueError:
        raise ConfigError(f"{key} must be a number of seconds, got {value!r}") from None
    if seconds < 0:
        raise ConfigError(f"{key} must not be negative, got {value!r}")
    return seconds


def normalize_url(url: str) -> str:
    # Property files written for JDBC drivers carry a "jdbc:" scheme prefix.
    if url.startswith("jdbc:"):
        return url[len("jdbc:") :]
    return url


def settings_from_properties(
    props: Mapping[str, str], env: Optional[Mapping[str, str]] = None
) -> Settings:
    env = os.environ if env is None else env
    url = _lookup(props, env, "db_url")
    if not url:
        raise ConfigError("db_url (or jdbc_url) is required")
    return Settings(
        url=normalize_url(url),
        user=_lookup(props, env, "db_user") or None,
        password=_lookup(props, env, "db_pass") or None,
        sleep_time=_seconds(_lookup(props, env, "sleep_time"), "sleep_time", 1.0),
        query_timeout=_seconds(_lookup(props, env, "query_timeout"), "query_timeout", 0.0),
    )


def load_settings(path: Path, env: Optional[Mapping[str, str]] = None) -> Settings:
    return settings_from_properties(load_properties(path), env)


__all__ = [
    "Settings",
    "load_properties",
    "load_settings",
    "normalize_url",
    "settings_from_properties",
]
