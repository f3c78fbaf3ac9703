# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""Run a lock-inspection script against a database."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config import load_settings
from .diagnostics import get_logger, set_level
from .dispatcher import Dispatcher
from .errors import ConfigError, DispatchInterrupted, ScriptError
from .script import read_script

EXIT_INTERRUPTED = 130


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="lock-inspector", description=__doc__)
    parser.add_argument("properties", type=Path, help="Connection properties file")
    parser.add_argument("script", type=Path, help="Command script to run")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse the script and print each command without connecting",
    )
    parser.add_argument(
        "--log-level",
        help="Diagnostic log level (default: LOCK_INSPECTOR_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    print(f"Lock Inspector {__version__}")

    logger = get_logger()
    if args.log_level:
        try:
            set_level(args.log_level)
        except ValueError as exc:
            print(f"[lock-inspector] {exc}", file=sys.stderr)
            return 1

    try:
        script = read_script(args.script)
        if args.dry_run:
            for command in script:
                print(command)
            return 0
        settings = load_settings(args.properties)
    except (ConfigError, ScriptError) as exc:
        print(f"[lock-inspector] {exc}", file=sys.stderr)
        return 1

    logger.debug("loaded %d commands from %s", len(script), args.script)
    try:
        Dispatcher(settings).run(script)
    except DispatchInterrupted:
        logger.warning("run interrupted; all workers have been shut down")
        return EXIT_INTERRUPTED
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via callers
    raise SystemExit(main())
