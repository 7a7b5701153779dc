#!/usr/bin/env python3
"""
lispcore command-line interface

Usage:
    python -m lispcore repl
    python -m lispcore run <path>
    python -m lispcore serve [--host HOST] [--port PORT]

Examples:
    python -m lispcore run counter.lisp
    LISPCORE_SESSION_IDLE_TIMEOUT=600 python -m lispcore serve --port 9000
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from lispcore.config import Settings
from lispcore.debug_utils.pprint import format_number
from lispcore.errors import LispError
from lispcore.interpreter import Interpreter
from lispcore.server.repl_server import ReplServer
from lispcore.sessions.manager import SessionManager
from lispcore.sessions.reaper import IdleReaper

logger = logging.getLogger("lispcore.cli")

PROMPT = "lisp> "


def run_repl(stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    """Interactive loop over a single environment; errors are printed, not fatal."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    interp = Interpreter()
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return 0
        if not line.strip():
            continue
        try:
            stdout.write(format_number(interp.eval(line)) + "\n")
        except LispError as ex:
            stdout.write(f"{ex.kind.value}: {ex.message}\n")


def run_file(path: Path, stdout: TextIO | None = None) -> int:
    stdout = sys.stdout if stdout is None else stdout
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as ex:
        print(f"Error: cannot read {path}: {ex}", file=sys.stderr)
        return 2
    try:
        for result in Interpreter().eval_all(source):
            stdout.write(format_number(result) + "\n")
    except LispError as ex:
        print(f"{ex.kind.value}: {ex.message}", file=sys.stderr)
        return 1
    return 0


def run_server(settings: Settings) -> int:
    manager = SessionManager(idle_timeout=settings.idle_timeout, max_sessions=settings.max_sessions)
    server = ReplServer(manager, host=settings.host, port=settings.port)
    reaper = IdleReaper(manager, settings.reaper_interval)
    if settings.idle_timeout is not None:
        reaper.start()
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        reaper.stop()
        manager.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    try:
        settings = Settings.from_env()
    except ValueError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 2

    parser = argparse.ArgumentParser(
        prog="lispcore",
        description="Evaluate Lisp arithmetic expressions",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default from LISPCORE_LOG_LEVEL)",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("repl", help="Interactive read-eval-print loop")
    run_p = sub.add_parser("run", help="Evaluate every expression in a file")
    run_p.add_argument("path", type=Path)
    serve_p = sub.add_parser("serve", help="Serve sessions over JSON-lines TCP")
    serve_p.add_argument("--host", default=settings.host)
    serve_p.add_argument("--port", type=int, default=settings.port)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "repl":
        return run_repl()
    if args.command == "run":
        return run_file(args.path)
    return run_server(replace(settings, host=args.host, port=args.port, log_level=args.log_level))


if __name__ == "__main__":
    sys.exit(main())
