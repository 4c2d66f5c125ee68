from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from cashflow.config import get_settings
from cashflow.logging import configure_logging, get_logger
from cashflow.services.ledger import LedgerError, build_ledger
from cashflow.services.report import format_settlement_table
from cashflow.services.settlement import settle
from cashflow.utils.parse import parse_session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cashflow",
        description="Settle group debts over shared payment channels.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="Session file in the console input format (default: stdin)",
    )
    return parser


def _read_input(path: str, stdin: TextIO) -> str:
    if path == "-":
        return stdin.read()
    return Path(path).read_text(encoding="utf-8")


def run(argv: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    args = build_parser().parse_args(list(argv))
    settings = get_settings()
    log = get_logger(__name__)
    try:
        session = parse_session(_read_input(args.path, stdin))
        ledger = build_ledger(session.participants, session.debts, treasurer=settings.treasurer)
    except LedgerError as exc:
        log.warning("cli.failed", error=str(exc))
        print(f"Error: {exc}", file=stderr)
        return 1

    settlements = settle(ledger)
    print(format_settlement_table(settlements), file=stdout)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)
    return run(sys.argv[1:] if argv is None else argv, sys.stdin, sys.stdout, sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
