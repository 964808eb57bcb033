from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from expense_settlement.config import settings
from expense_settlement.logging import configure_logging
from expense_settlement.services.breakdown import compute_results

logger = logging.getLogger(__name__)


def _load_document(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with Path(source).open(encoding="utf-8") as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expense-settlement",
        description="Compute balances and settling transfers for shared expenses.",
    )
    parser.add_argument(
        "input",
        help='JSON document {"participants": [...], "expenses": [...]}, or - for stdin',
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="exit with status 1 when any expense was skipped or flagged",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default 2)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level)

    try:
        doc = _load_document(args.input)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Cannot read %s: %s", args.input, e)
        return 2
    if not isinstance(doc, dict):
        logger.error("Input must be a JSON object with participants and expenses.")
        return 2

    try:
        results = compute_results(doc.get("participants") or [], doc.get("expenses") or [])
    except ValueError as e:
        logger.error("Invalid input: %s", e)
        return 2

    json.dump(results.to_dict(), sys.stdout, indent=args.indent)
    sys.stdout.write("\n")

    if args.strict and results.issues:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
