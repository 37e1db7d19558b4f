"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import logging
import sys

from notequests.cli.commands.reconcile import run_reconcile
from notequests.cli.commands.status import run_status
from notequests.cli.parser import build_parser
from notequests.contracts.exceptions import ConfigError, ReconcileError, SourceError, StorageError, TileRangeError


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "reconcile":
            run_reconcile(args)
        elif args.command == "status":
            run_status(args)
        return 0
    except (ConfigError, TileRangeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except SourceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except (StorageError, ReconcileError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
