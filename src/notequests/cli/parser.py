"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("notequests")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="notequests")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile_parser = subparsers.add_parser("reconcile", help="Download notes for a region and update local quests")
    reconcile_parser.add_argument("--config", default="./notequests.json", help="Path to notequests.json")
    region = reconcile_parser.add_mutually_exclusive_group(required=True)
    region.add_argument("--tiles", help="Tile range LEFT,TOP,RIGHT,BOTTOM at the configured zoom")
    region.add_argument("--bbox", help="Bounding box MINLON,MINLAT,MAXLON,MAXLAT")
    reconcile_parser.add_argument("--user-id", type=int, default=None, help="Hide notes this user commented on")
    reconcile_parser.add_argument("--max", type=int, default=None, dest="max_results", help="Maximum notes to fetch")
    reconcile_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    status_parser = subparsers.add_parser("status", help="Show stored quest counts")
    status_parser.add_argument("--config", default="./notequests.json", help="Path to notequests.json")
    status_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]
