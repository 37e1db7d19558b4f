"""Command-line interface for notequests."""

from __future__ import annotations

from notequests.cli.app import main as main
from notequests.cli.commands.reconcile import format_reconcile_summary as format_reconcile_summary
from notequests.cli.commands.reconcile import run_reconcile as run_reconcile
from notequests.cli.commands.status import run_status as run_status
from notequests.cli.parser import build_parser as build_parser

__all__ = ["build_parser", "format_reconcile_summary", "main", "run_reconcile", "run_status"]
