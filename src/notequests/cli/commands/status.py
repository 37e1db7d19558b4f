"""Status command: stored quest counts."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table

from notequests.config import load_config
from notequests.contracts.quest import QuestStatus
from notequests.persistence.state_file import load_state


def build_status_table(counts: dict[QuestStatus, int], *, notes: int, proposals: int) -> Table:
    table = Table(title="notequests - local state")
    table.add_column("Kind")
    table.add_column("Count", justify="right")
    for status, count in counts.items():
        table.add_row(f"{status.value.lower()} quests", str(count))
    table.add_row("notes", str(notes))
    table.add_row("note proposals", str(proposals))
    return table


def run_status(args: argparse.Namespace, *, console: Console | None = None) -> dict[QuestStatus, int]:
    config = load_config(args.config)
    state = load_state(state_path=config.state_path)

    counts = {status: 0 for status in QuestStatus if status is not QuestStatus.NEW}
    for row in state.quests.values():
        counts[row.status] = counts.get(row.status, 0) + 1

    (console or Console()).print(build_status_table(counts, notes=len(state.notes), proposals=len(state.proposals)))
    return counts


__all__ = ["build_status_table", "run_status"]
