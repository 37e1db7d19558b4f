"""Reconciliation result contracts."""

from __future__ import annotations

from pydantic import BaseModel, Field

from notequests.contracts.geo import LatLon, TileRect
from notequests.contracts.quest import NoteQuest


class QuestDelta(BaseModel):
    created: list[NoteQuest] = Field(default_factory=list)
    removed: list[int] = Field(default_factory=list)


class ReconciliationResult(BaseModel):
    tiles: TileRect
    positions: set[LatLon] = Field(default_factory=set)
    delta: QuestDelta = Field(default_factory=QuestDelta)
    fetched: int = 0
    visible_count: int = 0
    hidden_count: int = 0

    @property
    def new_count(self) -> int:
        return len(self.delta.created)

    @property
    def closed_count(self) -> int:
        return len(self.delta.removed)
