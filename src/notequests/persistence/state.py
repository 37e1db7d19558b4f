"""Serializable snapshot of everything stored locally."""

from __future__ import annotations

from pydantic import BaseModel, Field

from notequests.contracts.note import Note
from notequests.contracts.quest import CreateNoteProposal, QuestStatus


class QuestRow(BaseModel):
    id: int
    note_id: int
    status: QuestStatus


class LocalState(BaseModel):
    notes: dict[int, Note] = Field(default_factory=dict)
    quests: dict[int, QuestRow] = Field(default_factory=dict)
    proposals: dict[int, CreateNoteProposal] = Field(default_factory=dict)
    downloaded: dict[str, set[str]] = Field(default_factory=dict)
    preferences: dict[str, bool] = Field(default_factory=dict)
    next_quest_id: int = Field(default=1, ge=1)

    def allocate_quest_id(self) -> int:
        quest_id = self.next_quest_id
        self.next_quest_id += 1
        return quest_id
