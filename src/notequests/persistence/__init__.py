"""Local persistence for notes, quests and bookkeeping."""

from notequests.persistence.memory import (
    InMemoryCreateProposalStore,
    InMemoryDownloadLedger,
    InMemoryNoteStore,
    InMemoryPreferenceStore,
    InMemoryQuestStore,
    MemoryDatabase,
)
from notequests.persistence.state import LocalState, QuestRow
from notequests.persistence.state_file import load_state, persist_state

__all__ = [
    "InMemoryCreateProposalStore",
    "InMemoryDownloadLedger",
    "InMemoryNoteStore",
    "InMemoryPreferenceStore",
    "InMemoryQuestStore",
    "LocalState",
    "MemoryDatabase",
    "QuestRow",
    "load_state",
    "persist_state",
]
