"""Public contracts for notequests."""

from notequests.contracts.config import NoteQuestsConfig
from notequests.contracts.exceptions import (
    ConfigError,
    NoteQuestsError,
    ReconcileError,
    SourceError,
    StorageError,
    TileRangeError,
)
from notequests.contracts.geo import BoundingBox, LatLon, TileRect
from notequests.contracts.note import Note, NoteComment, NoteStatus, NoteUser
from notequests.contracts.quest import (
    CreateNoteProposal,
    InsertOutcome,
    InsertResult,
    NoteQuest,
    QuestGroup,
    QuestStatus,
)
from notequests.contracts.reconcile import QuestDelta, ReconciliationResult
from notequests.contracts.source import RemoteNoteSource
from notequests.contracts.stores import (
    CreateProposalStore,
    DownloadLedger,
    LocalNoteStore,
    LocalQuestStore,
    PreferenceStore,
)

__all__ = [
    "BoundingBox",
    "ConfigError",
    "CreateNoteProposal",
    "CreateProposalStore",
    "DownloadLedger",
    "InsertOutcome",
    "InsertResult",
    "LatLon",
    "LocalNoteStore",
    "LocalQuestStore",
    "Note",
    "NoteComment",
    "NoteQuest",
    "NoteQuestsConfig",
    "NoteQuestsError",
    "NoteStatus",
    "NoteUser",
    "PreferenceStore",
    "QuestDelta",
    "QuestGroup",
    "QuestStatus",
    "ReconcileError",
    "ReconciliationResult",
    "RemoteNoteSource",
    "SourceError",
    "StorageError",
    "TileRangeError",
    "TileRect",
]
