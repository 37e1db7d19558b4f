"""Public API surface for notequests."""

__version__ = "0.3.0"

from notequests.config import load_config
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
from notequests.contracts.quest import CreateNoteProposal, InsertOutcome, InsertResult, NoteQuest, QuestGroup, QuestStatus
from notequests.contracts.reconcile import QuestDelta, ReconciliationResult
from notequests.contracts.source import RemoteNoteSource
from notequests.contracts.stores import (
    CreateProposalStore,
    DownloadLedger,
    LocalNoteStore,
    LocalQuestStore,
    PreferenceStore,
)
from notequests.engine import NullQuestListener, QuestListener, ReconcileProgress, ReconcileStage, TileReconciler
from notequests.sdk import FROM_CONFIG, NoteQuests
from notequests.sources import OsmNotesSource, create_source
from notequests.tiles import QUEST_TILE_ZOOM, bbox_to_tile_rect, tile_rect_to_bbox

__all__ = [
    "FROM_CONFIG",
    "QUEST_TILE_ZOOM",
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
    "NoteQuests",
    "NoteQuestsConfig",
    "NoteQuestsError",
    "NoteStatus",
    "NoteUser",
    "NullQuestListener",
    "OsmNotesSource",
    "PreferenceStore",
    "QuestDelta",
    "QuestGroup",
    "QuestListener",
    "ReconcileError",
    "ReconcileProgress",
    "ReconcileStage",
    "ReconciliationResult",
    "RemoteNoteSource",
    "SourceError",
    "StorageError",
    "TileRangeError",
    "TileReconciler",
    "TileRect",
    "__version__",
    "bbox_to_tile_rect",
    "create_source",
    "load_config",
    "tile_rect_to_bbox",
]
