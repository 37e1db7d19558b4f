"""SDK composition root for notequests."""

from __future__ import annotations

from collections import Counter
from enum import Enum
from types import TracebackType
from typing import Final, Literal

import httpx

from notequests.contracts.config import NoteQuestsConfig
from notequests.contracts.geo import BoundingBox, TileRect
from notequests.contracts.quest import CreateNoteProposal, QuestStatus
from notequests.contracts.reconcile import ReconciliationResult
from notequests.contracts.source import RemoteNoteSource
from notequests.engine.classify import SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS
from notequests.engine.listener import QuestListener
from notequests.engine.progress import ReconcileProgress
from notequests.engine.reconciler import NOTE_QUEST_TYPE, TileReconciler
from notequests.persistence.memory import (
    InMemoryCreateProposalStore,
    InMemoryDownloadLedger,
    InMemoryNoteStore,
    InMemoryPreferenceStore,
    InMemoryQuestStore,
    MemoryDatabase,
)
from notequests.persistence.state_file import load_state, persist_state
from notequests.sources.factory import create_source
from notequests.tiles import bbox_to_tile_rect


class _ConfigDefault(Enum):
    TOKEN = "config"


#: Take the value from :class:`NoteQuestsConfig`. Pass ``user_id=None`` to hide nothing.
FROM_CONFIG: Final = _ConfigDefault.TOKEN


class NoteQuests:
    """notequests SDK public API."""

    def __init__(
        self,
        *,
        config: NoteQuestsConfig,
        source: RemoteNoteSource,
        db: MemoryDatabase | None = None,
        listener: QuestListener | None = None,
        progress: ReconcileProgress | None = None,
    ) -> None:
        self._config = config
        self._source = source
        self._db = db or MemoryDatabase()
        self._preferences = InMemoryPreferenceStore(self._db)
        self._quest_store = InMemoryQuestStore(self._db)
        self._proposal_store = InMemoryCreateProposalStore(self._db)
        self._ledger = InMemoryDownloadLedger(self._db)
        self._preferences.set_bool(SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS, config.show_notes_not_phrased_as_questions)
        self._reconciler = TileReconciler(
            source=source,
            note_store=InMemoryNoteStore(self._db),
            quest_store=self._quest_store,
            proposal_store=self._proposal_store,
            ledger=self._ledger,
            preferences=self._preferences,
            listener=listener,
            progress=progress,
            zoom=config.tile_zoom,
        )

    @classmethod
    def from_config(
        cls,
        config: NoteQuestsConfig,
        *,
        listener: QuestListener | None = None,
        progress: ReconcileProgress | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> NoteQuests:
        """Build an SDK instance with the OSM source and the state file named in *config*."""
        db = MemoryDatabase(load_state(state_path=config.state_path))
        source = create_source(config, transport=transport)
        return cls(config=config, source=source, db=db, listener=listener, progress=progress)

    def __enter__(self) -> NoteQuests:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        close = getattr(self._source, "close", None)
        if callable(close):
            close()

    @property
    def db(self) -> MemoryDatabase:
        return self._db

    def reconcile(
        self,
        tiles: TileRect,
        *,
        user_id: int | None | Literal[_ConfigDefault.TOKEN] = FROM_CONFIG,
        max_results: int | Literal[_ConfigDefault.TOKEN] = FROM_CONFIG,
    ) -> ReconciliationResult:
        return self._reconciler.reconcile(
            tiles,
            user_id=self._config.user_id if user_id is FROM_CONFIG else user_id,
            max_results=self._config.max_results if max_results is FROM_CONFIG else max_results,
        )

    def reconcile_bbox(
        self,
        bbox: BoundingBox,
        *,
        user_id: int | None | Literal[_ConfigDefault.TOKEN] = FROM_CONFIG,
        max_results: int | Literal[_ConfigDefault.TOKEN] = FROM_CONFIG,
    ) -> ReconciliationResult:
        tiles = bbox_to_tile_rect(bbox, self._config.tile_zoom)
        return self.reconcile(tiles, user_id=user_id, max_results=max_results)

    def is_downloaded(self, tiles: TileRect) -> bool:
        return self._ledger.is_downloaded(tiles, NOTE_QUEST_TYPE)

    def propose_note(self, proposal: CreateNoteProposal) -> None:
        self._proposal_store.add(proposal)

    def quest_counts(self) -> dict[QuestStatus, int]:
        with self._db.lock:
            counts = Counter(row.status for row in self._db.state.quests.values())
        return {status: counts.get(status, 0) for status in QuestStatus if status is not QuestStatus.NEW}

    def save(self) -> None:
        persist_state(state=self._db.state, state_path=self._config.state_path)
