"""Tile reconciliation engine for note quests."""

from __future__ import annotations

import logging

from notequests.contracts.exceptions import ReconcileError
from notequests.contracts.geo import BoundingBox, LatLon, TileRect
from notequests.contracts.note import Note
from notequests.contracts.quest import NoteQuest, QuestGroup, QuestStatus
from notequests.contracts.reconcile import QuestDelta, ReconciliationResult
from notequests.contracts.source import RemoteNoteSource
from notequests.contracts.stores import (
    CreateProposalStore,
    DownloadLedger,
    LocalNoteStore,
    LocalQuestStore,
    PreferenceStore,
)
from notequests.engine.classify import classify
from notequests.engine.listener import NullQuestListener, QuestListener
from notequests.engine.progress import NullReconcileProgress, ReconcileProgress, ReconcileStage
from notequests.tiles import QUEST_TILE_ZOOM, tile_rect_to_bbox

_LOG = logging.getLogger(__name__)

NOTE_QUEST_TYPE = "OsmNoteQuestType"


class _FetchedRegion:
    def __init__(self, baseline: dict[int, int]) -> None:
        self.baseline = baseline
        self.notes: list[Note] = []
        self.active: list[NoteQuest] = []
        self.hidden: list[NoteQuest] = []
        self.positions: set[LatLon] = set()


class TileReconciler:
    """Brings the stored note quests of one tile region in line with the server.

    Calls for overlapping regions must not run concurrently.
    """

    def __init__(
        self,
        *,
        source: RemoteNoteSource,
        note_store: LocalNoteStore,
        quest_store: LocalQuestStore,
        proposal_store: CreateProposalStore,
        ledger: DownloadLedger,
        preferences: PreferenceStore,
        listener: QuestListener | None = None,
        progress: ReconcileProgress | None = None,
        zoom: int = QUEST_TILE_ZOOM,
    ) -> None:
        self._source = source
        self._note_store = note_store
        self._quest_store = quest_store
        self._proposal_store = proposal_store
        self._ledger = ledger
        self._preferences = preferences
        self._listener: QuestListener = listener or NullQuestListener()
        self._progress: ReconcileProgress = progress or NullReconcileProgress()
        self._zoom = zoom

    def reconcile(self, tiles: TileRect, user_id: int | None = None, max_results: int = 0) -> ReconciliationResult:
        bbox = tile_rect_to_bbox(tiles, self._zoom)
        _LOG.debug("Reconciling tiles %s (bbox %s)", tiles.key, bbox.as_query())

        region = self._fetch(tiles, bbox, user_id, max_results)
        delta = self._persist_and_notify(region)

        positions = set(region.positions)
        for proposal in self._proposal_store.get_all(bbox):
            positions.add(proposal.position)

        self._ledger.mark_downloaded(tiles, NOTE_QUEST_TYPE)

        hidden_amount = len(region.hidden)
        visible_amount = len(region.active)
        _LOG.info(
            "Successfully added %d new and removed %d closed notes (%d of %d notes are hidden)",
            len(delta.created),
            len(delta.removed),
            hidden_amount,
            hidden_amount + visible_amount,
        )
        return ReconciliationResult(
            tiles=tiles,
            positions=positions,
            delta=delta,
            fetched=len(region.notes),
            visible_count=visible_amount,
            hidden_count=hidden_amount,
        )

    def _fetch(self, tiles: TileRect, bbox: BoundingBox, user_id: int | None, max_results: int) -> _FetchedRegion:
        region = _FetchedRegion(self._previous_quests_by_note_id(bbox))

        self._progress.fetch_started(tiles)
        try:
            for note in self._source.fetch_all(bbox, limit=max_results, hide_closed_after=0):
                quest = NoteQuest(note=note)
                quest.status = classify(quest, user_id=user_id, preferences=self._preferences)
                if quest.status is QuestStatus.VISIBLE:
                    region.active.append(quest)
                    # Still open, so not closed since the last run.
                    region.baseline.pop(note.id, None)
                else:
                    region.hidden.append(quest)

                region.notes.append(note)
                region.positions.add(note.position)
                self._progress.note_fetched(quest.status)
        except BaseException as exc:
            self._progress.stage_failed(ReconcileStage.FETCH, exc)
            raise
        return region

    def _persist_and_notify(self, region: _FetchedRegion) -> QuestDelta:
        try:
            self._note_store.put_all(region.notes)

            # Hidden and invisible quests are replaced wholesale and get fresh
            # ids. Listeners key changes by id, and a quest flipping between
            # hidden and visible is not the same open task carrying on.
            self._quest_store.replace_all(region.hidden)

            # Visible quests are diffed: a note that already has its quest keeps it.
            results = self._quest_store.add_all(region.active)
        except BaseException as exc:
            self._progress.stage_failed(ReconcileStage.PERSIST, exc)
            raise

        if len(results) != len(region.active):
            raise ReconcileError(f"quest store returned {len(results)} insert results for {len(region.active)} quests")
        self._progress.quests_stored(visible=len(region.active), hidden=len(region.hidden))

        created = [
            quest.model_copy(update={"id": result.quest_id})
            for quest, result in zip(region.active, results)
            if result.inserted
        ]
        # Hidden quests are always new rows, so nothing is reported for them
        # here. A quest that was visible before is reported as removed below.
        removed = list(region.baseline.values())

        try:
            self._listener.on_quests_created(created, QuestGroup.OSM_NOTE)
            if removed:
                self._listener.on_quests_removed(removed, QuestGroup.OSM_NOTE)
                self._quest_store.delete_all(removed)
                self._note_store.delete_unreferenced()
        except BaseException as exc:
            self._progress.stage_failed(ReconcileStage.NOTIFY, exc)
            raise
        self._progress.quests_notified(created=len(created), removed=len(removed))
        return QuestDelta(created=created, removed=removed)

    def _previous_quests_by_note_id(self, bbox: BoundingBox) -> dict[int, int]:
        result: dict[int, int] = {}
        for quest in self._quest_store.get_all(bbox):
            if quest.id is not None:
                result[quest.note.id] = quest.id
        return result
