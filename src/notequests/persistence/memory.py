"""In-memory stores backed by a shared :class:`LocalState`.

Each bulk operation holds the database lock for its whole duration, so
reconciliations of non-overlapping regions can share one database.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from notequests.contracts.exceptions import StorageError
from notequests.contracts.geo import BoundingBox, TileRect
from notequests.contracts.note import Note
from notequests.contracts.quest import CreateNoteProposal, InsertOutcome, InsertResult, NoteQuest, QuestStatus
from notequests.contracts.stores import (
    CreateProposalStore,
    DownloadLedger,
    LocalNoteStore,
    LocalQuestStore,
    PreferenceStore,
)
from notequests.persistence.state import LocalState, QuestRow


class MemoryDatabase:
    def __init__(self, state: LocalState | None = None) -> None:
        self.state = state or LocalState()
        self.lock = threading.RLock()
        # note id -> quest id; rebuilt on load, maintained by InMemoryQuestStore
        self.quest_ids_by_note: dict[int, int] = {row.note_id: row.id for row in self.state.quests.values()}


class InMemoryNoteStore(LocalNoteStore):
    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db

    def put_all(self, notes: Iterable[Note]) -> None:
        with self._db.lock:
            for note in notes:
                self._db.state.notes[note.id] = note

    def get(self, note_id: int) -> Note | None:
        with self._db.lock:
            return self._db.state.notes.get(note_id)

    def delete_unreferenced(self) -> int:
        with self._db.lock:
            referenced = {row.note_id for row in self._db.state.quests.values()}
            orphans = [note_id for note_id in self._db.state.notes if note_id not in referenced]
            for note_id in orphans:
                del self._db.state.notes[note_id]
            return len(orphans)


class InMemoryQuestStore(LocalQuestStore):
    """Quest rows keyed by id; a note has at most one quest row."""

    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db

    def get_all(self, bbox: BoundingBox, status: QuestStatus | None = None) -> list[NoteQuest]:
        quests: list[NoteQuest] = []
        with self._db.lock:
            for row in sorted(self._db.state.quests.values(), key=lambda r: r.id):
                if status is not None and row.status is not status:
                    continue
                note = self._db.state.notes.get(row.note_id)
                if note is None:
                    raise StorageError(f"quest {row.id} references missing note {row.note_id}")
                if bbox.contains(note.position):
                    quests.append(NoteQuest(id=row.id, note=note, status=row.status))
        return quests

    def replace_all(self, quests: Iterable[NoteQuest]) -> int:
        count = 0
        with self._db.lock:
            for quest in quests:
                self._drop_note_quest(quest.note.id)
                self._insert(quest)
                count += 1
        return count

    def add_all(self, quests: Iterable[NoteQuest]) -> list[InsertResult]:
        results: list[InsertResult] = []
        with self._db.lock:
            for quest in quests:
                existing = self._find_by_note(quest.note.id)
                if existing is not None and existing.status is quest.status:
                    results.append(
                        InsertResult(outcome=InsertOutcome.ALREADY_EXISTS, quest_id=existing.id, note_id=quest.note.id)
                    )
                    continue
                # A stored row with another status is a different task for the same note.
                if existing is not None:
                    self._drop_row(existing)
                quest_id = self._insert(quest)
                results.append(InsertResult(outcome=InsertOutcome.INSERTED, quest_id=quest_id, note_id=quest.note.id))
        return results

    def delete_all(self, quest_ids: Iterable[int]) -> int:
        count = 0
        with self._db.lock:
            for quest_id in quest_ids:
                row = self._db.state.quests.get(quest_id)
                if row is not None:
                    self._drop_row(row)
                    count += 1
        return count

    def _insert(self, quest: NoteQuest) -> int:
        state = self._db.state
        quest_id = state.allocate_quest_id()
        state.notes.setdefault(quest.note.id, quest.note)
        state.quests[quest_id] = QuestRow(id=quest_id, note_id=quest.note.id, status=quest.status)
        self._db.quest_ids_by_note[quest.note.id] = quest_id
        return quest_id

    def _find_by_note(self, note_id: int) -> QuestRow | None:
        quest_id = self._db.quest_ids_by_note.get(note_id)
        if quest_id is None:
            return None
        return self._db.state.quests.get(quest_id)

    def _drop_note_quest(self, note_id: int) -> None:
        existing = self._find_by_note(note_id)
        if existing is not None:
            self._drop_row(existing)

    def _drop_row(self, row: QuestRow) -> None:
        del self._db.state.quests[row.id]
        if self._db.quest_ids_by_note.get(row.note_id) == row.id:
            del self._db.quest_ids_by_note[row.note_id]


class InMemoryCreateProposalStore(CreateProposalStore):
    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db

    def get_all(self, bbox: BoundingBox) -> list[CreateNoteProposal]:
        with self._db.lock:
            return [p for p in self._db.state.proposals.values() if bbox.contains(p.position)]

    def add(self, proposal: CreateNoteProposal) -> None:
        with self._db.lock:
            self._db.state.proposals[proposal.id] = proposal


class InMemoryDownloadLedger(DownloadLedger):
    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db

    def mark_downloaded(self, tiles: TileRect, quest_type: str) -> None:
        with self._db.lock:
            self._db.state.downloaded.setdefault(tiles.key, set()).add(quest_type)

    def is_downloaded(self, tiles: TileRect, quest_type: str) -> bool:
        with self._db.lock:
            return quest_type in self._db.state.downloaded.get(tiles.key, set())


class InMemoryPreferenceStore(PreferenceStore):
    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db

    def get_bool(self, key: str, default: bool) -> bool:
        with self._db.lock:
            return self._db.state.preferences.get(key, default)

    def set_bool(self, key: str, value: bool) -> None:
        with self._db.lock:
            self._db.state.preferences[key] = value
