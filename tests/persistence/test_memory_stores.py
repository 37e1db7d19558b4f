from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from notequests.contracts.exceptions import StorageError
from notequests.contracts.geo import TileRect
from notequests.contracts.quest import CreateNoteProposal, InsertOutcome, NoteQuest, QuestStatus
from notequests.contracts.reconcile import ReconciliationResult
from notequests.engine.reconciler import TileReconciler
from notequests.persistence.memory import (
    InMemoryCreateProposalStore,
    InMemoryDownloadLedger,
    InMemoryNoteStore,
    InMemoryPreferenceStore,
    InMemoryQuestStore,
    MemoryDatabase,
)
from notequests.persistence.state import LocalState, QuestRow
from notequests.tiles import tile_rect_to_bbox
from tests.fakes.listener import RecordingListener
from tests.fakes.notes import OUTSIDE_REGION, REGION, make_note, position
from tests.fakes.source import FakeNoteSource

BBOX = tile_rect_to_bbox(REGION)


@pytest.fixture
def db() -> MemoryDatabase:
    return MemoryDatabase()


@pytest.fixture
def quests(db: MemoryDatabase) -> InMemoryQuestStore:
    return InMemoryQuestStore(db)


def _visible(note_id: int) -> NoteQuest:
    return NoteQuest(note=make_note(note_id), status=QuestStatus.VISIBLE)


def test_add_all_inserts_and_assigns_ids(quests: InMemoryQuestStore) -> None:
    results = quests.add_all([_visible(1), _visible(2)])

    assert [r.outcome for r in results] == [InsertOutcome.INSERTED, InsertOutcome.INSERTED]
    assert [r.note_id for r in results] == [1, 2]
    assert results[0].quest_id != results[1].quest_id


def test_add_all_keeps_existing_quest_with_same_status(quests: InMemoryQuestStore) -> None:
    first = quests.add_all([_visible(1)])[0]

    again = quests.add_all([_visible(1)])[0]

    assert again.outcome is InsertOutcome.ALREADY_EXISTS
    assert again.quest_id == first.quest_id
    assert len(quests.get_all(BBOX)) == 1


def test_add_all_replaces_quest_with_other_status(quests: InMemoryQuestStore) -> None:
    quests.replace_all([NoteQuest(note=make_note(1), status=QuestStatus.INVISIBLE)])
    old_id = quests.get_all(BBOX)[0].id

    result = quests.add_all([_visible(1)])[0]

    assert result.outcome is InsertOutcome.INSERTED
    assert result.quest_id != old_id
    stored = quests.get_all(BBOX)
    assert [(q.id, q.status) for q in stored] == [(result.quest_id, QuestStatus.VISIBLE)]


def test_add_all_does_not_mutate_input(quests: InMemoryQuestStore) -> None:
    quest = _visible(1)

    quests.add_all([quest])

    assert quest.id is None


def test_replace_all_assigns_fresh_ids(quests: InMemoryQuestStore) -> None:
    hidden = NoteQuest(note=make_note(1), status=QuestStatus.HIDDEN)
    assert quests.replace_all([hidden]) == 1
    first_id = quests.get_all(BBOX)[0].id

    assert quests.replace_all([hidden]) == 1

    stored = quests.get_all(BBOX)
    assert len(stored) == 1
    assert stored[0].id != first_id


def test_get_all_filters_by_bbox_and_status(quests: InMemoryQuestStore) -> None:
    outside = make_note(3, at=position(1, tiles=OUTSIDE_REGION))
    quests.add_all([_visible(1), NoteQuest(note=outside, status=QuestStatus.VISIBLE)])
    quests.replace_all([NoteQuest(note=make_note(2), status=QuestStatus.HIDDEN)])

    assert sorted(q.note.id for q in quests.get_all(BBOX)) == [1, 2]
    assert [q.note.id for q in quests.get_all(BBOX, QuestStatus.HIDDEN)] == [2]


def test_get_all_reports_dangling_note(db: MemoryDatabase, quests: InMemoryQuestStore) -> None:
    db.state.quests[1] = QuestRow(id=1, note_id=99, status=QuestStatus.VISIBLE)

    with pytest.raises(StorageError, match="missing note 99"):
        quests.get_all(BBOX)


def test_delete_all_counts_existing_rows(quests: InMemoryQuestStore) -> None:
    ids = [r.quest_id for r in quests.add_all([_visible(1), _visible(2)])]

    assert quests.delete_all([ids[0], 12345]) == 1
    assert [q.note.id for q in quests.get_all(BBOX)] == [2]


def test_delete_unreferenced_notes(db: MemoryDatabase, quests: InMemoryQuestStore) -> None:
    notes = InMemoryNoteStore(db)
    notes.put_all([make_note(1), make_note(2)])
    quests.add_all([_visible(1)])

    assert notes.delete_unreferenced() == 1
    assert notes.get(1) is not None
    assert notes.get(2) is None


def test_put_all_overwrites_same_note(db: MemoryDatabase) -> None:
    notes = InMemoryNoteStore(db)
    notes.put_all([make_note(1, "Old text?")])
    notes.put_all([make_note(1, "New text?")])

    stored = notes.get(1)
    assert stored is not None
    assert stored.comments[0].text == "New text?"


def test_proposals_by_bbox(db: MemoryDatabase) -> None:
    store = InMemoryCreateProposalStore(db)
    inside = CreateNoteProposal(id=1, position=position(4))
    store.add(inside)
    store.add(CreateNoteProposal(id=2, position=position(4, tiles=OUTSIDE_REGION)))

    assert store.get_all(BBOX) == [inside]


def test_ledger_tracks_region_and_quest_type(db: MemoryDatabase) -> None:
    ledger = InMemoryDownloadLedger(db)
    ledger.mark_downloaded(REGION, "OsmNoteQuestType")
    ledger.mark_downloaded(REGION, "OsmNoteQuestType")

    assert ledger.is_downloaded(REGION, "OsmNoteQuestType")
    assert not ledger.is_downloaded(REGION, "OtherQuestType")
    assert not ledger.is_downloaded(OUTSIDE_REGION, "OsmNoteQuestType")
    assert db.state.downloaded == {REGION.key: {"OsmNoteQuestType"}}


def test_preferences_default_and_set(db: MemoryDatabase) -> None:
    prefs = InMemoryPreferenceStore(db)

    assert prefs.get_bool("flag", False) is False
    assert prefs.get_bool("flag", True) is True
    prefs.set_bool("flag", True)
    assert prefs.get_bool("flag", False) is True


def _index_matches_rows(db: MemoryDatabase) -> bool:
    return db.quest_ids_by_note == {row.note_id: row.id for row in db.state.quests.values()}


def test_note_index_follows_every_bulk_operation(db: MemoryDatabase, quests: InMemoryQuestStore) -> None:
    quests.replace_all([NoteQuest(note=make_note(n), status=QuestStatus.HIDDEN) for n in (1, 2, 3)])
    assert _index_matches_rows(db)

    quests.add_all([_visible(2), _visible(4)])
    assert _index_matches_rows(db)
    assert db.quest_ids_by_note[2] == quests.get_all(BBOX, QuestStatus.VISIBLE)[0].id

    quests.replace_all([NoteQuest(note=make_note(4), status=QuestStatus.INVISIBLE)])
    assert _index_matches_rows(db)

    quests.delete_all([db.quest_ids_by_note[1], db.quest_ids_by_note[4]])
    assert _index_matches_rows(db)
    assert sorted(db.quest_ids_by_note) == [2, 3]


def test_note_index_is_rebuilt_from_loaded_state() -> None:
    state = LocalState(
        notes={5: make_note(5)},
        quests={8: QuestRow(id=8, note_id=5, status=QuestStatus.VISIBLE)},
        next_quest_id=9,
    )
    db = MemoryDatabase(state)

    result = InMemoryQuestStore(db).add_all([_visible(5)])[0]

    assert db.quest_ids_by_note == {5: 8}
    assert result.outcome is InsertOutcome.ALREADY_EXISTS
    assert result.quest_id == 8


def test_disjoint_regions_reconcile_concurrently_over_one_database(db: MemoryDatabase) -> None:
    regions = {
        REGION: [make_note(n, at=position(n % 98)) for n in range(1, 301)],
        OUTSIDE_REGION: [make_note(n, at=position(n % 98, tiles=OUTSIDE_REGION)) for n in range(1001, 1301)],
    }
    listeners = {tiles: RecordingListener() for tiles in regions}

    def run(tiles: TileRect) -> ReconciliationResult:
        reconciler = TileReconciler(
            source=FakeNoteSource(regions[tiles]),
            note_store=InMemoryNoteStore(db),
            quest_store=InMemoryQuestStore(db),
            proposal_store=InMemoryCreateProposalStore(db),
            ledger=InMemoryDownloadLedger(db),
            preferences=InMemoryPreferenceStore(db),
            listener=listeners[tiles],
        )
        return reconciler.reconcile(tiles)

    with ThreadPoolExecutor(max_workers=2) as pool:
        results = dict(zip(regions, pool.map(run, regions)))

    assert len(db.state.quests) == 600
    assert len({row.id for row in db.state.quests.values()}) == 600
    assert _index_matches_rows(db)
    for tiles, notes in regions.items():
        expected = sorted(note.id for note in notes)
        assert sorted(listeners[tiles].created_note_ids) == expected
        assert listeners[tiles].removed == []
        assert sorted(q.note.id for q in results[tiles].delta.created) == expected
        assert sorted(q.note.id for q in InMemoryQuestStore(db).get_all(tile_rect_to_bbox(tiles))) == expected
