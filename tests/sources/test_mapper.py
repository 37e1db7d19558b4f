from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from notequests.contracts.exceptions import SourceError
from notequests.contracts.note import NoteStatus
from notequests.sources.mapper import note_from_feature, notes_from_collection, parse_date


def _feature(**properties: Any) -> dict[str, Any]:
    props: dict[str, Any] = {
        "id": 1234,
        "status": "open",
        "comments": [
            {
                "date": "2024-05-01 10:15:00 UTC",
                "uid": 42,
                "user": "mapper",
                "action": "opened",
                "text": "Is this cafe still open?",
            },
            {"date": "2024-05-02 08:00:00 UTC", "action": "commented", "text": "anonymous reply"},
        ],
    }
    props.update(properties)
    return {"type": "Feature", "geometry": {"type": "Point", "coordinates": [13.4, 52.5]}, "properties": props}


def test_note_from_feature_maps_position_and_comments() -> None:
    note = note_from_feature(_feature())

    assert note.id == 1234
    assert (note.position.lat, note.position.lon) == (52.5, 13.4)
    assert note.status is NoteStatus.OPEN
    assert note.comments[0].user is not None
    assert note.comments[0].user.id == 42
    assert note.comments[0].user.name == "mapper"
    assert note.comments[0].date == datetime(2024, 5, 1, 10, 15, tzinfo=UTC)
    assert note.comments[1].user is None
    assert note.comments[1].text == "anonymous reply"


def test_note_without_comments() -> None:
    assert note_from_feature(_feature(comments=[])).comments == []


@pytest.mark.parametrize(
    "feature",
    [
        {"type": "Feature", "properties": {"id": 1}},
        {"type": "Feature", "geometry": {"coordinates": [13.4, 52.5]}, "properties": {}},
        {"type": "Feature", "geometry": {"coordinates": [13.4, 152.5]}, "properties": {"id": 1}},
    ],
)
def test_malformed_feature_raises(feature: dict[str, Any]) -> None:
    with pytest.raises(SourceError, match="malformed note feature"):
        note_from_feature(feature)


def test_parse_date() -> None:
    assert parse_date(None) is None
    with pytest.raises(SourceError, match="invalid note date"):
        parse_date("yesterday")


def test_notes_from_collection() -> None:
    payload = {"type": "FeatureCollection", "features": [_feature(id=1), _feature(id=2)]}

    assert [note.id for note in notes_from_collection(payload)] == [1, 2]


def test_notes_from_non_collection_raises() -> None:
    with pytest.raises(SourceError, match="FeatureCollection"):
        list(notes_from_collection({"type": "Feature"}))
