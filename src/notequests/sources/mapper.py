"""Map OSM notes API GeoJSON payloads to note contracts."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from notequests.contracts.exceptions import SourceError
from notequests.contracts.geo import LatLon
from notequests.contracts.note import Note, NoteComment, NoteStatus, NoteUser

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.strptime(value, _DATE_FORMAT).replace(tzinfo=UTC)
    except ValueError as exc:
        raise SourceError(f"invalid note date: {value!r}") from exc


def comment_from_payload(payload: dict[str, Any]) -> NoteComment:
    user = None
    uid = payload.get("uid")
    if uid is not None:
        user = NoteUser(id=int(uid), name=payload.get("user") or "")
    return NoteComment(
        user=user,
        text=payload.get("text") or "",
        action=payload.get("action") or "commented",
        date=parse_date(payload.get("date")),
    )


def note_from_feature(feature: dict[str, Any]) -> Note:
    """Build a :class:`Note` from one GeoJSON feature of the notes API."""
    try:
        lon, lat = feature["geometry"]["coordinates"][:2]
        properties = feature["properties"]
        return Note(
            id=int(properties["id"]),
            position=LatLon(lat=float(lat), lon=float(lon)),
            comments=[comment_from_payload(c) for c in properties.get("comments") or []],
            status=NoteStatus(properties.get("status", NoteStatus.OPEN)),
        )
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        raise SourceError(f"malformed note feature: {exc}") from exc


def notes_from_collection(payload: Any) -> Iterator[Note]:
    if not isinstance(payload, dict) or payload.get("type") != "FeatureCollection":
        raise SourceError("notes response is not a GeoJSON FeatureCollection")
    for feature in payload.get("features") or []:
        yield note_from_feature(feature)
