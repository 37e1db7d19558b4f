"""Note contracts."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from notequests.contracts.geo import LatLon


class NoteStatus(StrEnum):
    OPEN = "open"
    CLOSED = "closed"
    HIDDEN = "hidden"


class NoteUser(BaseModel):
    id: int
    name: str = ""


class NoteComment(BaseModel):
    user: NoteUser | None = None
    text: str = ""
    action: str = "commented"
    date: datetime | None = None


class Note(BaseModel):
    id: int
    position: LatLon
    comments: list[NoteComment] = Field(default_factory=list)
    status: NoteStatus = NoteStatus.OPEN
