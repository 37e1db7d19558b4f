"""Quest contracts."""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel

from notequests.contracts.geo import LatLon
from notequests.contracts.note import Note

# latin, semicolon (often typed instead of the greek mark), greek, arabic, armenian, ethiopic, full width
_QUESTION_MARKS = re.compile("[?;\u037e\u061f\u055e\u1367\uff1f]")


class QuestStatus(StrEnum):
    NEW = "NEW"
    VISIBLE = "VISIBLE"
    HIDDEN = "HIDDEN"
    INVISIBLE = "INVISIBLE"


class QuestGroup(StrEnum):
    OSM_NOTE = "OSM_NOTE"


class NoteQuest(BaseModel):
    """Task derived one-to-one from a note.

    ``id`` stays ``None`` until a store persists the quest.
    """

    id: int | None = None
    note: Note
    status: QuestStatus = QuestStatus.NEW

    @property
    def position(self) -> LatLon:
        return self.note.position

    def probably_contains_question(self) -> bool:
        """Whether the opening comment is phrased as a question.

        Some scripts (Thai, for one) use no question mark at all, so this
        under-reports for them.
        """
        if not self.note.comments:
            return False
        return _QUESTION_MARKS.search(self.note.comments[0].text) is not None


class CreateNoteProposal(BaseModel):
    id: int
    position: LatLon
    text: str = ""


class InsertOutcome(StrEnum):
    INSERTED = "INSERTED"
    ALREADY_EXISTS = "ALREADY_EXISTS"


class InsertResult(BaseModel):
    outcome: InsertOutcome
    quest_id: int
    note_id: int

    @property
    def inserted(self) -> bool:
        return self.outcome is InsertOutcome.INSERTED
