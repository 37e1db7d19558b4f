"""Local storage contracts consumed by the reconciler."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from notequests.contracts.geo import BoundingBox, TileRect
from notequests.contracts.note import Note
from notequests.contracts.quest import CreateNoteProposal, InsertResult, NoteQuest, QuestStatus


class LocalNoteStore(ABC):
    @abstractmethod
    def put_all(self, notes: Iterable[Note]) -> None: ...  # pragma: no cover

    @abstractmethod
    def get(self, note_id: int) -> Note | None: ...  # pragma: no cover

    @abstractmethod
    def delete_unreferenced(self) -> int:
        """Delete notes no quest refers to and return how many were removed."""
        ...  # pragma: no cover


class LocalQuestStore(ABC):
    @abstractmethod
    def get_all(self, bbox: BoundingBox, status: QuestStatus | None = None) -> list[NoteQuest]: ...  # pragma: no cover

    @abstractmethod
    def replace_all(self, quests: Iterable[NoteQuest]) -> int:
        """Delete any stored quest for the same notes, then insert with fresh ids."""
        ...  # pragma: no cover

    @abstractmethod
    def add_all(self, quests: Iterable[NoteQuest]) -> list[InsertResult]:
        """Insert quests whose note has no matching stored quest.

        Returns one result per input quest, in input order.
        """
        ...  # pragma: no cover

    @abstractmethod
    def delete_all(self, quest_ids: Iterable[int]) -> int: ...  # pragma: no cover


class CreateProposalStore(ABC):
    @abstractmethod
    def get_all(self, bbox: BoundingBox) -> list[CreateNoteProposal]: ...  # pragma: no cover

    @abstractmethod
    def add(self, proposal: CreateNoteProposal) -> None: ...  # pragma: no cover


class DownloadLedger(ABC):
    @abstractmethod
    def mark_downloaded(self, tiles: TileRect, quest_type: str) -> None: ...  # pragma: no cover

    @abstractmethod
    def is_downloaded(self, tiles: TileRect, quest_type: str) -> bool: ...  # pragma: no cover


class PreferenceStore(ABC):
    @abstractmethod
    def get_bool(self, key: str, default: bool) -> bool: ...  # pragma: no cover
