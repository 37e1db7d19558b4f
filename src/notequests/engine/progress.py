"""Progress events emitted while one tile region is reconciled.

Separate from :class:`~notequests.engine.listener.QuestListener`: the listener
receives the quests themselves, progress only receives counts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum

from notequests.contracts.geo import TileRect
from notequests.contracts.quest import QuestStatus


class ReconcileStage(StrEnum):
    FETCH = "fetch"
    PERSIST = "persist"
    NOTIFY = "notify"


class ReconcileProgress(ABC):
    @abstractmethod
    def fetch_started(self, tiles: TileRect) -> None:
        """Notes for *tiles* are being requested; the count is unknown until the stream ends."""
        ...  # pragma: no cover

    @abstractmethod
    def note_fetched(self, status: QuestStatus) -> None:
        """One note arrived and was classified as *status*."""
        ...  # pragma: no cover

    @abstractmethod
    def quests_stored(self, visible: int, hidden: int) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def quests_notified(self, created: int, removed: int) -> None:
        """The listener has seen the delta; the region is done apart from bookkeeping."""
        ...  # pragma: no cover

    @abstractmethod
    def stage_failed(self, stage: ReconcileStage, error: BaseException) -> None:
        ...  # pragma: no cover


class NullReconcileProgress(ReconcileProgress):
    def fetch_started(self, tiles: TileRect) -> None:
        pass

    def note_fetched(self, status: QuestStatus) -> None:
        pass

    def quests_stored(self, visible: int, hidden: int) -> None:
        pass

    def quests_notified(self, created: int, removed: int) -> None:
        pass

    def stage_failed(self, stage: ReconcileStage, error: BaseException) -> None:
        pass
