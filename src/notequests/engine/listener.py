"""Observer contract for quest lifecycle changes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection

from notequests.contracts.quest import NoteQuest, QuestGroup


class QuestListener(ABC):
    @abstractmethod
    def on_quests_created(self, quests: Collection[NoteQuest], group: QuestGroup) -> None:
        """Quests that became visible for the first time, with their persisted ids."""
        ...  # pragma: no cover

    @abstractmethod
    def on_quests_removed(self, quest_ids: Collection[int], group: QuestGroup) -> None:
        """Ids of quests that are gone from the region."""
        ...  # pragma: no cover


class NullQuestListener(QuestListener):
    def on_quests_created(self, quests: Collection[NoteQuest], group: QuestGroup) -> None:
        pass

    def on_quests_removed(self, quest_ids: Collection[int], group: QuestGroup) -> None:
        pass
