"""Engine module exports."""

from notequests.engine.classify import SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS, classify
from notequests.engine.listener import NullQuestListener, QuestListener
from notequests.engine.progress import NullReconcileProgress, ReconcileProgress, ReconcileStage
from notequests.engine.reconciler import NOTE_QUEST_TYPE, TileReconciler

__all__ = [
    "NOTE_QUEST_TYPE",
    "SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS",
    "NullQuestListener",
    "NullReconcileProgress",
    "QuestListener",
    "ReconcileProgress",
    "ReconcileStage",
    "TileReconciler",
    "classify",
]
