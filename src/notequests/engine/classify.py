"""Per-note quest classification."""

from __future__ import annotations

from notequests.contracts.note import Note
from notequests.contracts.quest import NoteQuest, QuestStatus
from notequests.contracts.stores import PreferenceStore

SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS = "display.nonQuestionNotes"


def contains_comment_from_user(note: Note, user_id: int | None) -> bool:
    if user_id is None:
        return False
    return any(comment.user is not None and comment.user.id == user_id for comment in note.comments)


def is_hidden(note: Note, user_id: int | None) -> bool:
    # The user may also have commented from outside this application.
    return contains_comment_from_user(note, user_id)


def is_invisible(quest: NoteQuest, preferences: PreferenceStore) -> bool:
    # Many notes report problems that no on-site survey can resolve. A note
    # phrased as a question expects an answer, so only those are shown.
    show_non_question_notes = preferences.get_bool(SHOW_NOTES_NOT_PHRASED_AS_QUESTIONS, False)
    return not (quest.probably_contains_question() or show_non_question_notes)


def classify(quest: NoteQuest, *, user_id: int | None, preferences: PreferenceStore) -> QuestStatus:
    """Return the status *quest* gets in this run.

    Hidden quests are dead: preferences never bring them back. Invisible
    quests turn visible again once the user asks for non-question notes.
    """
    if is_hidden(quest.note, user_id):
        return QuestStatus.HIDDEN
    if is_invisible(quest, preferences):
        return QuestStatus.INVISIBLE
    return QuestStatus.VISIBLE
