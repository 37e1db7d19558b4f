"""Exception hierarchy for notequests."""

from __future__ import annotations


class NoteQuestsError(Exception):
    """Base exception for all notequests errors."""


class ConfigError(NoteQuestsError):
    """Configuration loading or validation failure."""


class TileRangeError(NoteQuestsError):
    """Tile rectangle or bounding box input is invalid."""


class SourceError(NoteQuestsError):
    """Remote note source failure."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StorageError(NoteQuestsError):
    """Local store read or write failure."""


class ReconcileError(NoteQuestsError):
    """Engine-level reconciliation failure."""
