"""Remote note source contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

from notequests.contracts.geo import BoundingBox
from notequests.contracts.note import Note


class RemoteNoteSource(ABC):
    @abstractmethod
    def fetch_all(self, bbox: BoundingBox, limit: int = 0, hide_closed_after: int = 0) -> Iterator[Note]:
        """Yield every note intersecting *bbox*.

        *limit* of ``0`` leaves the cap to the source. *hide_closed_after* is
        the number of days a closed note stays listed; ``0`` yields open notes only.
        The returned iterator is lazy, finite and cannot be restarted.
        """
        ...  # pragma: no cover
