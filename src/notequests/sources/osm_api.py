"""Note source backed by the OpenStreetMap notes API."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from types import TracebackType
from typing import Any

import httpx

from notequests.contracts.config import DEFAULT_API_URL
from notequests.contracts.exceptions import SourceError
from notequests.contracts.geo import BoundingBox
from notequests.contracts.note import Note
from notequests.contracts.source import RemoteNoteSource
from notequests.sources.mapper import notes_from_collection
from notequests.sources.retrying_transport import RetryingTransport

_LOG = logging.getLogger(__name__)

# The API rejects requests beyond these bounds.
MAX_LIMIT = 10000
MAX_BBOX_AREA = 25.0


class OsmNotesSource(RemoteNoteSource):
    """Fetches notes via ``GET /notes.json``.

    Use as a context manager so the underlying HTTP client is closed::

        with OsmNotesSource() as source:
            notes = list(source.fetch_all(bbox))
    """

    def __init__(
        self,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        max_retries: int = 3,
        user_agent: str = "notequests",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=api_url.rstrip("/"),
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            transport=RetryingTransport(transport=transport, max_retries=max_retries),
        )

    def __enter__(self) -> OsmNotesSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_all(self, bbox: BoundingBox, limit: int = 0, hide_closed_after: int = 0) -> Iterator[Note]:
        if limit < 0 or limit > MAX_LIMIT:
            raise SourceError(f"limit must be between 0 and {MAX_LIMIT}, got {limit}")
        area = (bbox.max_lat - bbox.min_lat) * (bbox.max_lon - bbox.min_lon)
        if area > MAX_BBOX_AREA:
            raise SourceError(f"bounding box area {area:.2f} exceeds {MAX_BBOX_AREA} square degrees")

        params: dict[str, Any] = {"bbox": bbox.as_query(), "closed": hide_closed_after}
        if limit > 0:
            params["limit"] = limit
        return self._iter_notes(params)

    def _iter_notes(self, params: dict[str, Any]) -> Iterator[Note]:
        yield from notes_from_collection(self._get_json("/notes.json", params))

    def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        _LOG.debug("GET %s %s", path, params)
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise SourceError(f"notes request failed: {exc}") from exc

        if response.status_code >= 400:
            raise SourceError(
                f"notes request failed with HTTP {response.status_code}: {response.text.strip()[:200]}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise SourceError("notes response is not valid JSON") from exc
