"""Factory for creating note sources.

Decouples source selection from implementation so the SDK and CLI can build
a source from configuration alone.
"""

from __future__ import annotations

import httpx

from notequests.contracts.config import NoteQuestsConfig
from notequests.sources.osm_api import OsmNotesSource


def create_source(config: NoteQuestsConfig, *, transport: httpx.BaseTransport | None = None) -> OsmNotesSource:
    """Create the OSM notes source described by *config*.

    Args:
        config: Loaded configuration.
        transport: Inner httpx transport, mainly for tests.
    """
    return OsmNotesSource(
        api_url=config.api_url,
        timeout=config.timeout,
        max_retries=config.max_retries,
        user_agent=config.user_agent,
        transport=transport,
    )
