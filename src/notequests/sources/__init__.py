"""Remote note sources."""

from notequests.sources.factory import create_source
from notequests.sources.osm_api import OsmNotesSource
from notequests.sources.retrying_transport import RetryingTransport

__all__ = ["OsmNotesSource", "RetryingTransport", "create_source"]
