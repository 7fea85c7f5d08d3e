"""
Source fetcher client.

Pulls raw content out of an external source for the Sourcing concept:
  url     — download the resource behind the URI
  file    — read a single file
  folder  — list and read every file in a folder

Ingestion is not built yet: the default fetcher refuses every request with
a 501 so callers see a hard failure instead of an empty update.
Alternative fetchers only need to satisfy ``SourceFetcher``.
"""
import logging
from typing import Protocol

from concept_social.errors import UnimplementedError
from concept_social.models import SourceTarget

logger = logging.getLogger(__name__)


class SourceFetcher(Protocol):
    async def fetch(self, target: SourceTarget, uri: str) -> list[bytes]:
        """Return zero or more opaque content blobs for the source."""
        ...


class UnimplementedFetcher:
    async def fetch(self, target: SourceTarget, uri: str) -> list[bytes]:
        logger.warning("Ingestion requested for %s source %s: not implemented", target.value, uri)
        raise UnimplementedError("Sourcing.update")
