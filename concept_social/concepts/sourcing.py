"""
concept: Sourcing [Target]

Users register external sources (a URL, a file or a folder); ``update``
pulls fresh content from a source through a ``SourceFetcher`` and caches
each blob as a Content row owned by the source.
"""
import logging
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from concept_social.clients.source_fetcher import SourceFetcher, UnimplementedFetcher
from concept_social.errors import NotAllowedError, NotFoundError
from concept_social.models import Content, Source, SourceTarget
from concept_social.store import DocCollection

logger = logging.getLogger(__name__)


class SourceNotFoundError(NotFoundError):
    tag = "source_not_found"

    def __init__(self, filter: Union[str, dict]):
        super().__init__("Source with filter {0} is not found!", filter, payload={"filter": filter})


class SourceNotAllowedError(NotAllowedError):
    tag = "source_not_allowed"

    def __init__(self, filter: Union[str, dict]):
        super().__init__("Source with filter {0} is not allowed!", filter, payload={"filter": filter})


class ContentNotFoundError(NotFoundError):
    tag = "content_not_found"

    def __init__(self, filter: Union[str, dict]):
        super().__init__("Content with filter {0} is not found!", filter, payload={"filter": filter})


class ContentNotAllowedError(NotAllowedError):
    tag = "content_not_allowed"

    def __init__(self, filter: Union[str, dict]):
        super().__init__("Content with filter {0} is not allowed!", filter, payload={"filter": filter})


class SourcingConcept:
    def __init__(self, session: AsyncSession, fetcher: Optional[SourceFetcher] = None):
        self.sources = DocCollection(Source, session)
        self.content = DocCollection(Content, session)
        self.fetcher = fetcher or UnimplementedFetcher()

    async def register(self, target: SourceTarget, uri: str, user: str) -> str:
        target = SourceTarget(target)
        filter = {"target": target.value, "path_uri": uri, "user": user}
        self.sources.assert_not_exists(await self.sources.read_one(filter), SourceNotAllowedError(filter))
        source_id = await self.sources.create_one({**filter, "content_ids": []})
        logger.info("Registered %s source %s for user %s", target.value, source_id, user)
        return source_id

    async def unregister(self, source_id: str, user: str) -> None:
        """Delete an owned source together with its cached content."""
        source = await self.lookup_source(source_id, user)
        removed = await self.content.delete_many({"source": source.id})
        await self.sources.delete_one(source.id)
        logger.info("Unregistered source %s (%d content rows removed)", source_id, removed)

    async def lookup_source(self, source_id: str, user: str) -> Source:
        source = self.sources.assert_exists(
            await self.sources.read_one(source_id), SourceNotFoundError(source_id)
        )
        if source.user != user:
            raise SourceNotAllowedError(source_id)
        return source

    async def lookup_sources(self, user: str) -> list[Source]:
        return await self.sources.read_many({"user": user}, order_by=["created_at"])

    async def get(self, content_id: str, user: str) -> Content:
        content = self.content.assert_exists(
            await self.content.read_one(content_id), ContentNotFoundError(content_id)
        )
        if content.user != user:
            raise ContentNotAllowedError(content_id)
        return content

    async def get_source_content(self, source_id: str, user: str) -> list[Content]:
        source = await self.lookup_source(source_id, user)
        return await self.content.read_many({"source": source.id}, order_by=["created_at"])

    async def update(self, source_id: str, user: str) -> list[str]:
        """
        Fetch the source and cache every returned blob as new content.
        Nothing is written until the fetcher has returned.
        """
        source = await self.lookup_source(source_id, user)
        blobs = await self.fetcher.fetch(SourceTarget(source.target), source.path_uri)

        new_ids = []
        for blob in blobs:
            data = blob.decode("utf-8", errors="replace") if isinstance(blob, bytes) else blob
            new_ids.append(
                await self.content.create_one({"user": source.user, "source": source.id, "data": data})
            )
        await self.sources.partial_update_one(
            source.id, {"content_ids": [*source.content_ids, *new_ids]}
        )
        logger.info("Source %s updated with %d new content rows", source_id, len(new_ids))
        return new_ids
