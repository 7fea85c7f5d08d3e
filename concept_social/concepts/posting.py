"""
concept: Posting [Author]

Named feeds holding author/content posts in creation order.
"""
import logging
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from concept_social.errors import NotAllowedError, NotFoundError
from concept_social.models import Feed, Post
from concept_social.store import DocCollection

logger = logging.getLogger(__name__)

POST_OPTION_KEYS = frozenset({"background_color"})


class FeedNotFoundError(NotFoundError):
    tag = "feed_not_found"

    def __init__(self, filter: Union[str, dict]):
        super().__init__("Feed with filter {0} is not found!", filter, payload={"filter": filter})


class FeedNotAllowedError(NotAllowedError):
    tag = "feed_not_allowed"

    def __init__(self, filter: Union[str, dict]):
        super().__init__(
            "Feed with filter {0} is not allowed, as it already exists!", filter, payload={"filter": filter}
        )


class PostNotFoundError(NotFoundError):
    tag = "post_not_found"

    def __init__(self, filter: Union[str, dict]):
        super().__init__("Post with filter {0} is not found!", filter, payload={"filter": filter})


class PostNotAllowedError(NotAllowedError):
    tag = "post_not_allowed"

    def __init__(self, filter: Union[str, dict]):
        super().__init__("Post with filter {0} is not allowed!", filter, payload={"filter": filter})


class PostingConcept:
    def __init__(self, session: AsyncSession):
        self.feeds = DocCollection(Feed, session)
        self.posts = DocCollection(Post, session)

    async def register(self, name: str) -> str:
        self.feeds.assert_not_exists(
            await self.feeds.read_one({"name": name}), FeedNotAllowedError({"name": name})
        )
        return await self.feeds.create_one({"name": name})

    async def unregister(self, feed_id: str) -> None:
        """Delete a feed and every post in it."""
        await self._get_feed(feed_id)
        removed = await self.posts.delete_many({"feed": feed_id})
        await self.feeds.delete_one(feed_id)
        logger.info("Feed %s removed with %d posts", feed_id, removed)

    async def lookup(self, name: str) -> Feed:
        return self.feeds.assert_exists(
            await self.feeds.read_one({"name": name}), FeedNotFoundError({"name": name})
        )

    async def post(
        self, feed_id: str, author: str, content: str, options: Optional[dict] = None
    ) -> str:
        await self._get_feed(feed_id)
        if options:
            options = {k: v for k, v in options.items() if k in POST_OPTION_KEYS}
        post_id = await self.posts.create_one(
            {"feed": feed_id, "author": author, "content": content, "options": options or None}
        )
        logger.info("Post %s by %s in feed %s", post_id, author, feed_id)
        return post_id

    async def unpost(self, feed_id: str, post_id: str, author: Optional[str] = None) -> None:
        """Remove a post; when ``author`` is given it must match the post's author."""
        await self._get_feed(feed_id)
        post = self.posts.assert_exists(
            await self.posts.read_one({"id": post_id, "feed": feed_id}), PostNotFoundError(post_id)
        )
        if author is not None and post.author != author:
            raise PostNotAllowedError(post_id)
        await self.posts.delete_one(post.id)

    async def update(
        self,
        feed_id: str,
        post_id: str,
        author: str,
        content: Optional[str] = None,
        options: Optional[dict] = None,
    ) -> None:
        """Edit an own post; fields left as ``None`` keep their stored value."""
        await self._get_feed(feed_id)
        post = self.posts.assert_exists(
            await self.posts.read_one({"id": post_id, "feed": feed_id}), PostNotFoundError(post_id)
        )
        if post.author != author:
            raise PostNotAllowedError(post_id)
        update: dict = {}
        if content is not None:
            update["content"] = content
        if options is not None:
            update["options"] = {k: v for k, v in options.items() if k in POST_OPTION_KEYS} or None
        if update:
            await self.posts.partial_update_one(post.id, update)

    async def get(self, feed_id: str) -> list[Post]:
        await self._get_feed(feed_id)
        return await self.posts.read_many({"feed": feed_id}, order_by=["created_at"])

    async def _get_feed(self, feed_id: str) -> Feed:
        return self.feeds.assert_exists(await self.feeds.read_one(feed_id), FeedNotFoundError(feed_id))
