"""
Response formatting for the frontend.

  • Document shaping — ORM rows to JSON-able dicts, author / request ids
                       replaced by usernames (stale ids become DELETED_USER).
  • Error registry   — tag → async enrichment step run before an error is
                       rendered; tags without an entry pass through untouched.
"""
import logging
from typing import Any, Awaitable, Callable, Optional

from fastapi.encoders import jsonable_encoder

from concept_social.concepts import Concepts
from concept_social.concepts.friending import (
    AlreadyFriendsError,
    FriendNotFoundError,
    FriendRequestAlreadyExistsError,
    FriendRequestNotFoundError,
)
from concept_social.database import BaseDoc
from concept_social.errors import ConceptError
from concept_social.models import FriendRequest, Post

logger = logging.getLogger(__name__)


class Responses:
    @staticmethod
    def document(doc: Any) -> Any:
        """ORM documents (or containers of them) → JSON-compatible data."""
        if isinstance(doc, BaseDoc):
            return jsonable_encoder(doc.to_dict())
        if isinstance(doc, (list, tuple, set)):
            return [Responses.document(d) for d in doc]
        return jsonable_encoder(doc)

    @staticmethod
    async def post(concepts: Concepts, post: Optional[Post]) -> Optional[dict]:
        if post is None:
            return None
        return (await Responses.posts(concepts, [post]))[0]

    @staticmethod
    async def posts(concepts: Concepts, posts: list[Post]) -> list[dict]:
        """Batch variant of ``post``: one username lookup for the whole list."""
        authors = await concepts.authing.ids_to_usernames([p.author for p in posts])
        return [{**Responses.document(p), "author": author} for p, author in zip(posts, authors)]

    @staticmethod
    async def friend_requests(concepts: Concepts, requests: list[FriendRequest]) -> list[dict]:
        ids = [r.from_id for r in requests] + [r.to_id for r in requests]
        usernames = await concepts.authing.ids_to_usernames(ids)
        n = len(requests)
        return [
            {
                **{k: v for k, v in Responses.document(r).items() if k not in ("from_id", "to_id")},
                "from": usernames[i],
                "to": usernames[i + n],
            }
            for i, r in enumerate(requests)
        ]


# ─────────────────────────── Error registry ───────────────────────────────

ErrorEnricher = Callable[[ConceptError, Concepts], Awaitable[ConceptError]]


async def _users_to_usernames(error: ConceptError, concepts: Concepts) -> ConceptError:
    usernames = await concepts.authing.ids_to_usernames(error.payload["users"])
    return error.format_with(*usernames)


ERROR_REGISTRY: dict[str, ErrorEnricher] = {
    FriendRequestAlreadyExistsError.tag: _users_to_usernames,
    FriendNotFoundError.tag: _users_to_usernames,
    FriendRequestNotFoundError.tag: _users_to_usernames,
    AlreadyFriendsError.tag: _users_to_usernames,
}


def register_error(tag: str, enricher: ErrorEnricher) -> None:
    ERROR_REGISTRY[tag] = enricher


async def handle_error(error: ConceptError, concepts: Concepts) -> ConceptError:
    """Run the registered enrichment step for ``error`` (if any)."""
    enricher = ERROR_REGISTRY.get(error.tag)
    if enricher is None:
        return error
    return await enricher(error, concepts)
