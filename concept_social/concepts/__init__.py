"""
Concept instances bound to one unit of work.

Concepts never call each other; the route layer composes them through a
``Concepts`` bundle built for the request's database session.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from concept_social.clients.source_fetcher import SourceFetcher
from concept_social.concepts.authenticating import AuthenticatingConcept
from concept_social.concepts.friending import FriendingConcept
from concept_social.concepts.labelling import LabellingConcept
from concept_social.concepts.posting import PostingConcept
from concept_social.concepts.sessioning import SessioningConcept
from concept_social.concepts.sorting import SortingConcept
from concept_social.concepts.sourcing import SourcingConcept
from concept_social.concepts.templating import TemplatingConcept


@dataclass
class Concepts:
    authing: AuthenticatingConcept
    sessioning: SessioningConcept
    friending: FriendingConcept
    labelling: LabellingConcept
    sorting: SortingConcept
    sourcing: SourcingConcept
    posting: PostingConcept
    templating: TemplatingConcept

    @classmethod
    def bind(cls, session: AsyncSession, fetcher: Optional[SourceFetcher] = None) -> "Concepts":
        return cls(
            authing=AuthenticatingConcept(session),
            sessioning=SessioningConcept(),
            friending=FriendingConcept(session),
            labelling=LabellingConcept(session),
            sorting=SortingConcept(session),
            sourcing=SourcingConcept(session, fetcher),
            posting=PostingConcept(session),
            templating=TemplatingConcept(session),
        )


__all__ = [
    "Concepts",
    "AuthenticatingConcept",
    "SessioningConcept",
    "FriendingConcept",
    "LabellingConcept",
    "SortingConcept",
    "SourcingConcept",
    "PostingConcept",
    "TemplatingConcept",
]
