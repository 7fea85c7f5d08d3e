"""
concept: Sorting [Target]

Per-user weight profiles mapping label → weight. The ranking step that
orders candidate resources by a profile is not implemented yet.
"""
import logging
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from concept_social.concepts.labelling import LabelNotAllowedError, LabelNotFoundError
from concept_social.errors import NotAllowedError, NotFoundError, UnimplementedError
from concept_social.models import Sort
from concept_social.store import DocCollection

logger = logging.getLogger(__name__)


class SortNotFoundError(NotFoundError):
    tag = "sort_not_found"

    def __init__(self, sort: str):
        super().__init__("Sort of ID {0} not found!", sort, payload={"sort": sort})


class SortNotAllowedError(NotAllowedError):
    tag = "sort_not_allowed"

    def __init__(self, sort: str):
        super().__init__("Sort of ID {0} is not allowed!", sort, payload={"sort": sort})


class SortingConcept:
    def __init__(self, session: AsyncSession):
        self.sorts = DocCollection(Sort, session)

    async def register(self, user: str) -> str:
        existing = await self.sorts.read_one({"user": user})
        if existing is not None:
            raise SortNotAllowedError(existing.id)
        return await self.sorts.create_one({"user": user, "weights": {}})

    async def unregister(self, sort_id: str) -> None:
        await self._get_sort(sort_id)
        await self.sorts.delete_one(sort_id)

    async def lookup(self, user: str) -> Sort:
        return self.sorts.assert_exists(
            await self.sorts.read_one({"user": user}), SortNotFoundError(user)
        )

    async def sort(self, sort_id: str, resources: Iterable[str]) -> list[str]:
        sort = await self._get_sort(sort_id)
        return self._rank(sort, frozenset(resources))

    async def add(self, sort_id: str, label: str, weight: float) -> None:
        sort = await self._get_sort(sort_id)
        if label in sort.weights:
            raise LabelNotAllowedError(label)
        await self.sorts.partial_update_one(sort_id, {"weights": {**sort.weights, label: weight}})

    async def remove(self, sort_id: str, label: str) -> None:
        sort = await self._get_sort(sort_id)
        if label not in sort.weights:
            raise LabelNotFoundError(label)
        weights = {k: v for k, v in sort.weights.items() if k != label}
        await self.sorts.partial_update_one(sort_id, {"weights": weights})

    async def set(self, sort_id: str, label: str, weight: float) -> None:
        sort = await self._get_sort(sort_id)
        if label not in sort.weights:
            raise LabelNotAllowedError(label)
        await self.sorts.partial_update_one(sort_id, {"weights": {**sort.weights, label: weight}})

    async def get(self, sort_id: str, label: str) -> float:
        sort = await self._get_sort(sort_id)
        if label not in sort.weights:
            raise LabelNotAllowedError(label)
        return sort.weights[label]

    async def _get_sort(self, sort_id: str) -> Sort:
        return self.sorts.assert_exists(await self.sorts.read_one(sort_id), SortNotFoundError(sort_id))

    @staticmethod
    def _rank(sort: Sort, resources: frozenset[str]) -> list[str]:
        # TODO: weighted sum of matching label weights, descending, ties by id
        raise UnimplementedError("Sorting.sort")
