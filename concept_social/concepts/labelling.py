"""
concept: Labelling [Resource]

Per-user named label sets over opaque resource ids.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from concept_social.errors import NotAllowedError, NotFoundError
from concept_social.models import Label
from concept_social.store import DocCollection

logger = logging.getLogger(__name__)


class LabelNotFoundError(NotFoundError):
    tag = "label_not_found"

    def __init__(self, label: str):
        super().__init__('Label "{0}" not found!', label, payload={"label": label})


class LabelNotAllowedError(NotAllowedError):
    tag = "label_not_allowed"

    def __init__(self, label: str):
        super().__init__('Label "{0}" not allowed!', label, payload={"label": label})


class ResourceNotFoundError(NotFoundError):
    tag = "resource_not_found"

    def __init__(self, resource: str):
        super().__init__("Resource of ID {0} not found!", resource, payload={"resource": resource})


class ResourceNotAllowedError(NotAllowedError):
    tag = "resource_not_allowed"

    def __init__(self, resource: str):
        super().__init__(
            'Resource with ID "{0}" is not allowed!', resource, payload={"resource": resource}
        )


class LabellingConcept:
    def __init__(self, session: AsyncSession):
        self.labels = DocCollection(Label, session)

    async def register(self, label: str, user: str) -> str:
        self.labels.assert_not_exists(
            await self.labels.read_one({"label": label, "user": user}),
            LabelNotAllowedError(label),
        )
        return await self.labels.create_one({"user": user, "label": label, "resources": []})

    async def unregister(self, label: str, user: str) -> None:
        await self._assert_label_exists(label, user)
        await self.labels.delete_one({"label": label, "user": user})

    async def lookup(self, label: str, user: str) -> Label:
        return await self._assert_label_exists(label, user)

    async def lookup_all(self, user: str) -> list[Label]:
        return await self.labels.read_many({"user": user}, order_by=["label"])

    async def add(self, resource: str, label: str, user: str) -> None:
        doc = await self._assert_label_exists(label, user)
        if resource in doc.resources:
            raise ResourceNotAllowedError(resource)
        await self.labels.partial_update_one(doc.id, {"resources": [*doc.resources, resource]})

    async def remove(self, resource: str, label: str, user: str) -> None:
        doc = await self._assert_label_exists(label, user)
        if resource not in doc.resources:
            raise ResourceNotFoundError(resource)
        await self.labels.partial_update_one(
            doc.id, {"resources": [r for r in doc.resources if r != resource]}
        )

    async def get(self, resource: str, user: Optional[str] = None) -> set[str]:
        """
        Names of the labels containing ``resource``. Scoped to ``user`` when
        given; otherwise every user's labels are scanned.
        """
        labels = await self.labels.read_many({"user": user} if user is not None else None)
        return {doc.label for doc in labels if resource in doc.resources}

    async def _assert_label_exists(self, label: str, user: str) -> Label:
        return self.labels.assert_exists(
            await self.labels.read_one({"label": label, "user": user}),
            LabelNotFoundError(label),
        )
