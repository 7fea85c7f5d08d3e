"""
concept: Templating [Template]
"""
import logging
from collections.abc import Iterable, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from concept_social.errors import NotAllowedError, NotFoundError, UnimplementedError
from concept_social.models import Render, ResourceType, Template, TemplateType
from concept_social.store import DocCollection

logger = logging.getLogger(__name__)


class TemplateNotFoundError(NotFoundError):
    tag = "template_not_found"

    def __init__(self, _id: str):
        super().__init__("Template of ID {0} not found!", _id, payload={"id": _id})


class TemplateNotAllowedError(NotAllowedError):
    tag = "template_not_allowed"

    def __init__(self, _id: str):
        super().__init__("Template of ID {0} not allowed!", _id, payload={"id": _id})


class RenderNotFoundError(NotFoundError):
    tag = "render_not_found"

    def __init__(self, _id: str):
        super().__init__("Render of ID {0} not found!", _id, payload={"id": _id})


class TemplatingConcept:
    def __init__(self, session: AsyncSession):
        self.templates = DocCollection(Template, session)
        self.renders = DocCollection(Render, session)

    async def add(
        self,
        template: str,
        type: TemplateType,
        resources: Iterable[ResourceType],
        user: str,
    ) -> str:
        kinds = sorted({ResourceType(r).value for r in resources})
        return await self.templates.create_one(
            {"user": user, "type": TemplateType(type).value, "resources": kinds, "template": template}
        )

    async def remove(self, template_id: str, user: str) -> None:
        template = await self._get_template(template_id)
        if template.user != user:
            raise TemplateNotAllowedError(template_id)
        await self.templates.delete_one(template_id)

    async def get_templates(self, user: str) -> list[Template]:
        return await self.templates.read_many({"user": user}, order_by=["created_at"])

    async def render(self, template_id: str, data: Mapping[str, str], user: str) -> str:
        await self._get_template(template_id)
        # TODO: fill the template's slots from ``data`` and store a Render row
        raise UnimplementedError("Templating.render")

    async def get_render(self, render_id: str) -> Render:
        return self.renders.assert_exists(
            await self.renders.read_one(render_id), RenderNotFoundError(render_id)
        )

    async def _get_template(self, template_id: str) -> Template:
        return self.templates.assert_exists(
            await self.templates.read_one(template_id), TemplateNotFoundError(template_id)
        )
