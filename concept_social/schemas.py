"""
Pydantic input schemas for the route table.
Kept separate from ORM models to avoid coupling transport to storage.
Field names match the action parameters they validate.
"""
from typing import Annotated, Optional

from pydantic import BaseModel, Field

from concept_social.models import ResourceType, SourceTarget, TemplateType

Username = Annotated[str, Field(min_length=1)]
ObjectId = Annotated[str, Field(min_length=1, max_length=36)]
LabelName = Annotated[str, Field(min_length=1, max_length=255)]


# ──────────────────────────── Users ───────────────────────────────────────

class Empty(BaseModel):
    pass


class UsernameArgs(BaseModel):
    username: Username


class Credentials(BaseModel):
    username: Username
    password: str


class PasswordChange(BaseModel):
    current_password: str
    new_password: str


# ──────────────────────────── Friending ───────────────────────────────────

class FriendArgs(BaseModel):
    friend: Username


class RequestToArgs(BaseModel):
    to: Username


class RequestFromArgs(BaseModel):
    from_user: Username


# ──────────────────────────── Posting ─────────────────────────────────────

class FeedCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class FeedArgs(BaseModel):
    feed_id: ObjectId


class PostOptions(BaseModel):
    background_color: Optional[str] = None


class PostCreate(BaseModel):
    feed_id: ObjectId
    content: str = Field(..., min_length=1, max_length=255)
    options: Optional[PostOptions] = None


class PostUpdate(BaseModel):
    feed_id: ObjectId
    post_id: ObjectId
    content: Optional[str] = Field(None, min_length=1, max_length=255)
    options: Optional[PostOptions] = None


class PostArgs(BaseModel):
    feed_id: ObjectId
    post_id: ObjectId


# ──────────────────────────── Sourcing ────────────────────────────────────

class SourceCreate(BaseModel):
    target: SourceTarget
    path_uri: str = Field(..., min_length=1, max_length=1000)


class SourceArgs(BaseModel):
    source_id: ObjectId


class ContentArgs(BaseModel):
    content_id: ObjectId


# ──────────────────────────── Labelling / Sorting ─────────────────────────

class LabelArgs(BaseModel):
    label: LabelName


class LabelWeight(BaseModel):
    label: LabelName
    weight: float


class LabelResource(BaseModel):
    label: LabelName
    resource: str = Field(..., min_length=1)


class ResourceArgs(BaseModel):
    resource: str = Field(..., min_length=1)


class SortRequest(BaseModel):
    resources: list[str]


# ──────────────────────────── Templating ──────────────────────────────────

class TemplateCreate(BaseModel):
    template: str = Field(..., min_length=1, max_length=255)
    type: TemplateType = TemplateType.MARKDOWN
    resources: list[ResourceType] = []


class TemplateArgs(BaseModel):
    template_id: ObjectId


class RenderRequest(BaseModel):
    template_id: ObjectId
    data: dict[str, str] = {}


class RenderArgs(BaseModel):
    render_id: ObjectId
