"""
SQLAlchemy ORM models, one table per concept collection.

Tables:
  users            — Authenticating: credentials
  friendships      — Friending: unordered user pairs
  friend_requests  — Friending: request log (pending / accepted / rejected)
  labels           — Labelling: per-user named resource sets
  sorts            — Sorting: per-user label → weight profiles
  sources          — Sourcing: registered external sources
  contents         — Sourcing: ingested content blobs
  feeds            — Posting: named feeds
  posts            — Posting: feed entries
  templates        — Templating: registered templates
  renders          — Templating: render records

Cross-concept references (user ids, content ids, …) are plain strings:
weak references, never foreign keys, so a concept never depends on
another concept's table.
"""
import enum
from typing import Optional

from sqlalchemy import JSON, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from concept_social.database import BaseDoc


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class SourceTarget(str, enum.Enum):
    URL = "url"
    FILE = "file"
    FOLDER = "folder"


class TemplateType(str, enum.Enum):
    MARKDOWN = "markdown"


class ResourceType(str, enum.Enum):
    TEXT = "text"
    IMAGE = "image"


class User(BaseDoc):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # Opaque credential; hashing is the caller's concern
    password: Mapped[str] = mapped_column(String(255), nullable=False)


class Friendship(BaseDoc):
    __tablename__ = "friendships"

    user1: Mapped[str] = mapped_column(String(36), nullable=False)
    user2: Mapped[str] = mapped_column(String(36), nullable=False)

    __table_args__ = (
        Index("idx_friendships_user1", "user1"),
        Index("idx_friendships_user2", "user2"),
    )


class FriendRequest(BaseDoc):
    __tablename__ = "friend_requests"

    from_id: Mapped[str] = mapped_column(String(36), nullable=False)
    to_id: Mapped[str] = mapped_column(String(36), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)

    __table_args__ = (Index("idx_requests_pair", "from_id", "to_id", "status"),)


class Label(BaseDoc):
    __tablename__ = "labels"

    user: Mapped[str] = mapped_column(String(36), nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    # Serialised list[str] of resource ids, no duplicates
    resources: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    __table_args__ = (Index("idx_labels_user_label", "user", "label"),)


class Sort(BaseDoc):
    __tablename__ = "sorts"

    user: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    # label → weight
    weights: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    options: Mapped[Optional[dict]] = mapped_column(JSON)


class Source(BaseDoc):
    __tablename__ = "sources"

    user: Mapped[str] = mapped_column(String(36), nullable=False)
    target: Mapped[str] = mapped_column(String(16), nullable=False)
    path_uri: Mapped[str] = mapped_column(String(1000), nullable=False)
    content_ids: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    options: Mapped[Optional[dict]] = mapped_column(JSON)

    __table_args__ = (Index("idx_sources_user", "user"),)


class Content(BaseDoc):
    __tablename__ = "contents"

    user: Mapped[str] = mapped_column(String(36), nullable=False)
    source: Mapped[str] = mapped_column(String(36), nullable=False)
    data: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (Index("idx_contents_source", "source"),)


class Feed(BaseDoc):
    __tablename__ = "feeds"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)


class Post(BaseDoc):
    __tablename__ = "posts"

    feed: Mapped[str] = mapped_column(String(36), nullable=False)
    author: Mapped[str] = mapped_column(String(36), nullable=False)
    content: Mapped[str] = mapped_column(String(255), nullable=False)
    # Display options, e.g. {"background_color": "#fff"}
    options: Mapped[Optional[dict]] = mapped_column(JSON)

    __table_args__ = (
        Index("idx_posts_feed", "feed"),
        Index("idx_posts_created", "created_at"),
    )


class Template(BaseDoc):
    __tablename__ = "templates"

    user: Mapped[str] = mapped_column(String(36), nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    resources: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    # Content id holding the template body
    template: Mapped[str] = mapped_column(String(255), nullable=False)
    options: Mapped[Optional[dict]] = mapped_column(JSON)


class Render(BaseDoc):
    __tablename__ = "renders"

    user: Mapped[str] = mapped_column(String(36), nullable=False)
    template: Mapped[str] = mapped_column(String(36), nullable=False)
    # slot name → content id
    data: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
