"""
Generic concept store.

``DocCollection`` wraps one ORM model (one table) and gives every concept
the same small CRUD vocabulary over it. Filters are plain data:

    "3f2c…"                                 id lookup
    {"username": "alice"}                   equality, fields AND-ed together
    {"from_id": In([a, b]), "status": "pending"}
    Or({"user1": a, "user2": b}, {"user1": b, "user2": a})

Operations only flush; committing is the caller's unit of work.
"""
import logging
from typing import Any, Generic, Iterable, Mapping, Optional, Sequence, TypeVar, Union

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from concept_social.database import BaseDoc, utcnow
from concept_social.errors import ConceptError, NotAllowedError, NotFoundError

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", bound=BaseDoc)

INTERNAL_FIELDS = frozenset({"id", "created_at", "updated_at"})


class In:
    """Field value must be one of ``values``."""

    def __init__(self, values: Iterable[Any]):
        self.values = list(values)

    def __repr__(self) -> str:
        return f"In({self.values!r})"


class Or:
    """Disjunction of mapping filters."""

    def __init__(self, *filters: Mapping[str, Any]):
        self.filters = filters

    def __repr__(self) -> str:
        return "Or(" + ", ".join(repr(dict(f)) for f in self.filters) + ")"


Filter = Union[str, Mapping[str, Any], Or]


class DocCollection(Generic[DocT]):
    def __init__(self, model: type[DocT], session: AsyncSession):
        self.model = model
        self.session = session

    @property
    def name(self) -> str:
        return self.model.__tablename__

    # ── filter translation ────────────────────────────────────────────────

    def _column(self, field: str):
        if field not in self.model.__mapper__.column_attrs:
            raise ValueError(f"Unknown field {field!r} for collection {self.name!r}")
        return getattr(self.model, field)

    def _where(self, filter: Optional[Filter]) -> list:
        if filter is None:
            return []
        if isinstance(filter, str):
            return [self.model.id == filter]
        if isinstance(filter, Or):
            return [or_(*(and_(*self._where(f)) for f in filter.filters))]

        clauses = []
        for field, value in filter.items():
            column = self._column(field)
            if isinstance(value, In):
                clauses.append(column.in_(value.values))
            else:
                clauses.append(column == value)
        return clauses

    def _fields(self, item: Mapping[str, Any]) -> dict:
        fields = {k: v for k, v in item.items() if k not in INTERNAL_FIELDS}
        for field in fields:
            self._column(field)
        return fields

    # ── CRUD ──────────────────────────────────────────────────────────────

    async def create_one(self, item: Mapping[str, Any]) -> str:
        """Insert a new document and return its id. No uniqueness checks here."""
        doc = self.model(**self._fields(item))
        now = utcnow()
        doc.created_at = now
        doc.updated_at = now
        self.session.add(doc)
        await self.session.flush()
        return doc.id

    async def read_one(self, filter: Filter) -> Optional[DocT]:
        stmt = select(self.model).where(*self._where(filter)).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def read_many(
        self, filter: Optional[Filter] = None, order_by: Optional[Sequence[str]] = None
    ) -> list[DocT]:
        stmt = select(self.model).where(*self._where(filter))
        if order_by:
            stmt = stmt.order_by(*(self._column(field) for field in order_by))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def partial_update_one(self, filter: Filter, update: Mapping[str, Any]) -> int:
        """
        Merge ``update`` into the first match and refresh ``updated_at``.
        Returns the number of matched documents; zero matches is a silent no-op.
        """
        doc = await self.read_one(filter)
        if doc is None:
            return 0
        for field, value in self._fields(update).items():
            setattr(doc, field, value)
        doc.updated_at = utcnow()
        await self.session.flush()
        return 1

    async def delete_one(self, filter: Filter) -> int:
        doc = await self.read_one(filter)
        if doc is None:
            return 0
        await self.session.delete(doc)
        await self.session.flush()
        return 1

    async def delete_many(self, filter: Filter) -> int:
        result = await self.session.execute(delete(self.model).where(*self._where(filter)))
        await self.session.flush()
        return result.rowcount

    async def pop_one(self, filter: Filter) -> DocT:
        """Remove and return the first match; the only store call that raises."""
        doc = await self.read_one(filter)
        if doc is None:
            raise NotFoundError(
                "Document in {0} with filter {1} not found!",
                self.name,
                filter,
                payload={"filter": filter},
            )
        await self.session.delete(doc)
        await self.session.flush()
        return doc

    # ── assertions ────────────────────────────────────────────────────────

    def assert_exists(self, doc: Optional[DocT], error: Optional[ConceptError] = None) -> DocT:
        if doc is None:
            raise error or NotFoundError("Document in {0} not found!", self.name)
        return doc

    def assert_not_exists(self, doc: Optional[DocT], error: Optional[ConceptError] = None) -> None:
        if doc is not None:
            raise error or NotAllowedError(
                "Document in {0} already exists: {1}", self.name, doc.id, payload={"id": doc.id}
            )
