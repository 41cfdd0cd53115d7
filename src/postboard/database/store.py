"""
Document store adapter over the SQL collections.

Documents are plain dicts keyed by column name. Identifiers are UUIDs in the
database and canonical strings everywhere else; conversion happens here in
both directions.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from ..dbmodels import Base, Comments, Posts
from ..errors import InvalidIdentifier, StoreUnavailable
from ..logging import get_logger
from .connection import (
    check_database_connection,
    create_database_engine,
    create_session_factory,
    create_tables,
)

logger = get_logger(__name__)

Document = dict[str, Any]


class Collection(str, Enum):
    """Collections exposed by the store."""

    POSTS = "posts"
    COMMENTS = "comments"


class SortDirection(Enum):
    """Sort direction, using the document-store convention of 1 / -1."""

    ASCENDING = 1
    DESCENDING = -1


SortSpec = Sequence[tuple[str, SortDirection]]

_MODELS: dict[Collection, type[Base]] = {
    Collection.POSTS: Posts,
    Collection.COMMENTS: Comments,
}

# Keys holding store identifiers, converted on the way in and out
_ID_FIELDS: dict[Collection, frozenset[str]] = {
    Collection.POSTS: frozenset({"id"}),
    Collection.COMMENTS: frozenset({"id", "post_id"}),
}


def to_native_id(value: Any) -> UUID:
    """Parse a wire identifier into the store's native identifier type.

    Raises:
        InvalidIdentifier: If the value is not a well-formed identifier
    """
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str):
        raise InvalidIdentifier(value)
    try:
        return UUID(value)
    except ValueError as e:
        raise InvalidIdentifier(value) from e


def to_wire_id(value: UUID) -> str:
    """Render a native identifier in its canonical string form."""
    return str(value)


class DocumentStore:
    """
    Async lookups and inserts against the posts and comments collections.

    One instance wraps the process-wide engine and is shared by every
    in-flight request. Each operation uses its own session, and inserts
    commit before returning so a follow-up `find_one` sees the document.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = create_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str | None = None) -> DocumentStore:
        """Open a store on a new engine for the given (or configured) database URL."""
        return cls(create_database_engine(database_url))

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except (OperationalError, InterfaceError, OSError) as e:
            logger.error("Document store operation failed", error=str(e))
            raise StoreUnavailable() from e

    async def find_one(self, collection: Collection, id: Any) -> Document | None:
        """Return the document with the given id, or None if there is none."""
        model = _MODELS[collection]
        native_id = to_native_id(id)

        async with self._session() as session:
            row = await session.get(model, native_id)

        if row is None:
            logger.debug("Document not found", collection=collection.value, id=str(native_id))
            return None
        return self._to_document(collection, row)

    async def find(
        self,
        collection: Collection,
        filter: Mapping[str, Any] | None = None,
        sort: SortSpec = (),
    ) -> list[Document]:
        """Return all documents matching an equality filter, in sort order."""
        model = _MODELS[collection]
        stmt = select(model)

        for key, value in (filter or {}).items():
            column = self._column(collection, key)
            if key in _ID_FIELDS[collection] and value is not None:
                value = to_native_id(value)
            stmt = stmt.where(column == value)

        for key, direction in sort:
            column = self._column(collection, key)
            stmt = stmt.order_by(
                column.asc() if direction is SortDirection.ASCENDING else column.desc()
            )

        async with self._session() as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()

        return [self._to_document(collection, row) for row in rows]

    async def insert_one(self, collection: Collection, document: Mapping[str, Any]) -> str:
        """Insert a document and return its generated id."""
        model = _MODELS[collection]
        values: dict[str, Any] = {}

        for key, value in document.items():
            self._column(collection, key)
            if key in _ID_FIELDS[collection] and value is not None:
                value = to_native_id(value)
            values[key] = value
        values.setdefault("id", uuid4())

        async with self._session() as session:
            session.add(model(**values))
            await session.commit()

        return to_wire_id(values["id"])

    async def count(self, collection: Collection) -> int:
        """Return the number of documents in a collection."""
        async with self._session() as session:
            result = await session.execute(select(func.count()).select_from(_MODELS[collection]))
            return result.scalar_one()

    async def ping(self) -> tuple[bool, str | None]:
        """Check that the store answers; returns (ok, error message)."""
        return await check_database_connection(self._engine)

    async def create_schema(self) -> None:
        """Create the collection tables if needed."""
        try:
            await create_tables(self._engine)
        except (OperationalError, InterfaceError, OSError) as e:
            raise StoreUnavailable(f"Could not create collections: {e}") from e

    async def close(self) -> None:
        await self._engine.dispose()

    @staticmethod
    def _column(collection: Collection, key: str):
        table = _MODELS[collection].__table__
        if key not in table.columns:
            raise ValueError(f"Unknown field {key!r} for collection '{collection.value}'")
        return table.columns[key]

    @staticmethod
    def _to_document(collection: Collection, row: Base) -> Document:
        document: Document = {}
        for column in row.__table__.columns:
            value = getattr(row, column.key)
            if column.key in _ID_FIELDS[collection] and value is not None:
                value = to_wire_id(value)
            document[column.key] = value
        return document
