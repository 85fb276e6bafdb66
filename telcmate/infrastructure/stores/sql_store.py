"""SQLAlchemy-backed document store.

Documents live in a single ``documents`` table keyed by (collection, doc_id)
with the body in a JSON column, so the same repositories run against SQLite
locally and against the hosted Firestore backend in production.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Generator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from telcmate.infrastructure.stores.base import (
    DocumentNotFoundError,
    DocumentStore,
    StoredDocument,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class DocumentRecord(Base):
    """One stored document."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True)  # insertion order
    collection = Column(String(100), nullable=False)
    doc_id = Column(String(100), nullable=False)
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        UniqueConstraint("collection", "doc_id", name="uq_documents_collection_doc"),
        Index("idx_documents_collection", "collection"),
    )


def new_document_id() -> str:
    """Generate a 20 character document ID, the length Firestore uses."""
    return uuid4().hex[:20]


class SQLDocumentStore(DocumentStore):
    """Document store on top of any SQLAlchemy database with JSON support."""

    def __init__(self, database_url: str = "sqlite:///data/telcmate.db", echo: bool = False):
        """Initialize the store and create its table.

        Args:
            database_url: SQLAlchemy database URL.
            echo: Log emitted SQL.
        """
        self.database_url = database_url
        url = make_url(database_url)

        engine_kwargs: dict[str, Any] = {"echo": echo}
        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                engine_kwargs["poolclass"] = StaticPool
            else:
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(database_url, **engine_kwargs)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)
        self._create_tables()

    def _create_tables(self) -> None:
        """Create the documents table."""
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Document store initialized at {self.engine.url!r}")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager.

        Yields:
            Database session.
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _find(self, session: Session, collection: str, doc_id: str) -> DocumentRecord | None:
        return (
            session.query(DocumentRecord)
            .filter_by(collection=collection, doc_id=doc_id)
            .first()
        )

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = new_document_id()
        with self.get_session() as session:
            session.add(DocumentRecord(collection=collection, doc_id=doc_id, data=data))
        logger.debug(f"Added {collection}/{doc_id}")
        return doc_id

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        with self.get_session() as session:
            record = self._find(session, collection, doc_id)
            if record is None:
                session.add(
                    DocumentRecord(collection=collection, doc_id=doc_id, data=data)
                )
            else:
                record.data = dict(data)
        logger.debug(f"Set {collection}/{doc_id}")

    async def get(self, collection: str, doc_id: str) -> StoredDocument | None:
        with self.get_session() as session:
            record = self._find(session, collection, doc_id)
            if record is None:
                return None
            return StoredDocument(id=record.doc_id, data=dict(record.data))

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        with self.get_session() as session:
            record = self._find(session, collection, doc_id)
            if record is None:
                raise DocumentNotFoundError(collection, doc_id)
            # Assign a new object so the JSON column registers the change
            record.data = merge_fields(record.data, fields)
        logger.debug(f"Updated {collection}/{doc_id}: {sorted(fields)}")

    async def delete(self, collection: str, doc_id: str) -> None:
        with self.get_session() as session:
            session.query(DocumentRecord).filter_by(
                collection=collection, doc_id=doc_id
            ).delete()
        logger.debug(f"Deleted {collection}/{doc_id}")

    async def query(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[StoredDocument]:
        with self.get_session() as session:
            query = session.query(DocumentRecord).filter(
                DocumentRecord.collection == collection
            )
            for field_name, value in (filters or {}).items():
                query = query.filter(_field_equals(field_name, value))
            records = query.order_by(DocumentRecord.id).all()
            return [
                StoredDocument(id=record.doc_id, data=dict(record.data))
                for record in records
            ]

    async def is_empty(self, collection: str) -> bool:
        with self.get_session() as session:
            first = (
                session.query(DocumentRecord.id)
                .filter(DocumentRecord.collection == collection)
                .first()
            )
            return first is None

    async def close(self) -> None:
        self.engine.dispose()


def _field_equals(field_name: str, value: Any) -> Any:
    """Build an equality predicate on a top-level JSON field."""
    element = DocumentRecord.data[field_name]
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    if isinstance(value, str):
        return element.as_string() == value
    raise TypeError(
        f"Unsupported filter value for {field_name!r}: {type(value).__name__}"
    )


def merge_fields(data: dict[str, Any], fields: dict[str, Any]) -> dict[str, Any]:
    """Apply a merge-patch whose keys may be dotted paths into nested maps."""
    merged = copy.deepcopy(data)
    for path, value in fields.items():
        *parents, leaf = path.split(".")
        target = merged
        for key in parents:
            child = target.get(key)
            if not isinstance(child, dict):
                child = {}
                target[key] = child
            target = child
        target[leaf] = value
    return merged
