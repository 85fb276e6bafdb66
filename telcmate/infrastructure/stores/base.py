"""Abstract document store interface for the persistence layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class DocumentStoreError(Exception):
    """Base exception for document store failures."""


class DocumentNotFoundError(DocumentStoreError):
    """Raised when an update targets a document that does not exist."""

    def __init__(self, collection: str, doc_id: str) -> None:
        super().__init__(f"Document {collection}/{doc_id} not found")
        self.collection = collection
        self.doc_id = doc_id


@dataclass
class StoredDocument:
    """A document body together with its store-assigned ID."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)


class DocumentStore(ABC):
    """Abstract interface for a hosted document database.

    Collections hold schemaless documents keyed by string IDs. Every method is
    an independent round trip; implementations keep no local cache.
    """

    @abstractmethod
    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document with a store-assigned ID.

        Args:
            collection: Collection name.
            data: Document body.

        Returns:
            The new document ID.
        """
        pass

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Create or overwrite the document stored under a known ID."""
        pass

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> StoredDocument | None:
        """Fetch a single document.

        Returns:
            The document, or None if the ID does not resolve.
        """
        pass

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Merge fields into an existing document.

        Keys are top-level field names or dotted paths into nested maps
        (``defaultTimeLimit.writing``); a dotted key changes only that entry.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        pass

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is not an error."""
        pass

    @abstractmethod
    async def query(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[StoredDocument]:
        """List documents, optionally filtered by top-level field equality.

        Args:
            collection: Collection name.
            filters: Optional dict of field name -> value, all of which must match.

        Returns:
            Matching documents in store order.
        """
        pass

    @abstractmethod
    async def is_empty(self, collection: str) -> bool:
        """Check whether a collection holds no documents."""
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None
