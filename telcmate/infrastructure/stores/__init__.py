"""Document store backends.

Provides the abstract store interface, a SQLAlchemy implementation for local
use and tests, and a Cloud Firestore implementation for the hosted database.
"""

from __future__ import annotations

from telcmate.core.settings import Settings, get_settings
from telcmate.infrastructure.stores.base import (
    DocumentNotFoundError,
    DocumentStore,
    DocumentStoreError,
    StoredDocument,
)
from telcmate.infrastructure.stores.sql_store import SQLDocumentStore

__all__ = [
    "DocumentNotFoundError",
    "DocumentStore",
    "DocumentStoreError",
    "SQLDocumentStore",
    "StoredDocument",
    "create_document_store",
]


def create_document_store(settings: Settings | None = None) -> DocumentStore:
    """Build the document store selected by ``TELCMATE_STORE_BACKEND``."""
    settings = settings or get_settings()
    backend = settings.store_backend.lower()

    if backend == "sql":
        return SQLDocumentStore(settings.database_url, echo=settings.database_echo)
    if backend == "firestore":
        # Imported lazily so the SQL backend works without GCP credentials set up
        from telcmate.infrastructure.stores.firestore_store import (
            FirestoreDocumentStore,
        )

        return FirestoreDocumentStore(
            project_id=settings.firebase_project_id,
            database=settings.firestore_database,
            credentials_path=settings.google_application_credentials,
        )
    raise ValueError(f"Unknown store backend: {settings.store_backend}")
