"""Cloud Firestore implementation of the document store."""

from __future__ import annotations

import logging
from typing import Any

from google.api_core.exceptions import NotFound
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account

from telcmate.infrastructure.stores.base import (
    DocumentNotFoundError,
    DocumentStore,
    StoredDocument,
)

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """Document store backed by ``google.cloud.firestore.AsyncClient``."""

    def __init__(
        self,
        project_id: str = "",
        database: str = "(default)",
        credentials_path: str = "",
        client: firestore.AsyncClient | None = None,
    ) -> None:
        """Initialize the Firestore client.

        Args:
            project_id: Firebase / GCP project ID.
            database: Firestore database name.
            credentials_path: Optional service account JSON file; application
                default credentials (or the emulator) are used otherwise.
            client: Pre-built client, mainly for tests.
        """
        if client is None:
            if not project_id:
                raise ValueError("FIREBASE_PROJECT_ID is required for Firestore")

            credentials = None
            if credentials_path:
                credentials = service_account.Credentials.from_service_account_file(
                    credentials_path
                )
            client = firestore.AsyncClient(
                project=project_id, database=database, credentials=credentials
            )

        self.client = client
        logger.info(f"Initialized Firestore client for project: {project_id or '?'}")

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        _, doc_ref = await self.client.collection(collection).add(data)
        logger.debug(f"Added {collection}/{doc_ref.id}")
        return doc_ref.id

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        await self.client.collection(collection).document(doc_id).set(data)

    async def get(self, collection: str, doc_id: str) -> StoredDocument | None:
        snapshot = await self.client.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            return None
        return StoredDocument(id=snapshot.id, data=snapshot.to_dict() or {})

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        doc_ref = self.client.collection(collection).document(doc_id)
        try:
            await doc_ref.update(fields)
        except NotFound as e:
            raise DocumentNotFoundError(collection, doc_id) from e

    async def delete(self, collection: str, doc_id: str) -> None:
        await self.client.collection(collection).document(doc_id).delete()

    async def query(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[StoredDocument]:
        query = self.client.collection(collection)
        for field_name, value in (filters or {}).items():
            query = query.where(filter=FieldFilter(field_name, "==", value))

        documents = []
        async for snapshot in query.stream():
            documents.append(StoredDocument(id=snapshot.id, data=snapshot.to_dict() or {}))
        return documents

    async def is_empty(self, collection: str) -> bool:
        async for _ in self.client.collection(collection).limit(1).stream():
            return False
        return True
