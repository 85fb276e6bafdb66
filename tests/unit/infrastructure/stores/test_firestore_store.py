"""Tests for the Firestore document store."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.api_core.exceptions import NotFound

from telcmate.infrastructure.stores.base import DocumentNotFoundError
from telcmate.infrastructure.stores.firestore_store import FirestoreDocumentStore


def make_snapshot(doc_id: str, data: dict | None, exists: bool = True) -> MagicMock:
    snapshot = MagicMock()
    snapshot.id = doc_id
    snapshot.exists = exists
    snapshot.to_dict.return_value = data
    return snapshot


def make_stream(*snapshots: MagicMock):
    """Return a replacement for ``Query.stream`` yielding the snapshots."""

    async def stream():
        for snapshot in snapshots:
            yield snapshot

    return MagicMock(side_effect=lambda: stream())


class TestFirestoreDocumentStore:
    """Test FirestoreDocumentStore against a mocked AsyncClient."""

    @pytest.fixture
    def client(self) -> MagicMock:
        """Create mock Firestore client."""
        return MagicMock()

    @pytest.fixture
    def doc_ref(self, client: MagicMock) -> MagicMock:
        """Mock document reference returned for any document ID."""
        ref = MagicMock()
        ref.set = AsyncMock()
        ref.get = AsyncMock()
        ref.update = AsyncMock()
        ref.delete = AsyncMock()
        client.collection.return_value.document.return_value = ref
        return ref

    @pytest.fixture
    def store(self, client: MagicMock) -> FirestoreDocumentStore:
        return FirestoreDocumentStore(client=client)

    def test_requires_project_without_client(self) -> None:
        with pytest.raises(ValueError, match="FIREBASE_PROJECT_ID"):
            FirestoreDocumentStore()

    @patch("telcmate.infrastructure.stores.firestore_store.service_account")
    @patch("telcmate.infrastructure.stores.firestore_store.firestore")
    def test_builds_client_with_service_account(
        self, mock_firestore, mock_service_account
    ) -> None:
        credentials = MagicMock()
        mock_service_account.Credentials.from_service_account_file.return_value = (
            credentials
        )

        FirestoreDocumentStore(
            project_id="telc-mate", database="staging", credentials_path="key.json"
        )

        mock_service_account.Credentials.from_service_account_file.assert_called_once_with(
            "key.json"
        )
        mock_firestore.AsyncClient.assert_called_once_with(
            project="telc-mate", database="staging", credentials=credentials
        )

    @patch("telcmate.infrastructure.stores.firestore_store.firestore")
    def test_builds_client_with_default_credentials(self, mock_firestore) -> None:
        FirestoreDocumentStore(project_id="telc-mate")

        mock_firestore.AsyncClient.assert_called_once_with(
            project="telc-mate", database="(default)", credentials=None
        )

    @pytest.mark.asyncio
    async def test_add_returns_new_id(self, store, client) -> None:
        ref = MagicMock()
        ref.id = "new-id"
        client.collection.return_value.add = AsyncMock(return_value=(None, ref))

        doc_id = await store.add("exercises", {"title": "A"})

        assert doc_id == "new-id"
        client.collection.assert_called_with("exercises")
        client.collection.return_value.add.assert_awaited_once_with({"title": "A"})

    @pytest.mark.asyncio
    async def test_set(self, store, client, doc_ref) -> None:
        await store.set("settings", "system", {"siteTitle": "Telc Mate"})

        client.collection.return_value.document.assert_called_with("system")
        doc_ref.set.assert_awaited_once_with({"siteTitle": "Telc Mate"})

    @pytest.mark.asyncio
    async def test_get_existing(self, store, doc_ref) -> None:
        doc_ref.get.return_value = make_snapshot("abc", {"title": "A"})

        document = await store.get("exercises", "abc")

        assert document is not None
        assert document.id == "abc"
        assert document.data == {"title": "A"}

    @pytest.mark.asyncio
    async def test_get_missing(self, store, doc_ref) -> None:
        doc_ref.get.return_value = make_snapshot("abc", None, exists=False)

        assert await store.get("exercises", "abc") is None

    @pytest.mark.asyncio
    async def test_update(self, store, doc_ref) -> None:
        await store.update("exercises", "abc", {"title": "B"})

        doc_ref.update.assert_awaited_once_with({"title": "B"})

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, store, doc_ref) -> None:
        doc_ref.update.side_effect = NotFound("No document to update")

        with pytest.raises(DocumentNotFoundError):
            await store.update("exercises", "abc", {"title": "B"})

    @pytest.mark.asyncio
    async def test_delete(self, store, doc_ref) -> None:
        await store.delete("exercises", "abc")

        doc_ref.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_query_without_filters(self, store, client) -> None:
        collection = client.collection.return_value
        collection.stream = make_stream(
            make_snapshot("a", {"type": "reading"}),
            make_snapshot("b", {"type": "writing"}),
        )

        documents = await store.query("exercises")

        assert [doc.id for doc in documents] == ["a", "b"]
        collection.where.assert_not_called()

    @pytest.mark.asyncio
    async def test_query_with_filters(self, store, client) -> None:
        collection = client.collection.return_value
        filtered = collection.where.return_value.where.return_value
        filtered.stream = make_stream(make_snapshot("a", {"type": "reading", "part": "part1"}))

        documents = await store.query("exercises", {"type": "reading", "part": "part1"})

        assert [doc.id for doc in documents] == ["a"]
        assert collection.where.call_count == 1
        first_filter = collection.where.call_args.kwargs["filter"]
        assert first_filter.field_path == "type"
        assert first_filter.op_string == "=="
        assert first_filter.value == "reading"

    @pytest.mark.asyncio
    async def test_is_empty(self, store, client) -> None:
        limited = client.collection.return_value.limit.return_value
        limited.stream = make_stream()

        assert await store.is_empty("users") is True
        client.collection.return_value.limit.assert_called_with(1)

    @pytest.mark.asyncio
    async def test_is_not_empty(self, store, client) -> None:
        limited = client.collection.return_value.limit.return_value
        limited.stream = make_stream(make_snapshot("u1", {"name": "Anna"}))

        assert await store.is_empty("users") is False
