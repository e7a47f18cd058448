"""Tests for the Firestore REST client against a mocked HTTP transport."""

import json

import httpx
import pytest

from concierge.domain.exceptions import DocumentExistsException
from concierge.infrastructure.exceptions import DatabaseError
from concierge.infrastructure.firebase._rest_client import MAX_BATCH_WRITES, FirestoreRESTClient

PREFIX = "projects/demo/databases/(default)/documents"


class StaticCredentials:
    """Already-valid service account credentials; never refreshed."""

    valid = True
    token = "test-token"


def _doc(collection: str, doc_id: str, **fields: str) -> dict:
    return {
        "name": f"{PREFIX}/{collection}/{doc_id}",
        "fields": {k: {"stringValue": v} for k, v in fields.items()},
    }


def _client(handler) -> tuple[FirestoreRESTClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return FirestoreRESTClient("demo", StaticCredentials(), http_client=http), seen


class TestDocumentReference:
    async def test_get_decodes_fields_and_sends_token(self) -> None:
        db, seen = _client(lambda r: httpx.Response(200, json=_doc("villas", "v1", name="Sol")))
        snapshot = await db.collection("villas").document("v1").get()
        assert snapshot.id == "v1"
        assert snapshot.to_dict() == {"name": "Sol"}
        assert seen[0].headers["Authorization"] == "Bearer test-token"
        assert seen[0].url.path.endswith("/villas/v1")

    async def test_get_missing_is_none(self) -> None:
        db, _ = _client(lambda r: httpx.Response(404, json={"error": {"code": 404}}))
        assert await db.collection("villas").document("nope").get() is None

    async def test_update_missing_document_returns_false(self) -> None:
        """update() requires the document to exist; Firestore answers 404 otherwise."""
        db, seen = _client(lambda r: httpx.Response(404, json={"error": {"code": 404}}))
        updated = await db.collection("villas").document("nope").update({"name": "Luna", "price eur": 5})
        assert updated is False
        params = seen[0].url.params
        assert seen[0].method == "PATCH"
        assert params.get_list("updateMask.fieldPaths") == ["name", "`price eur`"]
        assert params["currentDocument.exists"] == "true"

    async def test_update_existing_document_returns_true(self) -> None:
        db, _ = _client(lambda r: httpx.Response(200, json=_doc("villas", "v1", name="Luna")))
        assert await db.collection("villas").document("v1").update({"name": "Luna"}) is True

    async def test_server_error_raises_database_error(self) -> None:
        db, _ = _client(lambda r: httpx.Response(500, text="backend unavailable"))
        with pytest.raises(DatabaseError) as exc_info:
            await db.collection("villas").document("v1").get()
        assert exc_info.value.error_code == "DATABASE_ERROR"
        assert exc_info.value.details["status_code"] == 500

    async def test_transport_error_raises_database_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        db, _ = _client(refuse)
        with pytest.raises(DatabaseError):
            await db.collection("villas").document("v1").delete()


class TestCollectionReference:
    async def test_create_conflict_raises_document_exists(self) -> None:
        db, seen = _client(lambda r: httpx.Response(409, json={"error": {"code": 409}}))
        with pytest.raises(DocumentExistsException) as exc_info:
            await db.collection("companies").create("c1", {"name": "One"})
        assert exc_info.value.error_code == "DOCUMENT_EXISTS"
        assert exc_info.value.details == {"collection": "companies", "document_id": "c1"}
        assert seen[0].url.params["documentId"] == "c1"

    async def test_add_returns_server_assigned_id(self) -> None:
        db, _ = _client(lambda r: httpx.Response(200, json=_doc("expenses", "auto123")))
        assert await db.collection("expenses").add({"amount": 5}) == "auto123"

    async def test_stream_follows_page_tokens(self) -> None:
        pages = {
            None: {"documents": [_doc("clients", "a"), _doc("clients", "b")], "nextPageToken": "p2"},
            "p2": {"documents": [_doc("clients", "c", name="Ana")]},
        }
        db, seen = _client(lambda r: httpx.Response(200, json=pages[r.url.params.get("pageToken")]))
        ids = [snapshot.id async for snapshot in db.collection("clients").stream()]
        assert ids == ["a", "b", "c"]
        assert len(seen) == 2
        assert seen[1].url.params["pageToken"] == "p2"

    async def test_stream_missing_collection_is_empty(self) -> None:
        db, _ = _client(lambda r: httpx.Response(404))
        assert [s async for s in db.collection("clients").stream()] == []

    async def test_where_runs_structured_query(self) -> None:
        results = [
            {"document": _doc("offers", "o1", companyId="c1")},
            {"readTime": "2026-01-01T00:00:00Z"},
        ]
        db, seen = _client(lambda r: httpx.Response(200, json=results))
        query = db.collection("offers").where("companyId", "==", "c1").where("status", "in", ["sent"])
        found = [s.to_dict() async for s in query.order_by("createdAt", "DESCENDING").limit(5).stream()]
        assert found == [{"companyId": "c1"}]

        assert seen[0].url.path.endswith(":runQuery")
        structured = json.loads(seen[0].content)["structuredQuery"]
        assert structured["from"] == [{"collectionId": "offers"}]
        filters = structured["where"]["compositeFilter"]["filters"]
        assert [f["fieldFilter"]["op"] for f in filters] == ["EQUAL", "IN"]
        assert structured["orderBy"][0]["direction"] == "DESCENDING"
        assert structured["limit"] == 5


class TestWriteBatch:
    async def test_commit_splits_into_chunks(self) -> None:
        db, seen = _client(lambda r: httpx.Response(200, json={"writeResults": []}))
        batch = db.batch()
        clients = db.collection("clients")
        for i in range(MAX_BATCH_WRITES * 2 + 1):
            batch.delete(clients.document(f"cl{i}"))
        assert len(batch) == 1001

        assert await batch.commit() == 1001
        assert len(batch) == 0
        sizes = [len(json.loads(r.content)["writes"]) for r in seen]
        assert sizes == [500, 500, 1]
        assert all(r.url.path.endswith(":commit") for r in seen)

    async def test_update_write_requires_existing_document(self) -> None:
        db, seen = _client(lambda r: httpx.Response(200, json={}))
        batch = db.batch()
        batch.update(db.collection("collaborators").document("col1"), {"paidTotal": 0})
        await batch.commit()
        write = json.loads(seen[0].content)["writes"][0]
        assert write["currentDocument"] == {"exists": True}
        assert write["updateMask"] == {"fieldPaths": ["paidTotal"]}
        assert write["update"]["name"] == f"{PREFIX}/collaborators/col1"

    async def test_empty_commit_sends_nothing(self) -> None:
        db, seen = _client(lambda r: httpx.Response(200, json={}))
        assert await db.batch().commit() == 0
        assert seen == []
