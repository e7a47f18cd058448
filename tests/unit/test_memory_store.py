"""Tests for the in-memory document store and settings validation."""

import pytest
from pydantic import ValidationError

from concierge.core.config import Settings
from concierge.domain.exceptions import DocumentExistsException
from concierge.infrastructure.firebase.memory_client import MemoryFirestoreClient


class TestMemoryFirestoreClient:
    """Same async surface as the Firestore REST client."""

    async def test_set_get_update_delete(self) -> None:
        db = MemoryFirestoreClient()
        ref = db.collection("villas").document("v1")
        await ref.set({"name": "Sol", "companyId": "c1"})
        assert (await ref.get()).to_dict()["name"] == "Sol"
        assert await ref.update({"name": "Luna"})
        assert (await ref.get()).to_dict() == {"name": "Luna", "companyId": "c1"}
        await ref.delete()
        assert await ref.get() is None

    async def test_update_missing_returns_false(self) -> None:
        db = MemoryFirestoreClient()
        assert not await db.collection("villas").document("nope").update({"a": 1})

    async def test_reads_are_copies(self) -> None:
        db = MemoryFirestoreClient()
        ref = db.collection("clients").document("cl1")
        await ref.set({"tags": ["vip"]})
        snapshot = await ref.get()
        snapshot.to_dict()["tags"].append("changed")
        assert (await ref.get()).to_dict() == {"tags": ["vip"]}

    async def test_create_rejects_existing_id(self) -> None:
        db = MemoryFirestoreClient()
        await db.collection("companies").create("c1", {"name": "One"})
        with pytest.raises(DocumentExistsException):
            await db.collection("companies").create("c1", {"name": "Again"})

    async def test_add_generates_id(self) -> None:
        db = MemoryFirestoreClient()
        doc_id = await db.collection("offers").add({"status": "draft"})
        assert doc_id
        assert (await db.collection("offers").document(doc_id).get()) is not None

    async def test_where_skips_missing_fields(self) -> None:
        db = MemoryFirestoreClient()
        coll = db.collection("reservations")
        await coll.document("a").set({"companyId": "c1", "clientId": "x"})
        await coll.document("b").set({"companyId": "c1"})
        await coll.document("c").set({"companyId": "c2", "clientId": "x"})
        ids = [d.id async for d in coll.where("companyId", "==", "c1").where("clientId", "==", "x").stream()]
        assert ids == ["a"]
        not_equal = [d.id async for d in coll.where("clientId", "!=", "y").stream()]
        assert sorted(not_equal) == ["a", "c"]

    async def test_batch_commit(self) -> None:
        db = MemoryFirestoreClient()
        coll = db.collection("expenses")
        await coll.document("e1").set({"amount": 1})
        batch = db.batch()
        batch.delete(coll.document("e1"))
        batch.set(coll.document("e2"), {"amount": 2})
        assert len(batch) == 2
        assert await batch.commit() == 2
        assert [d.id async for d in coll.stream()] == ["e2"]

    def test_clear(self) -> None:
        db = MemoryFirestoreClient()
        db._data["x"] = {"1": {}}
        db.clear()
        assert db._data == {}


class TestSettings:
    """Backend selection is validated when settings load."""

    def test_memory_backends_need_no_credentials(self) -> None:
        settings = Settings(database_backend="memory", storage_backend="memory")
        assert settings.photo_prefixes[0] == "villas/shared"

    def test_firestore_requires_credentials(self, monkeypatch) -> None:
        monkeypatch.delenv("FIREBASE_SERVICE_ACCOUNT_KEY", raising=False)
        monkeypatch.delenv("FIREBASE_SERVICE_ACCOUNT_PATH", raising=False)
        with pytest.raises(ValidationError, match="FIREBASE_SERVICE_ACCOUNT"):
            Settings(_env_file=None, database_backend="firestore", storage_backend="memory")

    def test_unknown_storage_backend(self) -> None:
        with pytest.raises(ValidationError, match="storage_backend"):
            Settings(_env_file=None, database_backend="memory", storage_backend="s3")

    def test_negative_follow_up_rejected(self) -> None:
        with pytest.raises(ValidationError, match="offer_follow_up_days"):
            Settings(_env_file=None, database_backend="memory", storage_backend="memory", offer_follow_up_days=-1)
