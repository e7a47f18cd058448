"""API tests for the admin maintenance sweeps."""

from httpx import AsyncClient

from concierge.application.services.photo_paths import public_url
from concierge.infrastructure.exceptions import StorageLookupError
from concierge.infrastructure.external.storage.memory_storage import MemoryStorageService
from concierge.main import app

BUCKET_URL = "https://firebasestorage.googleapis.com/v0/b/test-bucket/o/"


async def test_maintenance_requires_admin(client: AsyncClient, agent_headers: dict[str, str]) -> None:
    response = await client.get("/api/v1/maintenance/orphaned-offers", headers=agent_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Admin role required"


async def test_find_and_prune_orphaned_offers(
    client: AsyncClient, store, admin_headers: dict[str, str]
) -> None:
    """Offers without a live client are reported, then deleted within the caller's company."""
    await store.collection("clients").document("cl1").set({"companyId": "company1", "name": "Ana"})
    offers = store.collection("offers")
    await offers.document("o-ok").set({"companyId": "company1", "clientId": "cl1", "status": "sent"})
    await offers.document("o-gone").set(
        {"companyId": "company1", "clientId": "cl-deleted", "clientName": "Old", "status": "draft"}
    )
    await offers.document("o-none").set({"companyId": "company1", "status": "draft"})
    await offers.document("o-other").set({"companyId": "company2", "clientId": "cl-x"})

    found = await client.get("/api/v1/maintenance/orphaned-offers", headers=admin_headers)
    assert found.status_code == 200
    report = found.json()
    assert report["total_offers"] == 3
    assert sorted(o["id"] for o in report["orphaned"]) == ["o-gone", "o-none"]
    assert report["by_company"] == {"company1": {"total": 3, "orphaned": 2}}
    assert report["deleted"] == 0

    everywhere = await client.get(
        "/api/v1/maintenance/orphaned-offers", params={"all_companies": "true"}, headers=admin_headers
    )
    assert everywhere.json()["total_offers"] == 4
    assert len(everywhere.json()["orphaned"]) == 3

    pruned = await client.post("/api/v1/maintenance/orphaned-offers/prune", headers=admin_headers)
    assert pruned.json()["deleted"] == 2
    assert await offers.document("o-gone").get() is None
    assert await offers.document("o-other").get() is not None


async def test_fix_villa_photos(
    client: AsyncClient, store, storage, admin_headers: dict[str, str]
) -> None:
    """Moved photos are repointed by filename; photos with no file left are dropped."""
    storage.put("company1/villas/v1/front.jpg")
    storage.put("villas/shared/pool.jpg")
    await store.collection("villas").document("v1").set(
        {
            "companyId": "company1",
            "name": "Villa Sol",
            "photos": [
                BUCKET_URL + "company1%2Fvillas%2Fv1%2Ffront.jpg?alt=media",
                {"url": BUCKET_URL + "old%2Fpool.jpg?alt=media", "caption": "Pool"},
                BUCKET_URL + "old%2Fgone.jpg?alt=media",
            ],
        }
    )
    await store.collection("villas").document("v2").set({"companyId": "company1", "photos": []})

    response = await client.post("/api/v1/maintenance/villa-photos/fix", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {
        "villas_checked": 1,
        "photos_checked": 3,
        "photos_fixed": 1,
        "photos_removed": 1,
        "villas_updated": 1,
        "storage_files": 2,
        "updated_villa_ids": ["v1"],
    }
    photos = (await store.collection("villas").document("v1").get()).to_dict()["photos"]
    assert len(photos) == 2
    assert photos[1] == {
        "url": public_url("test-bucket", "villas/shared/pool.jpg"),
        "path": "villas/shared/pool.jpg",
        "caption": "Pool",
    }
    assert "villas%2Fshared%2Fpool.jpg" in photos[1]["url"]


async def test_fix_villa_photos_without_storage(
    client: AsyncClient, admin_headers: dict[str, str], monkeypatch
) -> None:
    monkeypatch.setattr(app.state, "storage", None)
    response = await client.post("/api/v1/maintenance/villa-photos/fix", headers=admin_headers)
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"


async def test_remove_broken_photos(
    client: AsyncClient, store, storage, admin_headers: dict[str, str]
) -> None:
    storage.put("company1/villas/v1/front.jpg")
    await store.collection("villas").document("v1").set(
        {
            "companyId": "company1",
            "photos": [
                {"path": "company1/villas/v1/front.jpg"},
                BUCKET_URL + "company1%2Fvillas%2Fv1%2Fgone.jpg?alt=media",
                {"caption": "no path"},
            ],
        }
    )
    response = await client.post("/api/v1/maintenance/villa-photos/remove-broken", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["photos_removed"] == 2
    assert data["updated_villa_ids"] == ["v1"]
    photos = (await store.collection("villas").document("v1").get()).to_dict()["photos"]
    assert photos == [{"path": "company1/villas/v1/front.jpg"}]


class UnreachableStorage(MemoryStorageService):
    """Bucket whose lookups fail for paths under a given prefix."""

    def __init__(self, failing_prefix: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._failing_prefix = failing_prefix

    async def exists(self, path: str) -> bool:
        if path.startswith(self._failing_prefix):
            raise StorageLookupError(path, "HTTP 503")
        return await super().exists(path)


async def test_remove_broken_keeps_photos_when_lookup_fails(
    client: AsyncClient, store, admin_headers: dict[str, str], monkeypatch
) -> None:
    """Only missing objects are dropped; a failed lookup leaves the photo in place."""
    storage = UnreachableStorage("company1/villas/v1/flaky", bucket="test-bucket")
    monkeypatch.setattr(app.state, "storage", storage)
    await store.collection("villas").document("v1").set(
        {
            "companyId": "company1",
            "photos": [
                {"path": "company1/villas/v1/flaky.jpg"},
                {"path": "company1/villas/v1/gone.jpg"},
            ],
        }
    )
    response = await client.post("/api/v1/maintenance/villa-photos/remove-broken", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["photos_removed"] == 1
    photos = (await store.collection("villas").document("v1").get()).to_dict()["photos"]
    assert photos == [{"path": "company1/villas/v1/flaky.jpg"}]


async def test_dedupe_collaborator_payments(
    client: AsyncClient, store, admin_headers: dict[str, str]
) -> None:
    """Category payments named after collaborators (English or Romanian) are removed."""
    payments = store.collection("categoryPayments")
    await payments.document("p1").set({"companyId": "company1", "category": "Collaborator payouts", "amount": 10})
    await payments.document("p2").set({"companyId": "company1", "category": {"ro": "Plati colaboratori"}, "amount": 5})
    await payments.document("p3").set({"companyId": "company1", "category": "Boats", "amount": 7})
    await payments.document("p4").set({"companyId": "company2", "category": "Collaborator", "amount": 1})

    response = await client.post("/api/v1/maintenance/collaborator-payments/dedupe", headers=admin_headers)
    data = response.json()
    assert data["found"] == 2
    assert data["deleted"] == 2
    assert sorted(data["record_ids"]) == ["p1", "p2"]
    remaining = sorted([d.id async for d in payments.stream()])
    assert remaining == ["p3", "p4"]


async def test_remove_collaborator_payouts(
    client: AsyncClient, store, admin_headers: dict[str, str]
) -> None:
    """Payout records are deleted and the collaborators they paid are reset."""
    await store.collection("collaborators").document("col1").set(
        {"companyId": "company1", "name": "Mihai", "payments": [{"amount": 100}], "paidTotal": 100}
    )
    records = store.collection("financeRecords")
    await records.document("f1").set(
        {"companyId": "company1", "serviceKey": "collaborator_payout", "collaboratorId": "col1", "clientAmount": 0}
    )
    await records.document("f2").set({"companyId": "company1", "serviceKey": "svc-villa", "clientAmount": 100})

    response = await client.post("/api/v1/maintenance/collaborator-payouts/remove", headers=admin_headers)
    assert response.json() == {"found": 1, "deleted": 1, "collaborators_reset": 1, "record_ids": ["f1"]}
    collaborator = (await store.collection("collaborators").document("col1").get()).to_dict()
    assert collaborator["payments"] == []
    assert collaborator["paidTotal"] == 0
    assert await records.document("f2").get() is not None


async def test_reset_collaborator_payments(
    client: AsyncClient, store, admin_headers: dict[str, str]
) -> None:
    await store.collection("collaborators").document("col1").set({"companyId": "company1", "bookingCount": 4})
    await store.collection("collaborators").document("col2").set({"companyId": "company2", "bookingCount": 2})
    response = await client.post("/api/v1/maintenance/collaborators/reset-payments", headers=admin_headers)
    assert response.json() == {"collaborators_reset": 1}
    col1 = (await store.collection("collaborators").document("col1").get()).to_dict()
    assert col1["bookingCount"] == 0
    col2 = (await store.collection("collaborators").document("col2").get()).to_dict()
    assert col2["bookingCount"] == 2


async def test_finance_inventory_and_wipe(
    client: AsyncClient, store, admin_headers: dict[str, str]
) -> None:
    """Inventory counts every company; wipe only clears the caller's company."""
    records = store.collection("financeRecords")
    await records.document("f1").set({"companyId": "company1"})
    await records.document("f2").set({"companyId": "company1"})
    await records.document("f3").set({"companyId": "company2"})
    await store.collection("expenses").document("e1").set({"companyId": "company1", "amount": 5})

    inventory = await client.get("/api/v1/maintenance/finance/inventory", headers=admin_headers)
    assert inventory.json() == {
        "company1": {"finance": 2, "payments": 0, "expenses": 1},
        "company2": {"finance": 1, "payments": 0, "expenses": 0},
    }

    wiped = await client.post("/api/v1/maintenance/finance/wipe", headers=admin_headers)
    assert wiped.json() == {
        "records_deleted": 2,
        "payments_deleted": 0,
        "expenses_deleted": 1,
        "collaborators_reset": 0,
    }

    after = await client.get("/api/v1/maintenance/finance/inventory", headers=admin_headers)
    assert after.json() == {"company2": {"finance": 1, "payments": 0, "expenses": 0}}
