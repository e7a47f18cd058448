"""API tests for offers: drafting, overview, status changes and conversion."""

import pytest
from httpx import AsyncClient


@pytest.fixture
async def offer_client(store, company: str) -> str:
    await store.collection("clients").document("cl-ana").set(
        {"companyId": company, "name": "Ana Pop", "email": "ana@example.com"}
    )
    return "cl-ana"


def _offer_body(client_id: str | None = "cl-ana") -> dict:
    return {
        "client_id": client_id,
        "items": [
            {"name": "Villa Sol", "category": "villas", "price": 500, "quantity": 3},
            {
                "name": "Boat day",
                "category": "boats",
                "price": 400,
                "quantity": 1,
                "discountType": "percentage",
                "discountValue": 25,
            },
        ],
        "discount_type": "fixed",
        "discount_value": 100,
        "notes": "Summer proposal",
    }


async def _create_offer(client: AsyncClient, headers: dict[str, str]) -> dict:
    response = await client.post("/api/v1/offers", json=_offer_body(), headers=headers)
    assert response.status_code == 201
    return response.json()


async def test_create_offer_prices_items(
    client: AsyncClient, admin_headers: dict[str, str], offer_client: str
) -> None:
    """A new offer is a draft; the offer-level discount applies to the subtotal."""
    offer = await _create_offer(client, admin_headers)
    assert offer["status"] == "draft"
    assert offer["subtotal"] == 1900.0
    assert offer["totalValue"] == 1800.0
    assert offer["clientName"] == "Ana Pop"
    assert offer["companyId"] == "company1"


async def test_create_offer_requires_client(
    client: AsyncClient, admin_headers: dict[str, str], offer_client: str
) -> None:
    response = await client.post("/api/v1/offers", json=_offer_body(None), headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_create_offer_requires_items(
    client: AsyncClient, admin_headers: dict[str, str], offer_client: str
) -> None:
    body = {**_offer_body(), "items": []}
    response = await client.post("/api/v1/offers", json=body, headers=admin_headers)
    assert response.status_code == 422


async def test_create_offer_for_unknown_client(
    client: AsyncClient, admin_headers: dict[str, str], offer_client: str
) -> None:
    response = await client.post("/api/v1/offers", json=_offer_body("cl-ghost"), headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_overview_lists_drafts_first(
    client: AsyncClient, store, admin_headers: dict[str, str], offer_client: str
) -> None:
    """Drafts are high priority; accepted offers need nothing."""
    await store.collection("offers").document("o-old").set(
        {"companyId": "company1", "clientId": "cl-ana", "status": "accepted", "createdAt": "2026-01-01T00:00:00Z"}
    )
    draft = await _create_offer(client, admin_headers)

    response = await client.get("/api/v1/offers/overview", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["stats"] == {"total": 2, "pending": 1, "booked": 0}
    first, second = data["items"]
    assert first["offer"]["id"] == draft["id"]
    assert first["action"] == {
        "needed": True,
        "message": "Complete and send offer",
        "priority": "high",
        "days_ago": 0,
    }
    assert second["action"]["needed"] is False


async def test_status_and_update(
    client: AsyncClient, admin_headers: dict[str, str], offer_client: str
) -> None:
    """Status moves through the lifecycle; editing items returns the offer to draft."""
    offer = await _create_offer(client, admin_headers)
    sent = await client.patch(
        f"/api/v1/offers/{offer['id']}/status", json={"status": "sent"}, headers=admin_headers
    )
    assert sent.status_code == 200
    assert sent.json()["status"] == "sent"

    body = {**_offer_body(), "discount_type": None, "discount_value": None}
    updated = await client.put(f"/api/v1/offers/{offer['id']}", json=body, headers=admin_headers)
    assert updated.status_code == 200
    data = updated.json()
    assert data["status"] == "draft"
    assert data["totalValue"] == 1900.0
    assert data["createdAt"] == offer["createdAt"]


async def test_status_cannot_be_set_to_booked(
    client: AsyncClient, admin_headers: dict[str, str], offer_client: str
) -> None:
    offer = await _create_offer(client, admin_headers)
    response = await client.patch(
        f"/api/v1/offers/{offer['id']}/status", json={"status": "booked"}, headers=admin_headers
    )
    assert response.status_code == 422


async def test_convert_offer(
    client: AsyncClient, store, admin_headers: dict[str, str], offer_client: str
) -> None:
    """Conversion creates a reservation from the included items and books the offer."""
    offer = await _create_offer(client, admin_headers)
    response = await client.post(
        f"/api/v1/offers/{offer['id']}/convert",
        json={
            "check_in": "2026-07-01",
            "check_out": "2026-07-08",
            "adults": 3,
            "services": {"0": {"amount_paid": 1000}, "1": {"included": False}},
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    reservation = response.json()
    assert reservation["offerId"] == offer["id"]
    assert reservation["accommodationType"] == "Villa Sol"
    assert reservation["totalAmount"] == 1500.0
    assert reservation["totalPaid"] == 1000.0
    assert reservation["paymentStatus"] == "partiallyPaid"
    assert len(reservation["services"]) == 1
    assert reservation["services"][0]["startDate"] == "2026-07-01"

    stored_offer = (await store.collection("offers").document(offer["id"]).get()).to_dict()
    assert stored_offer["status"] == "booked"
    client_doc = (await store.collection("clients").document("cl-ana").get()).to_dict()
    assert client_doc["upcomingReservations"][0]["id"] == reservation["id"]

    again = await client.post(f"/api/v1/offers/{offer['id']}/convert", json={}, headers=admin_headers)
    assert again.status_code == 409
    assert again.json()["error"] == "OFFER_ALREADY_BOOKED"


async def test_convert_legacy_offer_with_negative_discount(
    client: AsyncClient, store, admin_headers: dict[str, str], offer_client: str
) -> None:
    """Stored offers written before validation convert with bad discounts ignored."""
    await store.collection("offers").document("o-legacy").set(
        {
            "companyId": "company1",
            "clientId": "cl-ana",
            "status": "sent",
            "items": [{"name": "Chef", "price": 100, "discountType": "fixed", "discountValue": -5}],
            "discountType": "percentage",
            "discountValue": -10,
        }
    )
    response = await client.post("/api/v1/offers/o-legacy/convert", json={}, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["totalAmount"] == 100.0


async def test_booked_offer_is_locked(
    client: AsyncClient, admin_headers: dict[str, str], offer_client: str
) -> None:
    """A booked offer cannot be deleted, edited or have its status changed."""
    offer = await _create_offer(client, admin_headers)
    await client.post(f"/api/v1/offers/{offer['id']}/convert", json={}, headers=admin_headers)

    delete = await client.delete(f"/api/v1/offers/{offer['id']}", headers=admin_headers)
    assert delete.status_code == 409
    update = await client.put(f"/api/v1/offers/{offer['id']}", json=_offer_body(), headers=admin_headers)
    assert update.status_code == 409
    status = await client.patch(
        f"/api/v1/offers/{offer['id']}/status", json={"status": "sent"}, headers=admin_headers
    )
    assert status.status_code == 409


async def test_delete_offer(
    client: AsyncClient, admin_headers: dict[str, str], offer_client: str
) -> None:
    offer = await _create_offer(client, admin_headers)
    response = await client.delete(f"/api/v1/offers/{offer['id']}", headers=admin_headers)
    assert response.status_code == 204
    missing = await client.get(f"/api/v1/offers/{offer['id']}", headers=admin_headers)
    assert missing.status_code == 404


async def test_offers_are_company_scoped(
    client: AsyncClient, admin_headers: dict[str, str], offer_client: str
) -> None:
    """Another company cannot see or delete the offer."""
    offer = await _create_offer(client, admin_headers)
    other = {**admin_headers, "X-Company-ID": "company2"}
    assert (await client.get(f"/api/v1/offers/{offer['id']}", headers=other)).status_code == 404
    assert (await client.delete(f"/api/v1/offers/{offer['id']}", headers=other)).status_code == 404
    listed = await client.get("/api/v1/offers", headers=other)
    assert listed.json()["total"] == 0
