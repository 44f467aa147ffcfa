"""Engine, car and motorcycle inventory API tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

API = "/api/v1"

ENGINE_PAYLOAD = {
    "brand": "Rotax",
    "fuelType": "Petrol",
    "power": "90 hp",
    "torque": "128 Nm",
    "displacement": "1352 cc",
}


def _vehicle_payload(engine_id: int, **overrides: Any) -> dict[str, Any]:
    payload = {
        "brand": "Volvo",
        "model": "240",
        "year": "1988",
        "color": "Blue",
        "fuelType": "Petrol",
        "transmission": "Manual",
        "mileage": "210000",
        "price": "4500",
        "engineId": engine_id,
    }
    payload.update(overrides)
    return payload


async def _token(client: AsyncClient, email: str, password: str) -> str:
    resp = await client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp.json()["token"]


async def _headers(app_context: dict[str, Any]) -> tuple[dict[str, str], dict[str, str]]:
    """Return (admin, regular user) authorization headers."""
    client: AsyncClient = app_context["client"]
    admin_token = await _token(
        client, app_context["admin_email"], app_context["admin_password"]
    )
    register = await client.post(
        f"{API}/auth/register",
        json={
            "email": "clerk@example.com",
            "password": "clerk123",
            "confirmPassword": "clerk123",
            "firstName": "Cleo",
            "lastName": "Clerk",
        },
    )
    assert register.status_code == 200
    user_token = register.json()["token"]
    return (
        {"Authorization": f"Bearer {admin_token}"},
        {"Authorization": f"Bearer {user_token}"},
    )


async def _create_engine(client: AsyncClient, headers: dict[str, str], **overrides: Any) -> dict:
    resp = await client.post(
        f"{API}/engines", json={**ENGINE_PAYLOAD, **overrides}, headers=headers
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_engine_crud(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    admin, user = await _headers(app_context)

    created = await _create_engine(client, user)
    assert created["id"] > 0
    assert created["fuelType"] == "Petrol"
    assert created["displacement"] == "1352 cc"

    public_get = await client.get(f"{API}/engines/{created['id']}")
    assert public_get.status_code == 200
    assert public_get.json() == created

    updated = await client.put(
        f"{API}/engines/{created['id']}",
        json={**ENGINE_PAYLOAD, "power": "95 hp", "torque": None},
        headers=user,
    )
    assert updated.status_code == 200
    assert updated.json()["power"] == "95 hp"
    assert updated.json()["torque"] is None

    forbidden = await client.delete(f"{API}/engines/{created['id']}", headers=user)
    assert forbidden.status_code == 403

    deleted = await client.delete(f"{API}/engines/{created['id']}", headers=admin)
    assert deleted.status_code == 204

    missing = await client.get(f"{API}/engines/{created['id']}")
    assert missing.status_code == 404


async def test_engine_writes_require_authentication(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]

    create = await client.post(f"{API}/engines", json=ENGINE_PAYLOAD)
    assert create.status_code == 401

    update = await client.put(f"{API}/engines/1", json=ENGINE_PAYLOAD)
    assert update.status_code == 401

    delete = await client.delete(f"{API}/engines/1")
    assert delete.status_code == 401

    listing = await client.get(f"{API}/engines")
    assert listing.status_code == 200
    assert listing.json() == []


async def test_engine_validation_and_missing(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    admin, _ = await _headers(app_context)

    no_brand = await client.post(
        f"{API}/engines", json={"fuelType": "Diesel"}, headers=admin
    )
    assert no_brand.status_code == 400
    assert no_brand.json()["errors"][0]["field"] == "brand"

    update_missing = await client.put(f"{API}/engines/999", json=ENGINE_PAYLOAD, headers=admin)
    assert update_missing.status_code == 404

    delete_missing = await client.delete(f"{API}/engines/999", headers=admin)
    assert delete_missing.status_code == 404


async def test_engine_listing_is_paginated(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    admin, _ = await _headers(app_context)
    for index in range(5):
        await _create_engine(client, admin, brand=f"Engine {index}")

    page = await client.get(f"{API}/engines", params={"skip": 1, "limit": 2})
    assert page.status_code == 200
    assert [item["brand"] for item in page.json()] == ["Engine 1", "Engine 2"]

    too_large = await client.get(f"{API}/engines", params={"limit": 1000})
    assert too_large.status_code == 400


@pytest.mark.parametrize("resource", ["cars", "motorcycles"])
async def test_vehicle_crud(app_context: dict[str, Any], resource: str) -> None:
    client: AsyncClient = app_context["client"]
    admin, user = await _headers(app_context)
    engine = await _create_engine(client, admin)
    other_engine = await _create_engine(client, admin, brand="Honda")

    created = await client.post(
        f"{API}/{resource}", json=_vehicle_payload(engine["id"]), headers=user
    )
    assert created.status_code == 201, created.text
    vehicle = created.json()
    assert vehicle["engineId"] == engine["id"]
    assert vehicle["engine"]["brand"] == "Rotax"
    assert vehicle["fuelType"] == "Petrol"

    listing = await client.get(f"{API}/{resource}")
    assert listing.status_code == 200
    assert [item["id"] for item in listing.json()] == [vehicle["id"]]

    updated = await client.put(
        f"{API}/{resource}/{vehicle['id']}",
        json=_vehicle_payload(other_engine["id"], color="Red"),
        headers=user,
    )
    assert updated.status_code == 200
    assert updated.json()["color"] == "Red"
    assert updated.json()["engine"]["brand"] == "Honda"

    fetched = await client.get(f"{API}/{resource}/{vehicle['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["engineId"] == other_engine["id"]

    forbidden = await client.delete(f"{API}/{resource}/{vehicle['id']}", headers=user)
    assert forbidden.status_code == 403

    deleted = await client.delete(f"{API}/{resource}/{vehicle['id']}", headers=admin)
    assert deleted.status_code == 204

    gone = await client.get(f"{API}/{resource}/{vehicle['id']}")
    assert gone.status_code == 404


@pytest.mark.parametrize("resource", ["cars", "motorcycles"])
async def test_vehicle_requires_existing_engine(
    app_context: dict[str, Any], resource: str
) -> None:
    client: AsyncClient = app_context["client"]
    _, user = await _headers(app_context)

    created = await client.post(f"{API}/{resource}", json=_vehicle_payload(4242), headers=user)
    assert created.status_code == 400
    assert created.json()["detail"] == "Engine with the given id does not exist"

    unauthenticated = await client.post(f"{API}/{resource}", json=_vehicle_payload(1))
    assert unauthenticated.status_code == 401

    missing = await client.put(
        f"{API}/{resource}/999", json=_vehicle_payload(1), headers=user
    )
    assert missing.status_code == 404


async def test_engine_in_use_cannot_be_deleted(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    admin, _ = await _headers(app_context)
    engine = await _create_engine(client, admin)

    car = await client.post(f"{API}/cars", json=_vehicle_payload(engine["id"]), headers=admin)
    assert car.status_code == 201

    blocked = await client.delete(f"{API}/engines/{engine['id']}", headers=admin)
    assert blocked.status_code == 409

    await client.delete(f"{API}/cars/{car.json()['id']}", headers=admin)
    freed = await client.delete(f"{API}/engines/{engine['id']}", headers=admin)
    assert freed.status_code == 204
