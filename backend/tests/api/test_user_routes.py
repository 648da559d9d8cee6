"""User Routes — HTTP status mapping and end-to-end soft-delete flows.

Invariants:
    - POST /v1/user → 201, GET → 200, PATCH → 200, DELETE → 204 with empty body
    - InvalidInput → 400, NotFound → 404, Deleted → 410, Persistence → 500
    - PATCH with no fields → 400 and the store is never called
    - GET /v1/users on an empty store → 200 []
"""

import asyncio
from datetime import datetime, timezone

import pytest

from user_dal.api.deps import Deadline, get_deadline
from user_dal.core.errors import (
    InvalidInputError, PersistenceError, UserDeletedError, UserNotFoundError,
)
from user_dal.core.user_entity import Entity, User, UserEntity

USER_ID = "123456789012345678901234567890123456"
CREATED = datetime(2020, 7, 23, tzinfo=timezone.utc)


def _entity(first="test", last="testison", user_id=USER_ID) -> UserEntity:
    return UserEntity(
        entity=Entity(id=user_id, created_at=CREATED, updated_at=CREATED),
        user=User(first, last),
    )


# ==============================================================================
# Status mapping (fake store)
# ==============================================================================


async def test_create_returns_201_with_flat_entity(fake_client, fake_store):
    fake_store.create.return_value = _entity()

    res = await fake_client.post(
        "/v1/user", json={"first_name": "test", "last_name": "testison"},
    )

    assert res.status_code == 201
    body = res.json()
    assert body["id"] == USER_ID
    assert body["first_name"] == "test"
    assert body["last_name"] == "testison"
    assert body["deleted_at"] is None
    fake_store.create.assert_awaited_once_with(User("test", "testison"))


@pytest.mark.parametrize("payload", [
    {"first_name": "test"},
    {"first_name": "   ", "last_name": "x"},
    {"first_name": 1, "last_name": "x"},
])
async def test_create_rejects_bad_body_with_400(fake_client, fake_store, payload):
    res = await fake_client.post("/v1/user", json=payload)

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    fake_store.create.assert_not_awaited()


async def test_create_rejects_malformed_json_with_400(fake_client, fake_store):
    res = await fake_client.post(
        "/v1/user", content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    fake_store.create.assert_not_awaited()


@pytest.mark.parametrize("error, status, code", [
    (InvalidInputError("user fetch_by_id id length 5", "id"), 400, "INVALID_INPUT"),
    (UserNotFoundError(USER_ID), 404, "USER_NOT_FOUND"),
    (UserDeletedError(USER_ID), 410, "USER_DELETED"),
    (PersistenceError("Connection or operational error", "fetch_by_id"), 500, "PERSISTENCE_ERROR"),
])
async def test_fetch_maps_store_errors(fake_client, fake_store, error, status, code):
    fake_store.fetch_by_id.side_effect = error

    res = await fake_client.get(f"/v1/users/{USER_ID}")

    assert res.status_code == status
    assert res.json()["error"]["code"] == code


async def test_persistence_error_body_hides_driver_details(fake_client, fake_store):
    err = PersistenceError("Database driver error", "create")
    err.__cause__ = RuntimeError("password=hunter2")
    fake_store.create.side_effect = err

    res = await fake_client.post(
        "/v1/user", json={"first_name": "a", "last_name": "b"},
    )

    assert res.status_code == 500
    assert "hunter2" not in res.text


async def test_list_returns_entities(fake_client, fake_store):
    fake_store.fetch_all.return_value = [
        _entity("test", "one"),
        _entity("test", "two", user_id=USER_ID[:-1] + "7"),
    ]

    res = await fake_client.get("/v1/users")

    assert res.status_code == 200
    assert [u["last_name"] for u in res.json()] == ["one", "two"]


async def test_list_empty_is_200_empty_array(fake_client, fake_store):
    fake_store.fetch_all.return_value = []

    res = await fake_client.get("/v1/users")

    assert res.status_code == 200
    assert res.json() == []


async def test_patch_without_fields_is_400_and_skips_store(fake_client, fake_store):
    res = await fake_client.patch(
        f"/v1/users/{USER_ID}", json={"first_name": "", "last_name": ""},
    )

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "user must have fields to update"
    fake_store.update.assert_not_awaited()


async def test_patch_passes_partial_to_store(fake_client, fake_store):
    fake_store.update.return_value = _entity("test", "C")

    res = await fake_client.patch(f"/v1/users/{USER_ID}", json={"last_name": "C"})

    assert res.status_code == 200
    fake_store.update.assert_awaited_once_with(USER_ID, User("", "C"))


@pytest.mark.parametrize("error, status", [
    (UserNotFoundError(USER_ID), 404),
    (UserDeletedError(USER_ID), 410),
])
async def test_patch_maps_visibility_errors(fake_client, fake_store, error, status):
    fake_store.update.side_effect = error
    res = await fake_client.patch(f"/v1/users/{USER_ID}", json={"first_name": "x"})
    assert res.status_code == status


async def test_delete_returns_204_without_body(fake_client, fake_store):
    res = await fake_client.delete(f"/v1/users/{USER_ID}")

    assert res.status_code == 204
    assert res.content == b""
    fake_store.delete.assert_awaited_once_with(USER_ID)


@pytest.mark.parametrize("error, status", [
    (UserNotFoundError(USER_ID), 404),
    (UserDeletedError(USER_ID), 410),
    (PersistenceError("Database operation failed", "delete"), 500),
])
async def test_delete_maps_store_errors(fake_client, fake_store, error, status):
    fake_store.delete.side_effect = error
    res = await fake_client.delete(f"/v1/users/{USER_ID}")
    assert res.status_code == status


async def test_store_call_past_deadline_is_504(fake_app, fake_client, fake_store):
    async def slow_fetch_all():
        await asyncio.sleep(1)
        return []

    fake_store.fetch_all.side_effect = slow_fetch_all
    fake_app.dependency_overrides[get_deadline] = lambda: Deadline(0.01)

    res = await fake_client.get("/v1/users")

    assert res.status_code == 504
    assert res.json()["error"]["code"] == "REQUEST_TIMEOUT"


# ==============================================================================
# End-to-end (real store)
# ==============================================================================


async def test_full_lifecycle(client):
    res = await client.post("/v1/user", json={"first_name": "A", "last_name": "B"})
    assert res.status_code == 201
    user_id = res.json()["id"]
    assert len(user_id) == 36

    res = await client.patch(f"/v1/users/{user_id}", json={"first_name": "", "last_name": "C"})
    assert res.status_code == 200
    assert (res.json()["first_name"], res.json()["last_name"]) == ("A", "C")

    res = await client.get(f"/v1/users/{user_id}")
    assert res.status_code == 200
    assert res.json()["last_name"] == "C"

    assert (await client.delete(f"/v1/users/{user_id}")).status_code == 204
    assert (await client.get(f"/v1/users/{user_id}")).status_code == 410
    assert (await client.delete(f"/v1/users/{user_id}")).status_code == 410
    assert (await client.patch(f"/v1/users/{user_id}", json={"first_name": "Z"})).status_code == 410
    assert (await client.get("/v1/users")).json() == []


async def test_unknown_id_is_404_and_short_id_is_400(client):
    assert (await client.get(f"/v1/users/{USER_ID}")).status_code == 404
    res = await client.get("/v1/users/short")
    assert res.status_code == 400
    assert res.json()["error"]["kind"] == "invalid_input"


async def test_list_keeps_creation_order_and_skips_deleted(client):
    ids = []
    for last in ("one", "two", "three"):
        res = await client.post("/v1/user", json={"first_name": "test", "last_name": last})
        ids.append(res.json()["id"])
    await client.delete(f"/v1/users/{ids[2]}")

    res = await client.get("/v1/users")

    assert [u["id"] for u in res.json()] == ids[:2]
