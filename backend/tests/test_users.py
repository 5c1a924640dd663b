"""Tests for owner-managed staff accounts."""

import uuid

import pytest

from stockroom.core.config import settings
from stockroom.core.security import verify_password


async def create_user(client, headers, **overrides) -> dict:
    payload = {"username": "jdoe", "fullName": "Jane Doe"}
    payload.update(overrides)
    resp = await client.post("/users", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_create_user_returns_generated_password(client, store, owner_headers):
    """Creating a user returns a one-time generated password."""
    body = await create_user(client, owner_headers)

    password = body["temporaryPassword"]
    assert len(password) == settings.GENERATED_PASSWORD_LENGTH
    user = body["user"]
    assert user["role"] == "employee"
    assert user["isActive"] is True
    assert user["createdBy"] == settings.OWNER_USERNAME
    stored = store.state.users[uuid.UUID(user["id"])]
    assert stored.hashed_password != password
    assert verify_password(password, stored.hashed_password)


@pytest.mark.asyncio
async def test_created_user_can_log_in(client, owner_headers):
    """The generated password logs the new user in."""
    body = await create_user(client, owner_headers)
    resp = await client.post("/login", json={"username": "jdoe", "password": body["temporaryPassword"]})
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "employee"


@pytest.mark.asyncio
async def test_create_user_duplicate_username(client, owner_headers):
    """Usernames are unique."""
    await create_user(client, owner_headers)
    resp = await client.post("/users", json={"username": "jdoe", "fullName": "Other"}, headers=owner_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Username already exists"


@pytest.mark.asyncio
async def test_list_users_newest_first(client, owner_headers):
    """Users are listed newest first."""
    await create_user(client, owner_headers, username="first")
    await create_user(client, owner_headers, username="second")

    resp = await client.get("/users", headers=owner_headers)

    usernames = [u["username"] for u in resp.json()["users"]]
    assert usernames[:2] == ["second", "first"]
    assert settings.OWNER_USERNAME in usernames


@pytest.mark.asyncio
async def test_deactivate_blocks_login(client, owner_headers):
    """A deactivated user can no longer log in."""
    body = await create_user(client, owner_headers)
    user_id = body["user"]["id"]

    resp = await client.patch(f"/users/{user_id}", json={"isActive": False}, headers=owner_headers)
    assert resp.status_code == 200
    assert resp.json()["user"]["isActive"] is False

    resp = await client.post("/login", json={"username": "jdoe", "password": body["temporaryPassword"]})
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_cannot_deactivate_owner(client, owner, owner_headers):
    """The owner account cannot be deactivated."""
    resp = await client.patch(f"/users/{owner.id}", json={"isActive": False}, headers=owner_headers)
    assert resp.status_code == 403
    assert owner.is_active is True


@pytest.mark.asyncio
async def test_delete_user(client, store, owner_headers):
    """Deleting a user removes the account."""
    body = await create_user(client, owner_headers)
    user_id = body["user"]["id"]

    resp = await client.delete(f"/users/{user_id}", headers=owner_headers)

    assert resp.status_code == 200
    assert uuid.UUID(user_id) not in store.state.users


@pytest.mark.asyncio
async def test_cannot_delete_owner(client, store, owner, owner_headers):
    """The owner account cannot be deleted."""
    resp = await client.delete(f"/users/{owner.id}", headers=owner_headers)

    assert resp.status_code == 403
    assert resp.json()["error"] == "Cannot delete owner account"
    assert owner.id in store.state.users


@pytest.mark.asyncio
async def test_update_missing_user(client, owner_headers):
    """Updating an unknown user is a 404."""
    resp = await client.patch(f"/users/{uuid.uuid4()}", json={"fullName": "Nobody"}, headers=owner_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_employee_cannot_create_users(client, employee_headers):
    """Only the owner manages accounts."""
    resp = await client.post("/users", json={"username": "sneaky", "fullName": "Sneaky"}, headers=employee_headers)
    assert resp.status_code == 403
