"""Users — registration uniqueness, self-only profile changes, guarded removal.

Invariants:
    - Responses never carry the password hash
    - Duplicate email is reported before duplicate username
    - Only the user themself may update or delete the account
    - Updates require the current password; new_password is optional
    - An account that still owns schedules or comments cannot be deleted
"""

from tests.services.api_helpers import login, register


async def test_register_returns_public_fields(client):
    res = await register(client, "alice", "alice@example.com")
    assert res.status_code == 201
    body = res.json()
    assert body["username"] == "alice"
    assert body["email"] == "alice@example.com"
    assert "password" not in body
    assert "password_hash" not in body


async def test_duplicate_email_rejected(client):
    await register(client, "alice", "alice@example.com")
    res = await register(client, "alice2", "alice@example.com")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_EMAIL"


async def test_duplicate_username_rejected(client):
    await register(client, "alice", "alice@example.com")
    res = await register(client, "alice", "other@example.com")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_USERNAME"


async def test_email_conflict_reported_before_username(client):
    await register(client, "alice", "alice@example.com")
    res = await register(client, "alice", "alice@example.com")
    assert res.json()["error"]["code"] == "DUPLICATE_EMAIL"


async def test_weak_password_is_validation_error(client):
    res = await register(client, "alice", "alice@example.com", "password")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_and_get_users(client, alice, bob):
    res = await client.get("/api/users", headers=alice.headers)
    assert res.status_code == 200
    assert [u["username"] for u in res.json()] == ["alice", "bob"]

    res = await client.get(f"/api/users/{bob.id}", headers=alice.headers)
    assert res.status_code == 200
    assert res.json()["email"] == "bob@example.com"


async def test_get_unknown_user(client, alice):
    res = await client.get("/api/users/9999", headers=alice.headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "USER_NOT_FOUND"


async def test_update_own_profile(client, alice, create_schedule):
    schedule = await create_schedule(alice)
    res = await client.put(f"/api/users/{alice.id}", headers=alice.headers, json={
        "username": "alicia",
        "email": "alicia@example.com",
        "current_password": alice.password,
    })
    assert res.status_code == 200
    assert res.json()["username"] == "alicia"

    # Owner name is read live, never copied onto the schedule
    res = await client.get(f"/api/schedules/{schedule['id']}", headers=alice.headers)
    assert res.json()["username"] == "alicia"


async def test_update_keeps_password_when_new_password_blank(client, alice):
    res = await client.put(f"/api/users/{alice.id}", headers=alice.headers, json={
        "username": "alice",
        "email": "alice@example.com",
        "current_password": alice.password,
        "new_password": "",
    })
    assert res.status_code == 200
    assert (await login(client, alice.email, alice.password)).status_code == 200


async def test_update_changes_password(client, alice):
    res = await client.put(f"/api/users/{alice.id}", headers=alice.headers, json={
        "username": "alice",
        "email": "alice@example.com",
        "current_password": alice.password,
        "new_password": "N3wpass!!",
    })
    assert res.status_code == 200
    assert (await login(client, alice.email, alice.password)).status_code == 400
    assert (await login(client, alice.email, "N3wpass!!")).status_code == 200


async def test_update_requires_current_password(client, alice):
    res = await client.put(f"/api/users/{alice.id}", headers=alice.headers, json={
        "username": "alicia",
        "email": "alice@example.com",
        "current_password": "Wr0ngpass!",
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_CREDENTIALS"


async def test_update_other_user_forbidden(client, alice, bob):
    res = await client.put(f"/api/users/{bob.id}", headers=alice.headers, json={
        "username": "hacked",
        "email": "bob@example.com",
        "current_password": bob.password,
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "FORBIDDEN"

    res = await client.get(f"/api/users/{bob.id}", headers=bob.headers)
    assert res.json()["username"] == "bob"


async def test_update_to_taken_email_rejected(client, alice, bob):
    res = await client.put(f"/api/users/{alice.id}", headers=alice.headers, json={
        "username": "alice",
        "email": "bob@example.com",
        "current_password": alice.password,
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_EMAIL"


async def test_update_to_taken_username_rejected(client, alice, bob):
    res = await client.put(f"/api/users/{alice.id}", headers=alice.headers, json={
        "username": "bob",
        "email": "alice@example.com",
        "current_password": alice.password,
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_USERNAME"


async def test_delete_own_account_ends_session(client, alice):
    res = await client.delete(f"/api/users/{alice.id}", headers=alice.headers)
    assert res.status_code == 200

    res = await client.get("/api/users", headers=alice.headers)
    assert res.status_code == 401


async def test_delete_other_account_forbidden(client, alice, bob):
    res = await client.delete(f"/api/users/{bob.id}", headers=alice.headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "FORBIDDEN"


async def test_delete_refused_while_user_owns_content(client, alice, create_schedule):
    await create_schedule(alice)
    res = await client.delete(f"/api/users/{alice.id}", headers=alice.headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "USER_HAS_CONTENT"


async def test_delete_refused_while_user_has_comments(
    client, alice, bob, create_schedule, create_comment,
):
    schedule = await create_schedule(alice)
    await create_comment(bob, schedule["id"])
    res = await client.delete(f"/api/users/{bob.id}", headers=bob.headers)
    assert res.json()["error"]["code"] == "USER_HAS_CONTENT"


async def test_oversized_user_id_is_validation_error(client, alice):
    res = await client.get(f"/api/users/{10**19}", headers=alice.headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
