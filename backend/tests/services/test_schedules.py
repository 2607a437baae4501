"""Schedules — owner-only mutation, cascade delete, paged listing with comment counts.

Invariants:
    - A schedule is owned by its creator; username in responses is the owner's
    - Non-owner update/delete is refused and leaves the schedule unchanged
    - Deleting a schedule removes its comments in the same transaction
    - Paged listing: modified_at DESC, ties by id ASC, 1-based pages, live comment counts
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import update

from scheduler.api.dependencies import MAX_PAGE, MAX_PAGE_SIZE
from scheduler.models.schedule import Schedule
from scheduler.repositories import CommentRepository


async def test_create_schedule(client, alice):
    res = await client.post(
        "/api/schedules",
        json={"title": "Standup", "content": "Daily sync"},
        headers=alice.headers,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["title"] == "Standup"
    assert body["username"] == "alice"
    assert body["created_at"]
    assert body["modified_at"]


async def test_create_requires_session(client):
    res = await client.post("/api/schedules", json={"title": "t", "content": "c"})
    assert res.status_code == 401


async def test_blank_title_is_validation_error(client, alice):
    res = await client.post(
        "/api/schedules", json={"title": "  ", "content": "c"}, headers=alice.headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_title_over_100_chars_rejected(client, alice):
    res = await client.post(
        "/api/schedules", json={"title": "x" * 101, "content": "c"}, headers=alice.headers,
    )
    assert res.status_code == 400


async def test_get_and_list(client, alice, bob, create_schedule):
    mine = await create_schedule(alice, "Mine")
    theirs = await create_schedule(bob, "Theirs")

    res = await client.get(f"/api/schedules/{theirs['id']}", headers=alice.headers)
    assert res.status_code == 200
    assert res.json()["username"] == "bob"

    res = await client.get("/api/schedules", headers=alice.headers)
    assert {s["id"] for s in res.json()} == {mine["id"], theirs["id"]}


async def test_get_unknown_schedule(client, alice):
    res = await client.get("/api/schedules/9999", headers=alice.headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "SCHEDULE_NOT_FOUND"


async def test_owner_updates_schedule(client, alice, create_schedule):
    schedule = await create_schedule(alice)
    res = await client.put(
        f"/api/schedules/{schedule['id']}",
        json={"title": "Retro", "content": "Fortnightly"},
        headers=alice.headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "Retro"
    assert body["content"] == "Fortnightly"
    assert body["created_at"] == schedule["created_at"]


async def test_non_owner_update_forbidden_and_unchanged(client, alice, bob, create_schedule):
    schedule = await create_schedule(alice, "Original")
    res = await client.put(
        f"/api/schedules/{schedule['id']}",
        json={"title": "Hijacked", "content": "x"},
        headers=bob.headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "FORBIDDEN"

    res = await client.get(f"/api/schedules/{schedule['id']}", headers=bob.headers)
    assert res.json()["title"] == "Original"


async def test_update_unknown_schedule(client, alice):
    res = await client.put(
        "/api/schedules/9999", json={"title": "t", "content": "c"}, headers=alice.headers,
    )
    assert res.json()["error"]["code"] == "SCHEDULE_NOT_FOUND"


async def test_non_owner_delete_forbidden(client, alice, bob, create_schedule):
    schedule = await create_schedule(alice)
    res = await client.delete(f"/api/schedules/{schedule['id']}", headers=bob.headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "FORBIDDEN"

    res = await client.get(f"/api/schedules/{schedule['id']}", headers=bob.headers)
    assert res.status_code == 200


async def test_delete_cascades_to_comments(
    client, alice, bob, create_schedule, create_comment, test_db,
):
    schedule = await create_schedule(alice)
    other = await create_schedule(alice, "Keep")
    for _ in range(3):
        await create_comment(bob, schedule["id"])
    await create_comment(bob, other["id"])

    res = await client.delete(f"/api/schedules/{schedule['id']}", headers=alice.headers)
    assert res.status_code == 200

    res = await client.get(f"/api/schedules/{schedule['id']}", headers=alice.headers)
    assert res.json()["error"]["code"] == "SCHEDULE_NOT_FOUND"

    comments = CommentRepository(test_db)
    assert await comments.count_by_schedule(schedule["id"]) == 0
    assert await comments.count_by_schedule(other["id"]) == 1


async def test_paged_splits_into_pages(client, alice, create_schedule, test_db):
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    ids = [(await create_schedule(alice, f"Schedule {i}"))["id"] for i in range(15)]
    for i, schedule_id in enumerate(ids):
        await test_db.execute(
            update(Schedule)
            .where(Schedule.id == schedule_id)
            .values(modified_at=base + timedelta(minutes=i)),
        )
    await test_db.commit()
    newest_first = list(reversed(ids))

    res = await client.get("/api/schedules/paged?page=1&size=10", headers=alice.headers)
    assert res.status_code == 200
    body = res.json()
    assert len(body["items"]) == 10
    assert [s["id"] for s in body["items"]] == newest_first[:10]
    assert body["total_items"] == 15
    assert body["total_pages"] == 2

    res = await client.get("/api/schedules/paged?page=2&size=10", headers=alice.headers)
    assert [s["id"] for s in res.json()["items"]] == newest_first[10:]

    res = await client.get("/api/schedules/paged?page=3&size=10", headers=alice.headers)
    assert res.json()["items"] == []


async def test_paged_defaults(client, alice, create_schedule):
    await create_schedule(alice)
    res = await client.get("/api/schedules/paged", headers=alice.headers)
    body = res.json()
    assert body["page"] == 1
    assert body["size"] == 10


async def test_paged_orders_by_modified_desc_then_id(client, alice, create_schedule, test_db):
    a = await create_schedule(alice, "A")
    b = await create_schedule(alice, "B")
    c = await create_schedule(alice, "C")
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    stamps = {a["id"]: base, b["id"]: base + timedelta(hours=1), c["id"]: base}
    for schedule_id, stamp in stamps.items():
        await test_db.execute(
            update(Schedule).where(Schedule.id == schedule_id).values(modified_at=stamp),
        )
    await test_db.commit()

    res = await client.get("/api/schedules/paged", headers=alice.headers)
    assert [s["id"] for s in res.json()["items"]] == [b["id"], a["id"], c["id"]]


async def test_paged_counts_comments(
    client, alice, bob, create_schedule, create_comment,
):
    busy = await create_schedule(alice, "Busy")
    quiet = await create_schedule(alice, "Quiet")
    for _ in range(3):
        await create_comment(bob, busy["id"])

    res = await client.get("/api/schedules/paged", headers=alice.headers)
    counts = {s["id"]: s["comment_count"] for s in res.json()["items"]}
    assert counts == {busy["id"]: 3, quiet["id"]: 0}


async def test_paged_rejects_bad_page_params(client, alice):
    for query in ("page=0", "size=0", "size=101"):
        res = await client.get(f"/api/schedules/paged?{query}", headers=alice.headers)
        assert res.status_code == 400, query
        assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_update_moves_schedule_to_front_of_paged(client, alice, create_schedule):
    older = await create_schedule(alice, "Older")
    newer = await create_schedule(alice, "Newer")

    res = await client.get("/api/schedules/paged", headers=alice.headers)
    assert [s["id"] for s in res.json()["items"]] == [newer["id"], older["id"]]

    res = await client.put(
        f"/api/schedules/{older['id']}",
        json={"title": "Older, edited", "content": "Daily sync"},
        headers=alice.headers,
    )
    assert res.status_code == 200
    touched = datetime.fromisoformat(res.json()["modified_at"])
    assert touched > datetime.fromisoformat(older["modified_at"])

    res = await client.get("/api/schedules/paged", headers=alice.headers)
    assert [s["id"] for s in res.json()["items"]] == [older["id"], newer["id"]]


async def test_paged_reports_has_next(client, alice, create_schedule):
    for i in range(3):
        await create_schedule(alice, f"Schedule {i}")

    res = await client.get("/api/schedules/paged?page=1&size=2", headers=alice.headers)
    assert res.json()["has_next"] is True
    res = await client.get("/api/schedules/paged?page=2&size=2", headers=alice.headers)
    assert res.json()["has_next"] is False


async def test_oversized_ids_and_pages_are_validation_errors(client, alice):
    huge = 10**19
    for path in (
        f"/api/schedules/paged?page={huge}&size=10",
        f"/api/schedules/{huge}",
        f"/api/schedules/{2**31}",
        "/api/schedules/0",
    ):
        res = await client.get(path, headers=alice.headers)
        assert res.status_code == 400, path
        assert res.json()["error"]["code"] == "VALIDATION_ERROR"

    res = await client.put(
        f"/api/schedules/{huge}", json={"title": "t", "content": "c"}, headers=alice.headers,
    )
    assert res.status_code == 400
    res = await client.delete(f"/api/schedules/{huge}", headers=alice.headers)
    assert res.status_code == 400


async def test_last_reachable_page_is_empty_not_an_error(client, alice, create_schedule):
    await create_schedule(alice)
    res = await client.get(
        f"/api/schedules/paged?page={MAX_PAGE}&size={MAX_PAGE_SIZE}", headers=alice.headers,
    )
    assert res.status_code == 200
    assert res.json()["items"] == []
