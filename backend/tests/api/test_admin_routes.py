"""Admin Routes — identity first, then role=admin, then admin-only reads.

Invariants:
    - No credential → 401 before any role lookup
    - Authenticated non-admin (premium or not) → 403 INSUFFICIENT_PRIVILEGE
    - Admin lesson listing includes private lessons
"""

import pytest

from tests.services.fake_store import bearer

ADMIN_PATHS = [
    "/api/v1/admin/users",
    "/api/v1/admin/lessons",
    "/api/v1/admin/reports",
    "/api/v1/admin/stats",
]


@pytest.mark.parametrize("path", ADMIN_PATHS)
async def test_admin_routes_require_credential(client, path):
    res = await client.get(path)
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "MISSING_CREDENTIAL"


@pytest.mark.parametrize("path", ADMIN_PATHS)
async def test_admin_routes_reject_regular_users(client, seed_account, path):
    await seed_account("ana@lessons.io", is_premium=True)
    res = await client.get(path, headers=bearer("ana@lessons.io"))
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "INSUFFICIENT_PRIVILEGE"


async def test_admin_routes_reject_unregistered_caller(client):
    res = await client.get("/api/v1/admin/stats", headers=bearer("ghost@lessons.io"))
    assert res.status_code == 403


async def test_list_users(client, seed_account):
    await seed_account("root@lessons.io", role="admin")
    await seed_account("ana@lessons.io")
    res = await client.get("/api/v1/admin/users", headers=bearer("root@lessons.io"))
    assert res.status_code == 200
    assert {u["email"] for u in res.json()} == {"root@lessons.io", "ana@lessons.io"}


async def test_list_lessons_includes_private(client, seed_account, seed_lesson):
    await seed_account("root@lessons.io", role="admin")
    await seed_lesson("ana@lessons.io", title="Open")
    await seed_lesson("ana@lessons.io", title="Secret", visibility="private")
    res = await client.get("/api/v1/admin/lessons", headers=bearer("root@lessons.io"))
    assert sorted(lesson["title"] for lesson in res.json()) == ["Open", "Secret"]


async def test_list_lessons_honors_filters(client, seed_account, seed_lesson):
    await seed_account("root@lessons.io", role="admin")
    await seed_lesson("ana@lessons.io", title="Secret growth", category="growth",
                      visibility="private")
    await seed_lesson("ana@lessons.io", title="Career", category="career")
    res = await client.get(
        "/api/v1/admin/lessons",
        headers=bearer("root@lessons.io"),
        params={"category": "growth"},
    )
    assert [lesson["title"] for lesson in res.json()] == ["Secret growth"]


async def test_stats_counts_documents(client, seed_account, seed_lesson):
    await seed_account("root@lessons.io", role="admin")
    await seed_account("ana@lessons.io")
    await seed_lesson("ana@lessons.io")
    await seed_lesson("ana@lessons.io", visibility="private")
    for reason in ("spam", "offensive"):
        await client.post(
            "/api/v1/reports",
            headers=bearer("ana@lessons.io"),
            json={"lessonId": "same", "reason": reason},
        )
    res = await client.get("/api/v1/admin/stats", headers=bearer("root@lessons.io"))
    assert res.status_code == 200
    assert res.json() == {"totalUsers": 2, "totalLessons": 2, "reportedLessons": 2}
