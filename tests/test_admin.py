async def test_admin_routes_require_admin_role(client, make_user):
    alice = await make_user("Alice", "alice@example.com")

    assert (await client.get("/admin/tasks", headers=alice["headers"])).status_code == 403
    response = await client.get(f"/admin/tasks/{alice['user']['user_id']}", headers=alice["headers"])
    assert response.status_code == 403
    assert response.json() == {"message": "Forbidden"}


async def test_admin_routes_require_authentication(client):
    assert (await client.get("/admin/tasks")).status_code == 401
    assert (await client.get("/admin/tasks/1")).status_code == 401


async def test_list_users_with_tasks_counts(client, admin, make_user, make_category, make_task):
    alice = await make_user("Alice", "alice@example.com")
    bob = await make_user("Bob", "bob@example.com")
    await make_user("Carol", "carol@example.com")  # no tasks: excluded

    alice_cat = await make_category(alice["headers"])
    bob_cat = await make_category(bob["headers"])
    for title in ("one", "two", "three"):
        await make_task(alice["headers"], alice_cat["category_id"], title=title)
    await make_task(bob["headers"], bob_cat["category_id"], title="solo")
    dropped = await make_task(bob["headers"], bob_cat["category_id"], title="dropped")
    await client.delete(f"/tasks/{dropped['task_id']}", headers=bob["headers"])

    response = await client.get("/admin/tasks", headers=admin["headers"])

    assert response.status_code == 200
    assert response.json() == [
        {"email": "alice@example.com", "tasks_count": 3},
        {"email": "bob@example.com", "tasks_count": 1},
    ]


async def test_list_users_with_tasks_empty(client, admin, make_user):
    await make_user("Alice", "alice@example.com")
    response = await client.get("/admin/tasks", headers=admin["headers"])

    assert response.status_code == 200
    assert response.json() == []


async def test_user_task_breakdown(client, admin, make_user, make_category, make_task):
    alice = await make_user("Alice", "alice@example.com")
    work = await make_category(alice["headers"], name="Work")
    home = await make_category(alice["headers"], name="Home")
    await make_category(alice["headers"], name="Empty")
    await make_task(alice["headers"], work["category_id"], title="a")
    await make_task(alice["headers"], work["category_id"], title="b")
    await make_task(alice["headers"], home["category_id"], title="c")

    response = await client.get(f"/admin/tasks/{alice['user']['user_id']}", headers=admin["headers"])

    assert response.status_code == 200
    assert response.json() == {
        "email": "alice@example.com",
        "categories": [
            {"category_name": "Work", "task_count": 2},
            {"category_name": "Home", "task_count": 1},
        ],
    }


async def test_user_task_breakdown_without_tasks(client, admin, make_user):
    alice = await make_user("Alice", "alice@example.com")
    response = await client.get(f"/admin/tasks/{alice['user']['user_id']}", headers=admin["headers"])

    assert response.status_code == 200
    assert response.json() == {"email": "alice@example.com", "categories": []}


async def test_user_task_breakdown_unknown_user(client, admin):
    response = await client.get("/admin/tasks/999", headers=admin["headers"])

    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


async def test_user_task_breakdown_oversized_id(client, admin):
    response = await client.get("/admin/tasks/99999999999999999999", headers=admin["headers"])

    assert response.status_code == 422
    assert "user_id" in response.json()["errors"]
