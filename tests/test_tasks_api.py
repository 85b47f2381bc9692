from datetime import datetime


async def _create(client, **data):
    payload = {"title": "Fix bug", "description": "Stack trace en login", "priority": "high"}
    payload.update(data)
    response = await client.post("/tasks", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_defaults_and_owner_fallback(client):
    task = await _create(client, user_id="user-7", user_name="Ana")

    assert task["status"] == "todo"
    assert task["priority"] == "high"
    assert task["assigned_to"] == "user-7"


async def test_move_to_done_only_changes_status(client):
    task = await _create(client)

    response = await client.put(f"/tasks/{task['id']}", json={"status": "done"})

    assert response.status_code == 200
    updated = response.json()
    assert updated["status"] == "done"
    assert updated["title"] == "Fix bug"
    assert updated["description"] == "Stack trace en login"
    assert updated["priority"] == "high"
    assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(task["updated_at"])


async def test_filter_by_user(client):
    await _create(client, title="Una", assigned_to="user-1")
    await _create(client, title="Otra", assigned_to="user-2")

    response = await client.get("/tasks", params={"user_id": "user-1"})

    assert [t["title"] for t in response.json()] == ["Una"]
    assert len((await client.get("/tasks")).json()) == 2


async def test_invalid_status_is_rejected(client):
    task = await _create(client)

    response = await client.put(f"/tasks/{task['id']}", json={"status": "archived"})

    assert response.status_code == 422


async def test_null_title_surfaces_storage_error(client):
    task = await _create(client)

    response = await client.put(f"/tasks/{task['id']}", json={"title": None})

    assert response.status_code == 500
    assert response.json()["message"].startswith("Error actualizando tarea")

    # la fila sigue intacta
    fetched = await client.get(f"/tasks/{task['id']}")
    assert fetched.json()["title"] == "Fix bug"


async def test_unknown_task_returns_404(client):
    response = await client.put("/tasks/no-existe", json={"status": "done"})
    assert response.status_code == 404
    assert response.json()["message"] == "Tarea no encontrada"

    assert (await client.get("/tasks/no-existe")).status_code == 404


async def test_delete_task(client):
    task = await _create(client)

    response = await client.delete(f"/tasks/{task['id']}")

    assert response.status_code == 200
    assert response.json()["title"] == "Fix bug"
    assert (await client.get(f"/tasks/{task['id']}")).status_code == 404


async def test_empty_due_date_clears_it(client):
    task = await _create(client, due_date="2026-06-15")
    assert task["due_date"] == "2026-06-15"

    response = await client.put(f"/tasks/{task['id']}", json={"due_date": ""})

    assert response.status_code == 200
    assert response.json()["due_date"] is None
    assert response.json()["title"] == "Fix bug"

    created = await _create(client, title="Sin fecha", due_date="")
    assert created["due_date"] is None
