import uuid

from conftest import ALICE


def test_requires_session(client):
    response = client.get("/projects")
    assert response.status_code == 401
    assert response.json()["detail"] == "Session is required"


def test_create_sets_owner_from_session(client, alice_headers):
    response = client.post("/projects", json={"name": "Downtown Loft"}, headers=alice_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Downtown Loft"
    assert body["userId"] == ALICE.user.id
    assert body["createdAt"]


def test_create_rejects_client_supplied_owner(client, alice_headers):
    response = client.post(
        "/projects",
        json={"name": "Loft", "userId": "someone-else"},
        headers=alice_headers,
    )
    assert response.status_code == 422


def test_list_is_scoped_and_newest_first(client, repositories, alice_headers, bob_headers):
    projects = repositories.get("projects")
    projects.create({"name": "Old", "user_id": ALICE.user.id, "created_at": "2025-01-01T00:00:00+00:00"})
    projects.create({"name": "New", "user_id": ALICE.user.id, "created_at": "2025-06-01T00:00:00+00:00"})
    client.post("/projects", json={"name": "Bob's"}, headers=bob_headers)

    names = [p["name"] for p in client.get("/projects", headers=alice_headers).json()]
    assert names == ["New", "Old"]


def test_other_users_project_is_not_found(client, alice_headers, bob_headers):
    project = client.post("/projects", json={"name": "Private"}, headers=alice_headers).json()

    assert client.get(f"/projects/{project['id']}", headers=bob_headers).status_code == 404
    assert client.patch(f"/projects/{project['id']}", json={"name": "Mine"}, headers=bob_headers).status_code == 404
    assert client.delete(f"/projects/{project['id']}", headers=bob_headers).status_code == 404
    assert client.get(f"/projects/{project['id']}", headers=alice_headers).status_code == 200


def test_rename_and_delete(client, alice_headers):
    project = client.post("/projects", json={"name": "Draft"}, headers=alice_headers).json()

    renamed = client.patch(f"/projects/{project['id']}", json={"name": "Final"}, headers=alice_headers)
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Final"

    assert client.delete(f"/projects/{project['id']}", headers=alice_headers).status_code == 204
    assert client.get(f"/projects/{project['id']}", headers=alice_headers).status_code == 404


def test_missing_project_returns_404(client, alice_headers):
    response = client.get(f"/projects/{uuid.uuid4()}", headers=alice_headers)
    assert response.status_code == 404


def test_rename_to_null_is_rejected(client, alice_headers):
    project = client.post("/projects", json={"name": "Draft"}, headers=alice_headers).json()

    response = client.patch(f"/projects/{project['id']}", json={"name": None}, headers=alice_headers)

    assert response.status_code == 422
    assert client.get(f"/projects/{project['id']}", headers=alice_headers).json()["name"] == "Draft"
