"""
tests/test_users.py -- Tests for the /users routes

Covers: listing, first-sign-in creation (and the duplicate no-op), role and
name updates, admin-only deletion, and malformed identifiers.
"""

from conftest import bearer, seed


def test_list_users_is_open(client, cfg):
    seed(cfg, "users", {"email": "a@example.com", "name": "A"})
    resp = client.get("/users")
    assert resp.status_code == 200
    body = resp.json()
    assert [u["email"] for u in body] == ["a@example.com"]
    assert len(body[0]["_id"]) == 24


def test_create_user_returns_insert_result(client):
    resp = client.post("/users", json={"email": "new@example.com", "name": "New"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["acknowledged"] is True
    assert len(body["insertedId"]) == 24


def test_create_existing_user_is_noop(client):
    client.post("/users", json={"email": "new@example.com", "name": "New"})
    resp = client.post("/users", json={"email": "new@example.com", "name": "Renamed"})
    assert resp.json() == {"message": "User already exist"}
    users = client.get("/users").json()
    assert len(users) == 1
    assert users[0]["name"] == "New"


def test_new_user_has_no_role(client):
    client.post("/users", json={"email": "new@example.com", "name": "New"})
    user = client.get("/users").json()[0]
    assert "role" not in user
    resp = client.get("/users/admin/new@example.com", headers=bearer("new@example.com"))
    assert resp.json() == {"isAdmin": False}


def test_role_reflects_last_write(client, admin_headers):
    inserted = client.post("/users", json={"email": "c@example.com", "name": "C"}).json()["insertedId"]

    resp = client.patch(f"/users/role/{inserted}", json={"selectedOption": "admin"}, headers=admin_headers)
    assert resp.json()["modifiedCount"] == 1
    resp = client.patch(f"/users/role/{inserted}", json={"selectedOption": "creator"}, headers=admin_headers)
    assert resp.json() == {
        "acknowledged": True,
        "matchedCount": 1,
        "modifiedCount": 1,
        "upsertedCount": 0,
        "upsertedId": None,
    }

    own = bearer("c@example.com")
    assert client.get("/users/creator/c@example.com", headers=own).json() == {"isCreator": True}
    assert client.get("/users/admin/c@example.com", headers=own).json() == {"isAdmin": False}


def test_role_update_without_option_clears_role(client, cfg, admin_headers):
    target = seed(cfg, "users", {"email": "c@example.com", "role": "creator"})
    client.patch(f"/users/role/{target}", json={}, headers=admin_headers)
    user = [u for u in client.get("/users").json() if u["_id"] == target][0]
    assert user["role"] is None


def test_role_update_for_unknown_id_matches_nothing(client, admin_headers):
    resp = client.patch("/users/role/" + "a" * 24, json={"selectedOption": "admin"}, headers=admin_headers)
    assert resp.json()["matchedCount"] == 0
    assert resp.json()["upsertedId"] is None


def test_rename_user_is_open(client, cfg):
    target = seed(cfg, "users", {"email": "a@example.com", "name": "Old", "role": "creator"})
    resp = client.patch(f"/users/{target}", json={"userName": "New"})
    assert resp.json()["modifiedCount"] == 1
    user = client.get("/users").json()[0]
    assert user["name"] == "New"
    assert user["role"] == "creator"


def test_rename_to_same_name_modifies_nothing(client, cfg):
    target = seed(cfg, "users", {"email": "a@example.com", "name": "Same"})
    resp = client.patch(f"/users/{target}", json={"userName": "Same"})
    assert resp.json()["matchedCount"] == 1
    assert resp.json()["modifiedCount"] == 0


def test_admin_deletes_user(client, cfg, admin_headers):
    target = seed(cfg, "users", {"email": "gone@example.com"})
    resp = client.delete(f"/users/{target}", headers=admin_headers)
    assert resp.json() == {"acknowledged": True, "deletedCount": 1}
    assert [u["email"] for u in client.get("/users").json()] == ["admin@example.com"]


def test_delete_unknown_user_reports_zero(client, admin_headers):
    resp = client.delete("/users/" + "b" * 24, headers=admin_headers)
    assert resp.json()["deletedCount"] == 0


def test_malformed_id_is_server_error(lenient_client):
    resp = lenient_client.patch("/users/not-an-id", json={"userName": "x"})
    assert resp.status_code == 500


def test_emailless_signins_create_one_user(client):
    first = client.post("/users", json={"name": "anon"})
    assert first.json()["acknowledged"] is True
    second = client.post("/users", json={"name": "anon again"})
    assert second.json() == {"message": "User already exist"}
    assert len(client.get("/users").json()) == 1
