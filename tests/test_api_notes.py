from datetime import date

from fastapi.testclient import TestClient

from .helpers import PAY_BILLS, bearer, login, register


def test_notes_require_authentication(client: TestClient):
    assert client.get("/api/notes").status_code == 401
    assert client.post("/api/notes", json=PAY_BILLS).status_code == 401
    assert client.put("/api/notes/1", json={"title": "x"}).status_code == 401
    assert client.delete("/api/notes/1").status_code == 401
    assert client.post("/api/notes/1/complete").status_code == 401


def test_unauthenticated_wins_over_invalid_body(client: TestClient):
    response = client.post("/api/notes", json={"title": ""})
    assert response.status_code == 401


def test_create_and_list_round_trip(client: TestClient, ana: dict):
    response = client.post("/api/notes", json=PAY_BILLS)

    assert response.status_code == 201
    note = response.json()
    assert note == {**PAY_BILLS, "id": note["id"], "userId": ana["user"]["id"]}
    assert client.get("/api/notes").json() == [note]


def test_create_accepts_snake_case_and_ignores_owner(client: TestClient, ana: dict):
    response = client.post(
        "/api/notes",
        json={
            "title": "Buy milk",
            "created_date": "2024-02-01",
            "completed_date": "2024-02-02",
            "userId": 999,
        },
    )

    assert response.status_code == 201
    note = response.json()
    assert note["userId"] == ana["user"]["id"]
    assert note["status"] == "todo"
    assert note["createdDate"] == "2024-02-01"


def test_create_validation_error(client: TestClient, ana: dict):
    response = client.post(
        "/api/notes",
        json={**PAY_BILLS, "title": "", "status": "archived", "completedDate": "soon"},
    )

    assert response.status_code == 400
    fields = sorted(e["field"] for e in response.json()["errors"])
    assert fields == ["completedDate", "status", "title"]
    assert client.get("/api/notes").json() == []


def test_validation_errors_use_camel_case_for_snake_case_input(
    client: TestClient, ana: dict
):
    response = client.post(
        "/api/notes",
        json={
            "title": "Buy milk",
            "created_date": "2024-02-30",
            "completed_date": "soon",
        },
    )

    assert response.status_code == 400
    fields = sorted(e["field"] for e in response.json()["errors"])
    assert fields == ["completedDate", "createdDate"]

    note = client.post("/api/notes", json=PAY_BILLS).json()
    response = client.put(f"/api/notes/{note['id']}", json={"completed_date": "soon"})
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["completedDate"]


def test_numeric_dates_are_rejected(client: TestClient, ana: dict):
    response = client.post("/api/notes", json={**PAY_BILLS, "completedDate": 0})

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["completedDate"]
    assert client.get("/api/notes").json() == []

    note = client.post("/api/notes", json=PAY_BILLS).json()
    response = client.patch(f"/api/notes/{note['id']}", json={"createdDate": 0})
    assert response.status_code == 400
    assert client.get("/api/notes").json() == [note]


def test_title_is_stored_as_sent(client: TestClient, ana: dict):
    response = client.post("/api/notes", json={**PAY_BILLS, "title": "  Pay bills  "})
    note = response.json()
    assert note["title"] == "  Pay bills  "
    assert client.get("/api/notes").json() == [note]


def test_partial_update(client: TestClient, ana: dict):
    note = client.post("/api/notes", json=PAY_BILLS).json()

    response = client.patch(f"/api/notes/{note['id']}", json={"status": "done"})

    assert response.status_code == 200
    assert response.json() == {**note, "status": "done"}

    response = client.put(f"/api/notes/{note['id']}", json={"status": "todo"})
    assert response.json()["status"] == "todo"


def test_update_rejects_null_title(client: TestClient, ana: dict):
    note = client.post("/api/notes", json=PAY_BILLS).json()
    response = client.put(f"/api/notes/{note['id']}", json={"title": None})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "title"


def test_update_missing_note(client: TestClient, ana: dict):
    response = client.put("/api/notes/12345", json={"title": "Ghost"})
    assert response.status_code == 404
    assert response.json() == {"detail": "Note not found"}


def test_out_of_range_note_id_is_not_found(client: TestClient, ana: dict):
    client.post("/api/notes", json=PAY_BILLS)

    for note_id in ("0", "-1", "2147483648", "9223372036854775808"):
        for response in (
            client.put(f"/api/notes/{note_id}", json={"title": "Ghost"}),
            client.patch(f"/api/notes/{note_id}", json={}),
            client.post(f"/api/notes/{note_id}/complete"),
            client.delete(f"/api/notes/{note_id}"),
        ):
            assert response.status_code == 404
            assert response.json() == {"detail": "Note not found"}


def test_invalid_note_id_is_validation_error(client: TestClient, ana: dict):
    response = client.delete("/api/notes/abc")
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "note_id"


def test_complete_note(client: TestClient, ana: dict):
    note = client.post("/api/notes", json=PAY_BILLS).json()

    response = client.post(f"/api/notes/{note['id']}/complete")

    assert response.status_code == 200
    assert response.json()["status"] == "done"
    assert response.json()["completedDate"] == date.today().isoformat()


def test_delete_note(client: TestClient, ana: dict):
    note = client.post("/api/notes", json=PAY_BILLS).json()

    response = client.delete(f"/api/notes/{note['id']}")

    assert response.status_code == 200
    assert client.get("/api/notes").json() == []
    assert client.delete(f"/api/notes/{note['id']}").status_code == 404


def test_other_users_notes_are_invisible(client: TestClient, make_client, ana: dict):
    note = client.post("/api/notes", json=PAY_BILLS).json()
    bob = make_client()
    register(bob, "Bob", "bob@x.com")

    assert bob.get("/api/notes").json() == []
    for response in (
        bob.put(f"/api/notes/{note['id']}", json={"title": "Hijacked"}),
        bob.post(f"/api/notes/{note['id']}/complete"),
        bob.delete(f"/api/notes/{note['id']}"),
    ):
        assert response.status_code == 404
        assert response.json() == {"detail": "Note not found"}

    assert client.get("/api/notes").json() == [note]


def test_end_to_end_scenario(client: TestClient, make_client):
    registered = register(client, "Ana", "ana@x.com", "secret1")
    assert registered.status_code == 201
    ana_id = registered.json()["user"]["id"]

    logged_in = login(client, "ana@x.com", "secret1")
    assert logged_in.status_code == 200
    assert logged_in.json()["user"]["id"] == ana_id
    token = logged_in.json()["token"]

    created = client.post("/api/notes", json=PAY_BILLS, headers=bearer(token))
    assert created.status_code == 201
    note_id = created.json()["id"]

    intruder = make_client()
    intruder_token = register(intruder, "Eve", "eve@x.com").json()["token"]
    deleted = intruder.delete(f"/api/notes/{note_id}", headers=bearer(intruder_token))
    assert deleted.status_code == 404

    assert client.post("/api/auth/logout", headers=bearer(token)).status_code == 200
    listed = client.get("/api/notes", headers=bearer(token))
    assert listed.status_code == 401
