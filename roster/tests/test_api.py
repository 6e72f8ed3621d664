from roster.db import get_conn


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "student-roster-api"


def test_student_crud_flow(client):
    body = {"id": 1, "first_name": "Ada", "last_name": "Lovelace", "birthday": "1815-12-10"}
    r = client.post("/api/students/create", json=body)
    assert r.status_code == 201
    assert r.json()["item"] == body

    # duplicate id
    r = client.post("/api/students/create", json={**body, "first_name": "Other"})
    assert r.status_code == 400

    r = client.get("/api/students/1")
    assert r.status_code == 200
    assert r.json()["first_name"] == "Ada"

    r = client.post("/api/students/update", json={**body, "birthday": None})
    assert r.status_code == 200
    assert r.json()["item"]["birthday"] is None

    r = client.post("/api/students/update", json={**body, "id": 2})
    assert r.status_code == 404

    r = client.post("/api/students/delete", json={"student_id": 1})
    assert r.status_code == 200
    r = client.post("/api/students/delete", json={"student_id": 1})
    assert r.status_code == 404
    assert client.get("/api/students/1").status_code == 404


def test_list_with_birthday_filter(client):
    client.post("/api/students/create", json={"id": 1, "first_name": "A", "last_name": "B", "birthday": "2000-01-01"})
    client.post("/api/students/create", json={"id": 2, "first_name": "C", "last_name": "D"})

    r = client.get("/api/students/list")
    assert r.status_code == 200
    assert r.json()["total"] == 2

    r = client.get("/api/students/list", params={"birthday": "2000-01-01"})
    assert [it["id"] for it in r.json()["items"]] == [1]


def test_validation_errors(client):
    r = client.post("/api/students/create", json={"id": 1, "first_name": "x" * 41, "last_name": "B"})
    assert r.status_code == 422
    r = client.get("/api/students/list", params={"birthday": "not-a-date"})
    assert r.status_code == 422


def test_changes_recorded_in_student_history(client):
    client.post("/api/students/create", json={"id": 3, "first_name": "A", "last_name": "B"})
    client.post("/api/students/update", json={"id": 3, "first_name": "A", "last_name": "C"})
    client.post("/api/students/delete", json={"student_id": 99})

    data = client.get("/api/students/3/history").json()
    assert data["total"] == 2
    assert data["items"][0]["action"] == "STUDENT_UPDATE"
    assert data["items"][0]["before"]["last_name"] == "B"
    assert data["items"][0]["after"]["last_name"] == "C"

    data = client.get("/api/students/99/history", params={"failed_only": True}).json()
    assert data["total"] == 1
    assert data["items"][0]["result"] == "ERROR"
    assert data["items"][0]["err_msg"] == "student_not_found"


def test_unreadable_row_maps_to_400(client):
    with get_conn() as conn:
        conn.execute("INSERT INTO students VALUES (7, 'Bad', 'Date', 'not-a-date')")
    r = client.get("/api/students/7")
    assert r.status_code == 400
    assert "result set" in r.json()["detail"]
    assert client.get("/api/students/list").status_code == 400


def test_missing_table_maps_to_500(client):
    with get_conn() as conn:
        conn.execute("DROP TABLE students")
    r = client.get("/api/students/list")
    assert r.status_code == 500
    assert r.json()["detail"] == "students_table_unavailable"
