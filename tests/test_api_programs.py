# tests/test_api_programs.py

import pytest
from fittrack import create_app, db
from fittrack.services.store import get_store


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret-key-with-at-least-32-chars",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    })
    with app.app_context():
        db.create_all()
    # Sin contexto activo durante el test: cada petición usa su propio `g`
    # (Flask-Login cachea el usuario en g._login_user).
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register_and_login(client, username="ana", password="secreto1"):
    # /register deja la sesión iniciada
    resp = client.post("/register", json={"username": username, "password": password})
    assert resp.status_code == 201
    return resp.get_json()["data"]


@pytest.fixture
def program(app):
    with app.app_context():
        store = get_store()
        with store.atomic():
            w1 = store.add_workout(title="Fuerza A", duration=45, difficulty="medium", type="strength")
            w2 = store.add_workout(title="Cardio B", duration=30, difficulty="easy", type="cardio")
            p = store.add_program([w1.id, w2.id], title="Base 5", duration=5, difficulty="easy")
        return {"id": p.id, "w1": w1.id, "w2": w2.id}


def assign(client, program_id):
    return client.post(f"/api/programs/{program_id}/assign")


def test_requires_login(client, program):
    resp = assign(client, program["id"])
    assert resp.status_code == 401
    assert client.get("/api/active-program").status_code == 401


def test_program_detail_lists_workouts_in_order(client, program):
    register_and_login(client)
    resp = client.get(f"/api/programs/{program['id']}")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert [w["id"] for w in data["workouts"]] == [program["w1"], program["w2"]]
    assert [w["position"] for w in data["workouts"]] == [1, 2]

    assert client.get("/api/programs/999").status_code == 404


def test_assign_creates_calendar(client, program):
    register_and_login(client)
    resp = assign(client, program["id"])
    assert resp.status_code == 201

    data = resp.get_json()["data"]
    assert data["userProgram"]["current_day"] == 1
    assert data["userProgram"]["is_active"] is True
    rows = data["scheduledWorkouts"]
    assert [r["program_day"] for r in rows] == [1, 2, 3, 4, 5]
    assert [r["workout_id"] for r in rows] == [
        program["w1"], program["w2"], program["w1"], program["w2"], program["w1"],
    ]

    # Las fechas van separadas 3 días y el rango las devuelve todas
    start, end = rows[0]["scheduled_date"], rows[-1]["scheduled_date"]
    resp = client.get(f"/api/scheduled-workouts/range?start={start}&end={end}")
    assert resp.status_code == 200
    assert len(resp.get_json()["data"]) == 5

    resp = client.get(f"/api/scheduled-workouts/date?date={start}")
    assert [r["program_day"] for r in resp.get_json()["data"]] == [1]


def test_assign_twice_is_conflict(client, program):
    register_and_login(client)
    assert assign(client, program["id"]).status_code == 201

    resp = assign(client, program["id"])
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "already_active"


def test_assign_unknown_program(client, program):
    register_and_login(client)
    resp = assign(client, 999)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "program_not_found"


def test_active_program(client, program):
    register_and_login(client)
    assert client.get("/api/active-program").status_code == 404

    assign(client, program["id"])
    resp = client.get("/api/active-program")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["program"]["id"] == program["id"]
    assert data["userProgram"]["current_day"] == 1
    assert len(data["workouts"]) == 2


def test_complete_flow(client, program):
    register_and_login(client)
    rows = assign(client, program["id"]).get_json()["data"]["scheduledWorkouts"]

    resp = client.patch(f"/api/scheduled-workouts/{rows[0]['id']}/complete", json={"isCompleted": True})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["updatedWorkout"]["is_completed"] is True
    assert data["completedWorkout"]["scheduled_date"] == rows[0]["scheduled_date"]
    assert data["userProgram"]["current_day"] == 2

    # Repetir no duplica el histórico
    resp = client.patch(f"/api/scheduled-workouts/{rows[0]['id']}/complete", json={"isCompleted": True})
    assert resp.get_json()["data"]["completedWorkout"] is None
    assert len(client.get("/api/completedWorkouts").get_json()["data"]) == 1

    # El día 3 comparte entreno con el día 1 y sigue pendiente
    resp = client.get(f"/api/scheduled-workouts/date?date={rows[2]['scheduled_date']}")
    assert resp.get_json()["data"][0]["is_completed"] is False


def test_complete_validation(client, program):
    register_and_login(client)
    rows = assign(client, program["id"]).get_json()["data"]["scheduledWorkouts"]

    resp = client.patch(f"/api/scheduled-workouts/{rows[0]['id']}/complete", json={})
    assert resp.status_code == 400
    resp = client.patch(f"/api/scheduled-workouts/{rows[0]['id']}/complete", json={"isCompleted": "quizá"})
    assert resp.status_code == 400


def test_other_user_cannot_touch_rows(app, client, program):
    register_and_login(client)
    data = assign(client, program["id"]).get_json()["data"]
    sw_id = data["scheduledWorkouts"][0]["id"]
    up_id = data["userProgram"]["id"]

    intruso = app.test_client()
    register_and_login(intruso, username="luis")
    resp = intruso.patch(f"/api/scheduled-workouts/{sw_id}/complete", json={"isCompleted": True})
    assert resp.status_code == 404
    assert intruso.post(f"/api/user-programs/{up_id}/unsubscribe").status_code == 404

    # El programa del dueño sigue intacto
    resp = client.get("/api/active-program")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["userProgram"]["is_active"] is True


def test_unsubscribe_then_reassign(client, program):
    register_and_login(client)
    up_id = assign(client, program["id"]).get_json()["data"]["userProgram"]["id"]

    resp = client.post(f"/api/user-programs/{up_id}/unsubscribe")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["is_active"] is False
    assert resp.get_json()["data"]["unsubscribed_at"] is not None
    assert client.get("/api/active-program").status_code == 404

    assert assign(client, program["id"]).status_code == 201
    assert len(client.get("/api/user-programs").get_json()["data"]) == 2


def test_update_user_program(client, program):
    register_and_login(client)
    up_id = assign(client, program["id"]).get_json()["data"]["userProgram"]["id"]

    resp = client.put(f"/api/user-programs/{up_id}", json={"currentDay": 4, "completedAt": "2025-07-20T10:00:00Z"})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["current_day"] == 4
    assert data["completed_at"] == "2025-07-20T10:00:00"

    assert client.put(f"/api/user-programs/{up_id}", json={"currentDay": 0}).status_code == 400
    assert client.put(f"/api/user-programs/{up_id}", json={"currentDay": 99}).status_code == 400
    assert client.put(f"/api/user-programs/{up_id}", data="x").status_code == 415


def test_schedule_single_workout(client, program):
    register_and_login(client)
    resp = client.post("/api/scheduled-workouts", json={"workoutId": program["w2"], "date": "2025-08-01"})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["program_day"] is None

    resp = client.post("/api/scheduled-workouts", json={"workoutId": program["w2"], "date": "01/08/2025"})
    assert resp.status_code == 400

    resp = client.post("/api/scheduled-workouts", json={
        "workoutId": program["w2"], "date": "2025-08-01", "programId": program["id"], "programDay": 2.9,
    })
    assert resp.status_code == 400


def test_range_rejects_inverted_bounds(client, program):
    register_and_login(client)
    resp = client.get("/api/scheduled-workouts/range?start=2025-07-10&end=2025-07-01")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_range"
