# tests/test_api_tracking.py

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
    client.post("/register", json={"username": username, "password": password})
    client.post("/login", json={"username": username, "password": password})


@pytest.fixture
def workout(app):
    with app.app_context():
        store = get_store()
        with store.atomic():
            w = store.add_workout(title="Fuerza A", duration=45, difficulty="medium", type="strength")
        return w.id


# ---------- Auth ----------
def test_register_duplicate_username(client):
    assert client.post("/register", json={"username": "ana", "password": "secreto1"}).status_code == 201
    resp = client.post("/register", json={"username": "ana", "password": "otra-cosa"})
    assert resp.status_code == 409


def test_register_validation(client):
    resp = client.post("/register", json={"username": "an", "password": "secreto1"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_login_wrong_password(client):
    client.post("/register", json={"username": "ana", "password": "secreto1"})
    client.post("/logout")
    resp = client.post("/login", json={"username": "ana", "password": "mala-clave"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "invalid_credentials"


def test_logout_closes_session(client):
    register_and_login(client)
    assert client.post("/logout").status_code == 200
    assert client.get("/api/profile").status_code == 401


# ---------- Perfil ----------
def test_profile_partial_update(client):
    register_and_login(client)
    resp = client.put("/api/profile", json={"first_name": "Ana", "age": 31, "fitness_level": "intermediate"})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["first_name"] == "Ana"
    assert data["age"] == 31
    assert data["fitness_level"] == "intermediate"
    # Lo que no se envía no cambia
    assert data["workout_reminders"] is True


def test_profile_rejects_bad_values(client):
    register_and_login(client)
    assert client.put("/api/profile", json={"age": 5}).status_code == 400
    assert client.put("/api/profile", json={"fitness_level": "pro"}).status_code == 400
    assert client.put("/api/profile", json={"email": "no-es-email"}).status_code == 400


# ---------- Workouts ----------
def test_create_and_get_workout(client):
    register_and_login(client)
    resp = client.post("/api/workouts", json={
        "title": "HIIT 20", "duration": 20, "difficulty": "hard", "type": "Cardio",
    })
    assert resp.status_code == 201
    wid = resp.get_json()["data"]["id"]
    assert resp.get_json()["data"]["type"] == "cardio"

    resp = client.get(f"/api/workouts/{wid}")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["exercises"] == []
    assert client.get("/api/workouts/999").status_code == 404


def test_create_workout_validation(client):
    register_and_login(client)
    resp = client.post("/api/workouts", json={"title": "X", "duration": 20, "difficulty": "extreme", "type": "cardio"})
    assert resp.status_code == 400


# ---------- Favoritos ----------
def test_favourites_lifecycle(client, workout):
    register_and_login(client)
    assert client.get("/api/favourites").get_json()["data"] == []

    resp = client.post("/api/favourites", json={"workoutId": workout})
    assert resp.status_code == 201
    fav_id = resp.get_json()["data"]["id"]

    # Duplicado
    assert client.post("/api/favourites", json={"workoutId": workout}).status_code == 409

    data = client.get("/api/favourites").get_json()["data"]
    assert [w["id"] for w in data] == [workout]

    resp = client.get(f"/api/favourites/by-workout/{workout}")
    assert resp.get_json()["data"]["isFavorite"] is True

    assert client.delete(f"/api/favourites/{fav_id}").status_code == 204
    assert client.delete(f"/api/favourites/{fav_id}").status_code == 404
    assert client.get(f"/api/favourites/by-workout/{workout}").get_json()["data"]["isFavorite"] is False


def test_favourite_unknown_workout(client, workout):
    register_and_login(client)
    assert client.post("/api/favourites", json={"workoutId": 999}).status_code == 400
    assert client.post("/api/favourites", json={}).status_code == 400


def test_remove_favourite_by_workout(client, workout):
    register_and_login(client)
    client.post("/api/favourites", json={"workoutId": workout})
    assert client.delete(f"/api/favourites/by-workout/{workout}").status_code == 204
    assert client.delete(f"/api/favourites/by-workout/{workout}").status_code == 404


def test_favourite_of_other_user_is_not_found(app, client, workout):
    register_and_login(client)
    fav_id = client.post("/api/favourites", json={"workoutId": workout}).get_json()["data"]["id"]

    intruso = app.test_client()
    register_and_login(intruso, username="luis")
    assert intruso.delete(f"/api/favourites/{fav_id}").status_code == 404
    assert len(client.get("/api/favourites").get_json()["data"]) == 1


# ---------- Progress tests y estadísticas ----------
def test_progress_tests_and_statistics(client):
    register_and_login(client)
    resp = client.post("/api/progress-tests", json={"title": "Flexiones 1 min", "result": "32"})
    assert resp.status_code == 201
    assert client.post("/api/progress-tests", json={"result": "40"}).status_code == 400

    data = client.get("/api/progress-tests").get_json()["data"]
    assert [pt["title"] for pt in data] == ["Flexiones 1 min"]

    stats = client.get("/api/statistics").get_json()["data"]
    assert stats == {"workouts": 0, "streak": 0, "progressTests": 1}


def test_healthz(client):
    assert client.get("/healthz").get_json() == {"status": "ok"}
