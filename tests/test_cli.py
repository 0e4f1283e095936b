# tests/test_cli.py

import pytest
from datetime import date, datetime
from sqlalchemy import func, select, text

import fittrack.cli.repair as repair
from fittrack import create_app, db
from fittrack.models.workout import Program, Workout
from fittrack.services.store import get_store


# Fijamos "ahora" (UTC) para que las fechas reparadas sean deterministas
class FakeDatetime(datetime):
    @classmethod
    def utcnow(cls):
        return cls(2025, 6, 30, 12, 0)


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret-key-with-at-least-32-chars",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


def _count(model):
    return db.session.execute(select(func.count(model.id))).scalar()


def test_seed_catalog_is_idempotent(runner):
    result = runner.invoke(args=["seed", "catalog"])
    assert result.exit_code == 0
    assert _count(Workout) == 4
    assert _count(Program) == 2

    result = runner.invoke(args=["seed", "catalog"])
    assert result.exit_code == 0
    assert "Entrenos nuevos: 0, programas nuevos: 0" in result.output
    assert _count(Workout) == 4


def test_seeded_program_keeps_workout_order(runner):
    runner.invoke(args=["seed", "catalog"])
    store = get_store()
    program = db.session.execute(select(Program).filter_by(title="Starter 15")).scalar_one()
    titles = [w.title for w in store.get_program_workouts(program.id)]
    assert titles == ["Full Body Basics", "Mobility Flow"]


def test_repair_completed_dates(app, runner):
    store = get_store()
    with store.atomic():
        user = store.create_user("ana", "hash")
        w = store.add_workout(title="Fuerza A", duration=45, difficulty="medium", type="strength")
        cw = store.add_completed_workout(user.id, w.id, completed_at=datetime(2025, 6, 28, 18, 30))
        uid, cw_id = user.id, cw.id

    result = runner.invoke(args=["repair", "completed-dates"])
    assert result.exit_code == 0

    db.session.expire_all()
    assert store.get_completed_workouts(uid)[0].id == cw_id
    assert store.get_completed_workouts(uid)[0].scheduled_date == date(2025, 6, 28)


def test_repair_scheduled_dates_dry_run(runner):
    result = runner.invoke(args=["repair", "scheduled-dates", "--dry-run"])
    assert result.exit_code == 0
    assert "Encontrados 0 entrenos sin fecha." in result.output


def _legacy_scheduled_table():
    # Esquema antiguo: scheduled_date todavía admitía NULL
    db.session.execute(text("DROP TABLE scheduled_workouts"))
    db.session.execute(text(
        "CREATE TABLE scheduled_workouts ("
        " id INTEGER PRIMARY KEY, user_id INTEGER NOT NULL, workout_id INTEGER NOT NULL,"
        " scheduled_date DATE, is_completed BOOLEAN NOT NULL DEFAULT 0,"
        " program_id INTEGER, program_day INTEGER, created_at DATETIME)"
    ))
    db.session.execute(text(
        "INSERT INTO scheduled_workouts (id, user_id, workout_id, scheduled_date, program_day) VALUES"
        " (1, 1, 1, NULL, 1), (2, 1, 1, NULL, 3), (3, 1, 1, NULL, NULL), (4, 1, 1, '2025-01-15', 2)"
    ))
    db.session.commit()


def _scheduled_dates():
    return dict(db.session.execute(text("SELECT id, scheduled_date FROM scheduled_workouts ORDER BY id")).all())


def test_repair_scheduled_dates_fills_from_program_day(runner, monkeypatch):
    monkeypatch.setattr(repair, "datetime", FakeDatetime)
    _legacy_scheduled_table()

    result = runner.invoke(args=["repair", "scheduled-dates"])
    assert result.exit_code == 0
    assert "Encontrados 3 entrenos sin fecha." in result.output

    # día 1 = hoy, día 3 = hoy + 2; sin día cuenta como día 1; las fechas existentes no se tocan
    assert _scheduled_dates() == {
        1: "2025-06-30",
        2: "2025-07-02",
        3: "2025-06-30",
        4: "2025-01-15",
    }


def test_repair_scheduled_dates_dry_run_changes_nothing(runner, monkeypatch):
    monkeypatch.setattr(repair, "datetime", FakeDatetime)
    _legacy_scheduled_table()

    result = runner.invoke(args=["repair", "scheduled-dates", "--dry-run"])
    assert result.exit_code == 0
    assert "id=2 day=3 -> 2025-07-02" in result.output
    assert _scheduled_dates()[1] is None
