# fittrack/routes/catalog.py
from flask import Blueprint, current_app, jsonify
from flask_login import login_required

from fittrack.errors import NotFoundError, ProgramNotFoundError, ValidationError
from fittrack.forms.tracking_form import WorkoutForm
from fittrack.services.store import get_store

catalog_bp = Blueprint("catalog", __name__, url_prefix="/api")


def _program_to_dict(program, workouts) -> dict:
    """Programa + sus entrenos en orden (con su posición 1-based)."""
    out = program.to_dict()
    out["workouts"] = [
        dict(w.to_dict(), position=i) for i, w in enumerate(workouts, start=1)
    ]
    return out


# ---------- WORKOUTS ----------
@catalog_bp.get("/workouts")
@login_required
def list_workouts():
    return jsonify({"data": [w.to_dict() for w in get_store().list_workouts()]})


@catalog_bp.get("/workouts/<int:workout_id>")
@login_required
def get_workout(workout_id: int):
    w = get_store().get_workout(workout_id)
    if w is None:
        raise NotFoundError(f"Entreno {workout_id} no encontrado")
    out = w.to_dict()
    out["exercises"] = [e.to_dict() for e in w.exercises]
    return jsonify({"data": out})


@catalog_bp.post("/workouts")
@login_required
def add_workout():
    form = WorkoutForm()
    if not form.validate_on_submit():
        raise ValidationError(form.first_error())

    store = get_store()
    with store.atomic():
        w = store.add_workout(
            title=form.title.data.strip(),
            subtitle=form.subtitle.data or None,
            description=form.description.data or None,
            image_url=form.image_url.data or None,
            duration=form.duration.data,
            difficulty=form.difficulty.data,
            type=form.type.data.strip().lower(),
            day=form.day.data,
            total_days=form.total_days.data,
        )
    current_app.logger.info(f"[workouts] creado id={w.id} title={w.title!r}")
    return jsonify({"data": w.to_dict()}), 201


@catalog_bp.get("/workouts/<int:workout_id>/exercises")
@login_required
def list_exercises(workout_id: int):
    store = get_store()
    if store.get_workout(workout_id) is None:
        raise NotFoundError(f"Entreno {workout_id} no encontrado")
    return jsonify({"data": [e.to_dict() for e in store.list_exercises(workout_id)]})


# ---------- PROGRAMS ----------
@catalog_bp.get("/programs")
@login_required
def list_programs():
    store = get_store()
    return jsonify({"data": [
        _program_to_dict(p, store.get_program_workouts(p.id)) for p in store.list_programs()
    ]})


@catalog_bp.get("/programs/<int:program_id>")
@login_required
def get_program(program_id: int):
    store = get_store()
    program = store.get_program(program_id)
    if program is None:
        raise ProgramNotFoundError(f"Programa {program_id} no encontrado")
    return jsonify({"data": _program_to_dict(program, store.get_program_workouts(program_id))})
