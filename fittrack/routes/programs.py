# fittrack/routes/programs.py
from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from fittrack.errors import NotFoundError, ValidationError
from fittrack.services import completion, scheduling
from fittrack.services.store import get_store
from fittrack.utils.parsing import parse_bool, parse_datetime, parse_int

programs_bp = Blueprint("programs", __name__, url_prefix="/api")


def _uid() -> int:
    return int(current_user.id)


# ---------- ASIGNACIÓN ----------
@programs_bp.post("/programs/<int:program_id>/assign")
@login_required
def assign_program(program_id: int):
    """
    Apunta al usuario al programa y rellena su calendario
    (un entreno cada SCHEDULE_INTERVAL_DAYS días desde hoy).
    """
    user_program, scheduled = scheduling.assign_program(
        get_store(),
        user_id=_uid(),
        program_id=program_id,
        interval_days=current_app.config.get("SCHEDULE_INTERVAL_DAYS"),
    )
    return jsonify({"data": {
        "userProgram": user_program.to_dict(),
        "scheduledWorkouts": [sw.to_dict() for sw in scheduled],
    }}), 201


@programs_bp.get("/active-program")
@login_required
def active_program():
    store = get_store()
    up = store.get_active_user_program(_uid())
    if up is None:
        raise NotFoundError("No hay programa activo")

    workouts = store.get_program_workouts(up.program_id)
    return jsonify({"data": {
        "program": up.program.to_dict(),
        "userProgram": up.to_dict(),
        "workouts": [dict(w.to_dict(), position=i) for i, w in enumerate(workouts, start=1)],
    }})


@programs_bp.get("/user-programs")
@login_required
def list_user_programs():
    items = []
    for up in get_store().list_user_programs(_uid()):
        d = up.to_dict()
        d["program"] = up.program.to_dict()
        items.append(d)
    return jsonify({"data": items})


# ---------- PROGRESO ----------
@programs_bp.put("/user-programs/<int:user_program_id>")
@login_required
def update_user_program(user_program_id: int):
    """
    Body JSON (todo opcional):
      {"currentDay": 4, "isActive": false, "completedAt": "2025-06-30T10:00:00Z"}
    """
    if not request.is_json:
        return jsonify({"error": "Content-Type must be application/json"}), 415
    b = request.get_json(silent=True)
    if not isinstance(b, dict):
        raise ValidationError("Body JSON inválido")

    up = completion.update_program_progress(
        get_store(),
        user_program_id=user_program_id,
        user_id=_uid(),
        current_day=parse_int(b.get("currentDay"), "currentDay"),
        is_active=parse_bool(b.get("isActive"), "isActive"),
        completed_at=parse_datetime(b.get("completedAt"), "completedAt"),
    )
    return jsonify({"data": up.to_dict()}), 200


@programs_bp.post("/user-programs/<int:user_program_id>/unsubscribe")
@login_required
def unsubscribe(user_program_id: int):
    up = completion.unsubscribe(get_store(), user_program_id=user_program_id, user_id=_uid())
    return jsonify({"data": up.to_dict()}), 200
