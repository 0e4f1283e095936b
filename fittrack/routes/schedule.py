# fittrack/routes/schedule.py
from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from fittrack.errors import ValidationError
from fittrack.services import completion, scheduling
from fittrack.services.store import get_store
from fittrack.utils.parsing import parse_bool, parse_date, parse_int

schedule_bp = Blueprint("schedule", __name__, url_prefix="/api/scheduled-workouts")


def _uid() -> int:
    return int(current_user.id)


def _json_body() -> dict:
    b = request.get_json(silent=True)
    if not isinstance(b, dict):
        raise ValidationError("Body JSON inválido")
    return b


@schedule_bp.post("")
@login_required
def create_scheduled():
    """
    Body JSON:
      {"workoutId": 3, "date": "YYYY-MM-DD", "programId": 1, "programDay": 2}
    programId / programDay son opcionales.
    """
    b = _json_body()
    sw = scheduling.schedule_workout(
        get_store(),
        user_id=_uid(),
        workout_id=parse_int(b.get("workoutId"), "workoutId", required=True),
        scheduled_date=parse_date(b.get("date"), "date"),
        program_id=parse_int(b.get("programId"), "programId"),
        program_day=parse_int(b.get("programDay"), "programDay"),
    )
    return jsonify({"data": sw.to_dict()}), 201


@schedule_bp.get("/date")
@login_required
def by_date():
    """GET /api/scheduled-workouts/date?date=YYYY-MM-DD"""
    day = parse_date(request.args.get("date"), "date")
    items = scheduling.list_scheduled_by_date(get_store(), _uid(), day)
    return jsonify({"data": [sw.to_dict() for sw in items]})


@schedule_bp.get("/range")
@login_required
def by_range():
    """GET /api/scheduled-workouts/range?start=YYYY-MM-DD&end=YYYY-MM-DD (ambos incluidos)"""
    start = parse_date(request.args.get("start"), "start")
    end = parse_date(request.args.get("end"), "end")
    items = scheduling.list_scheduled_by_range(get_store(), _uid(), start, end)
    return jsonify({"data": [sw.to_dict() for sw in items]})


@schedule_bp.route("/<int:scheduled_id>/complete", methods=["PATCH", "POST"])
@login_required
def set_completion(scheduled_id: int):
    """
    Body JSON: {"isCompleted": true|false}
    Devuelve el entreno actualizado y, si se ha creado, la fila de histórico.
    """
    b = _json_body()
    result = completion.set_completion(
        get_store(),
        scheduled_workout_id=scheduled_id,
        user_id=_uid(),
        is_completed=parse_bool(b.get("isCompleted"), "isCompleted", required=True),
    )
    return jsonify({"data": {
        "updatedWorkout": result.updated_workout.to_dict(),
        "completedWorkout": result.completed_workout.to_dict() if result.completed_workout else None,
        "userProgram": result.user_program.to_dict() if result.user_program else None,
    }}), 200
