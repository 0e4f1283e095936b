# fittrack/routes/tracking.py
from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from fittrack.errors import ConflictError, NotFoundError, ValidationError
from fittrack.forms.tracking_form import ProgressTestForm
from fittrack.services.statistics import get_statistics
from fittrack.services.store import get_store
from fittrack.utils.parsing import parse_int

tracking_bp = Blueprint("tracking", __name__, url_prefix="/api")


def _uid() -> int:
    return int(current_user.id)


# ---------- FAVORITOS ----------
@tracking_bp.get("/favourites")
@login_required
def list_favourites():
    return jsonify({"data": [w.to_dict() for w in get_store().get_favorites(_uid())]})


@tracking_bp.post("/favourites")
@login_required
def add_favourite():
    b = request.get_json(silent=True) or {}
    workout_id = parse_int(b.get("workoutId"), "workoutId", required=True)

    store = get_store()
    if store.get_workout(workout_id) is None:
        raise ValidationError(f"workoutId inválido: {workout_id}")
    if store.get_favorite_by_workout(_uid(), workout_id) is not None:
        raise ConflictError("El entreno ya está en favoritos")

    with store.atomic():
        fav = store.add_favorite(_uid(), workout_id)
    return jsonify({"data": fav.to_dict()}), 201


@tracking_bp.delete("/favourites/<int:favorite_id>")
@login_required
def remove_favourite(favorite_id: int):
    store = get_store()
    fav = store.get_favorite(favorite_id)
    if fav is None or fav.user_id != _uid():
        raise NotFoundError("Favorito no encontrado")
    with store.atomic():
        store.remove_favorite(fav)
    return "", 204


@tracking_bp.get("/favourites/by-workout/<int:workout_id>")
@login_required
def favourite_by_workout(workout_id: int):
    fav = get_store().get_favorite_by_workout(_uid(), workout_id)
    return jsonify({"data": {
        "isFavorite": fav is not None,
        "favorite": fav.to_dict() if fav else None,
    }})


@tracking_bp.delete("/favourites/by-workout/<int:workout_id>")
@login_required
def remove_favourite_by_workout(workout_id: int):
    store = get_store()
    fav = store.get_favorite_by_workout(_uid(), workout_id)
    if fav is None:
        raise NotFoundError("Favorito no encontrado")
    with store.atomic():
        store.remove_favorite(fav)
    return "", 204


# ---------- HISTÓRICO ----------
@tracking_bp.get("/completedWorkouts")
@login_required
def list_completed():
    return jsonify({"data": [cw.to_dict() for cw in get_store().get_completed_workouts(_uid())]})


# ---------- PROGRESS TESTS ----------
@tracking_bp.get("/progress-tests")
@login_required
def list_progress_tests():
    return jsonify({"data": [pt.to_dict() for pt in get_store().get_progress_tests(_uid())]})


@tracking_bp.post("/progress-tests")
@login_required
def add_progress_test():
    form = ProgressTestForm()
    if not form.validate_on_submit():
        raise ValidationError(form.first_error())

    store = get_store()
    with store.atomic():
        pt = store.add_progress_test(
            _uid(),
            title=form.title.data.strip(),
            description=form.description.data or None,
            result=form.result.data or None,
        )
    return jsonify({"data": pt.to_dict()}), 201


# ---------- ESTADÍSTICAS ----------
@tracking_bp.get("/statistics")
@login_required
def statistics():
    return jsonify({"data": get_statistics(get_store(), _uid())})
