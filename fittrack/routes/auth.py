# fittrack/routes/auth.py
from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user
from werkzeug.security import check_password_hash, generate_password_hash

from fittrack.errors import ConflictError, ValidationError
from fittrack.forms.auth_form import LoginForm, RegisterForm
from fittrack.forms.profile_form import ProfileForm
from fittrack.services.store import get_store

auth_routes = Blueprint("auth", __name__)


# ---------- Auth ----------
@auth_routes.post("/register")
def register():
    form = RegisterForm()
    if not form.validate_on_submit():
        raise ValidationError(form.first_error())

    store = get_store()
    username = form.username.data.strip()
    if store.get_user_by_username(username) is not None:
        raise ConflictError("El usuario ya existe. Por favor, inicia sesión.")

    with store.atomic():
        user = store.create_user(username, generate_password_hash(form.password.data))

    login_user(user)
    current_app.logger.info(f"[auth] registro user={user.id}")
    return jsonify({"data": user.to_dict()}), 201


@auth_routes.post("/login")
def login():
    form = LoginForm()
    if not form.validate_on_submit():
        raise ValidationError(form.first_error())

    user = get_store().get_user_by_username(form.username.data.strip())
    if user is None or not check_password_hash(user.password, form.password.data):
        return jsonify(error="invalid_credentials", message="Credenciales inválidas."), 401

    login_user(user)
    return jsonify({"data": user.to_dict()}), 200


@auth_routes.route("/logout", methods=("GET", "POST"))
@login_required
def logout():
    logout_user()
    return jsonify({"data": {"logged_out": True}}), 200


# ---------- Perfil ----------
@auth_routes.get("/api/profile")
@login_required
def get_profile():
    return jsonify({"data": current_user.to_dict()})


@auth_routes.put("/api/profile")
@login_required
def update_profile():
    sent = request.get_json(silent=True) or {}
    form = ProfileForm()
    if not form.validate_on_submit():
        raise ValidationError(form.first_error())

    store = get_store()
    with store.atomic():
        store.update_user(current_user, **form.changes(sent))
    return jsonify({"data": current_user.to_dict()}), 200
