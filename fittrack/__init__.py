# fittrack/__init__.py

import os
import logging
from datetime import timedelta

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate

# Carga variables de entorno (.env)
load_dotenv()

# Extensiones compartidas
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()


def _require_secret_key() -> str:
    """Lee SECRET_KEY de entorno y exige mínimo 32 bytes."""
    secret = os.getenv("SECRET_KEY", "")
    if not secret or len(secret) < 32:
        raise RuntimeError(
            "SECRET_KEY no configurado o demasiado corto. "
            "Añade una clave segura al .env (mínimo 32 caracteres)."
        )
    return secret


def _check_schedule_interval(value) -> int:
    """SCHEDULE_INTERVAL_DAYS debe ser un entero >= 1 (error de configuración si no)."""
    try:
        days = int(value)
    except (TypeError, ValueError):
        raise RuntimeError(f"SCHEDULE_INTERVAL_DAYS inválido: {value!r}")
    if days < 1:
        raise RuntimeError(f"SCHEDULE_INTERVAL_DAYS debe ser >= 1 (recibido {days})")
    return days


def _configure_logging(app: Flask) -> None:
    """Logging simple y consistente."""
    level = logging.DEBUG if app.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def create_app(test_config=None) -> Flask:
    """Factory principal de la aplicación."""
    app = Flask(__name__, instance_relative_config=True)

    # Asegura carpeta instance/
    os.makedirs(app.instance_path, exist_ok=True)

    # DB por defecto (SQLite en instance/fittrack.db)
    db_path = os.path.join(app.instance_path, "fittrack.db")
    default_db_uri = f"sqlite:///{db_path}"

    if test_config is None:
        app.config.from_mapping(
            SECRET_KEY=_require_secret_key(),
            SQLALCHEMY_DATABASE_URI=os.getenv("SQLALCHEMY_DATABASE_URI", default_db_uri),
            # Separación en días entre entrenos al asignar un programa
            SCHEDULE_INTERVAL_DAYS=os.getenv("SCHEDULE_INTERVAL_DAYS", 3),
        )
    else:
        app.config.from_mapping(
            SQLALCHEMY_DATABASE_URI=default_db_uri,
            SCHEDULE_INTERVAL_DAYS=3,
        )
        app.config.from_mapping(test_config)

    app.config["SCHEDULE_INTERVAL_DAYS"] = _check_schedule_interval(app.config["SCHEDULE_INTERVAL_DAYS"])

    app.config.from_mapping(
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        JSON_SORT_KEYS=False,
        # Cookies y sesión seguras
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        SESSION_COOKIE_SECURE=os.getenv("FLASK_ENV", "").lower() != "development" and not app.config.get("TESTING"),
        PERMANENT_SESSION_LIFETIME=timedelta(days=7),
        MAX_CONTENT_LENGTH=2 * 1024 * 1024,
    )

    # Inicializa extensiones
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    _configure_logging(app)

    # ---------------------------------------------------------
    # MODELOS (importar para que Flask-Migrate los detecte)
    # ---------------------------------------------------------
    from fittrack.models.user import User  # noqa: F401
    from fittrack.models.workout import Workout, Exercise, Program, ProgramWorkout  # noqa: F401
    from fittrack.models.schedule import UserProgram, ScheduledWorkout, CompletedWorkout  # noqa: F401
    from fittrack.models.tracking import Favorite, ProgressTest  # noqa: F401

    # Store único de la app (se comparte vía app.extensions)
    from fittrack.services.store import DomainStore
    app.extensions["fittrack.store"] = DomainStore(db.session)

    # ---------------------------------------------------------
    # BLUEPRINTS
    # ---------------------------------------------------------
    from fittrack.routes.auth import auth_routes
    from fittrack.routes.catalog import catalog_bp
    from fittrack.routes.programs import programs_bp
    from fittrack.routes.schedule import schedule_bp
    from fittrack.routes.tracking import tracking_bp

    app.register_blueprint(auth_routes)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(programs_bp)
    app.register_blueprint(schedule_bp)
    app.register_blueprint(tracking_bp)

    # ---------------------------------------------------------
    # CLI (seed, reparaciones)
    # ---------------------------------------------------------
    from fittrack.cli import register_cli
    register_cli(app)

    # ---------------------------------------------------------
    # Healthcheck y manejo de errores JSON
    # ---------------------------------------------------------
    from fittrack.errors import register_error_handlers
    register_error_handlers(app)

    @app.get("/healthz")
    def _healthz():
        return {"status": "ok"}, 200

    @app.errorhandler(400)
    @app.errorhandler(401)
    @app.errorhandler(403)
    @app.errorhandler(404)
    @app.errorhandler(405)
    @app.errorhandler(500)
    def _http_errors(err):
        # Si la petición es JSON, devolvemos JSON consistente
        if request.is_json or request.path.startswith("/api/"):
            code = getattr(err, "code", 500) or 500
            return jsonify(error="http_error", message=str(err)), code
        return err

    return app
