# fittrack/errors.py
from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError


class FitTrackError(Exception):
    """Error de dominio con código HTTP asociado (lo traduce la capa de rutas)."""

    status_code = 400
    error_code = "error"

    def __init__(self, message: str = None):
        super().__init__(message or self.error_code)
        self.message = message or self.error_code

    def to_dict(self) -> dict:
        return {"error": self.error_code, "message": self.message}


class NotFoundError(FitTrackError):
    # "no existe" y "no es tuyo" se devuelven igual para no filtrar datos ajenos
    status_code = 404
    error_code = "not_found"


class ProgramNotFoundError(NotFoundError):
    error_code = "program_not_found"


class ValidationError(FitTrackError):
    status_code = 400
    error_code = "validation_error"


class InvalidRangeError(ValidationError):
    error_code = "invalid_range"


class ConflictError(FitTrackError):
    status_code = 409
    error_code = "conflict"


class AlreadyActiveError(ConflictError):
    error_code = "already_active"


class PersistenceError(FitTrackError):
    status_code = 500
    error_code = "persistence_error"


def register_error_handlers(app):
    """Traduce errores de dominio y de BD a respuestas JSON."""

    @app.errorhandler(FitTrackError)
    def _domain_error(err: FitTrackError):
        if err.status_code >= 500:
            app.logger.error(f"[error] {err.error_code}: {err.message}")
        else:
            app.logger.info(f"[error] {err.error_code}: {err.message}")
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(SQLAlchemyError)
    def _db_error(err: SQLAlchemyError):
        app.logger.error(f"[db] error no controlado: {err}")
        return jsonify(error="persistence_error", message="Error interno de base de datos"), 500
