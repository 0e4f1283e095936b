# fittrack/models/schedule.py
from datetime import datetime
from fittrack import db


# ---------- ASIGNACIÓN DE PROGRAMA ----------
class UserProgram(db.Model):
    """
    Un usuario apuntado a un programa, con su cursor de progreso.
    Nunca se borra: queda como histórico al terminar o desapuntarse.
    Máximo una fila is_active=True por usuario (lo garantiza el servicio).
    """
    __tablename__ = "user_programs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    program_id = db.Column(db.Integer, db.ForeignKey("programs.id"), nullable=False)
    current_day = db.Column(db.Integer, default=1, nullable=False)   # 1-based
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)
    started_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    completed_at = db.Column(db.DateTime)
    unsubscribed_at = db.Column(db.DateTime)

    program = db.relationship("Program")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "program_id": self.program_id,
            "current_day": self.current_day,
            "is_active": self.is_active,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "unsubscribed_at": self.unsubscribed_at.isoformat() if self.unsubscribed_at else None,
        }

    def __repr__(self):
        return f"<UserProgram {self.id} u={self.user_id} p={self.program_id} day={self.current_day} active={self.is_active}>"


# ---------- ENTRENO EN CALENDARIO ----------
class ScheduledWorkout(db.Model):
    """
    Ocurrencia concreta de un entreno en una fecha para un usuario.
    La identidad para completar es SIEMPRE este id, nunca workout_id.
    """
    __tablename__ = "scheduled_workouts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workout_id = db.Column(db.Integer, db.ForeignKey("workouts.id"), nullable=False)
    scheduled_date = db.Column(db.Date, nullable=False, index=True)
    is_completed = db.Column(db.Boolean, default=False, nullable=False)
    program_id = db.Column(db.Integer, db.ForeignKey("programs.id"))
    program_day = db.Column(db.Integer)
    # Asignación concreta que creó la fila (NULL en filas sueltas o antiguas)
    user_program_id = db.Column(db.Integer, db.ForeignKey("user_programs.id"), index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    workout = db.relationship("Workout")

    __table_args__ = (
        db.CheckConstraint("program_day IS NULL OR program_day > 0", name="ck_scheduled_program_day_positive"),
    )

    def to_dict(self, with_workout: bool = True) -> dict:
        out = {
            "id": self.id,
            "user_id": self.user_id,
            "workout_id": self.workout_id,
            "scheduled_date": self.scheduled_date.isoformat(),
            "is_completed": self.is_completed,
            "program_id": self.program_id,
            "program_day": self.program_day,
            "user_program_id": self.user_program_id,
        }
        if with_workout and self.workout is not None:
            out["workout"] = self.workout.to_dict()
        return out

    def __repr__(self):
        return f"<ScheduledWorkout {self.id} w={self.workout_id} {self.scheduled_date} done={self.is_completed}>"


# ---------- HISTÓRICO (append-only) ----------
class CompletedWorkout(db.Model):
    __tablename__ = "completed_workouts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workout_id = db.Column(db.Integer, db.ForeignKey("workouts.id"), nullable=False)
    scheduled_workout_id = db.Column(db.Integer, db.ForeignKey("scheduled_workouts.id"))
    # Fecha del calendario a la que corresponde (NULL solo en filas antiguas)
    scheduled_date = db.Column(db.Date)
    completed_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "workout_id": self.workout_id,
            "scheduled_workout_id": self.scheduled_workout_id,
            "scheduled_date": self.scheduled_date.isoformat() if self.scheduled_date else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    def __repr__(self):
        return f"<CompletedWorkout {self.id} w={self.workout_id} {self.scheduled_date}>"
