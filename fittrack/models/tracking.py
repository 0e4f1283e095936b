# fittrack/models/tracking.py
from datetime import datetime
from fittrack import db


class Favorite(db.Model):
    __tablename__ = "favorites"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workout_id = db.Column(db.Integer, db.ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    workout = db.relationship("Workout")

    __table_args__ = (
        db.UniqueConstraint("user_id", "workout_id", name="uq_favorites_user_workout"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "workout_id": self.workout_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class ProgressTest(db.Model):
    """Resultado de una prueba de forma física (append-only)."""
    __tablename__ = "progress_tests"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = db.Column(db.String(160), nullable=False)
    description = db.Column(db.Text)
    result = db.Column(db.String(255))
    completed_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "result": self.result,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }
