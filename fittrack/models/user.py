# fittrack/models/user.py

from datetime import datetime
from flask_login import UserMixin
from fittrack import db, login_manager


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id       = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)

    # Perfil / preferencias de entreno (todo opcional)
    email                  = db.Column(db.String(150))
    first_name             = db.Column(db.String(80))
    last_name              = db.Column(db.String(80))
    gender                 = db.Column(db.String(16))
    age                    = db.Column(db.Integer)
    fitness_level          = db.Column(db.String(32))   # beginner | intermediate | advanced
    fitness_goals          = db.Column(db.String(255))
    preferred_workout_days = db.Column(db.String(120))  # "mon,wed,fri"
    workout_reminders      = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Campos que el usuario puede editar desde /api/profile
    PROFILE_FIELDS = (
        "email", "first_name", "last_name", "gender", "age", "fitness_level",
        "fitness_goals", "preferred_workout_days", "workout_reminders",
    )

    def to_dict(self) -> dict:
        out = {"id": self.id, "username": self.username}
        for field in self.PROFILE_FIELDS:
            out[field] = getattr(self, field)
        out["created_at"] = self.created_at.isoformat() if self.created_at else None
        return out

    def __repr__(self) -> str:
        return f"<User {self.id} {self.username}>"


# Loader para Flask-Login
@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))
