# fittrack/models/workout.py
from datetime import datetime
from fittrack import db


class Workout(db.Model):
    """
    Definición reutilizable de un entreno (plantilla).
    No confundir con ScheduledWorkout, que es una ocurrencia en el calendario.
    """
    __tablename__ = "workouts"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(160), nullable=False)
    subtitle = db.Column(db.String(160))
    description = db.Column(db.Text)
    image_url = db.Column(db.String(500))
    duration = db.Column(db.Integer, nullable=False)          # minutos
    difficulty = db.Column(db.String(16), nullable=False)     # easy | medium | hard
    type = db.Column(db.String(32), nullable=False)           # strength | cardio | flexibility ...
    # Metadatos opcionales de día de programa ("día 3 de 30")
    day = db.Column(db.Integer)
    total_days = db.Column(db.Integer)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    exercises = db.relationship(
        "Exercise",
        backref="workout",
        cascade="all, delete-orphan",
        order_by="Exercise.order",
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "description": self.description,
            "image_url": self.image_url,
            "duration": self.duration,
            "difficulty": self.difficulty,
            "type": self.type,
            "day": self.day,
            "total_days": self.total_days,
        }

    def __repr__(self):
        return f"<Workout {self.id} {self.title}>"


class Exercise(db.Model):
    __tablename__ = "exercises"

    id = db.Column(db.Integer, primary_key=True)
    workout_id = db.Column(db.Integer, db.ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    sets = db.Column(db.Integer)
    reps = db.Column(db.Integer)
    rest_time = db.Column(db.Integer)       # segundos
    weight = db.Column(db.String(32))       # texto libre ("70", "bodyweight")
    description = db.Column(db.Text)
    order = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "workout_id": self.workout_id,
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "rest_time": self.rest_time,
            "weight": self.weight,
            "description": self.description,
            "order": self.order,
        }


class Program(db.Model):
    """Secuencia ordenada de entrenos con duración fija en días."""
    __tablename__ = "programs"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(160), nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(500))
    difficulty = db.Column(db.String(16))
    duration = db.Column(db.Integer, nullable=False)          # días de programa
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    items = db.relationship(
        "ProgramWorkout",
        backref="program",
        cascade="all, delete-orphan",
        order_by="ProgramWorkout.position",
    )

    __table_args__ = (
        db.CheckConstraint("duration > 0", name="ck_programs_duration_positive"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image_url": self.image_url,
            "difficulty": self.difficulty,
            "duration": self.duration,
        }

    def __repr__(self):
        return f"<Program {self.id} {self.title} {self.duration}d>"


class ProgramWorkout(db.Model):
    __tablename__ = "program_workouts"

    id = db.Column(db.Integer, primary_key=True)
    program_id = db.Column(db.Integer, db.ForeignKey("programs.id", ondelete="CASCADE"), nullable=False, index=True)
    workout_id = db.Column(db.Integer, db.ForeignKey("workouts.id", ondelete="RESTRICT"), nullable=False)
    position = db.Column(db.Integer, default=0, nullable=False)   # orden dentro del programa

    workout = db.relationship("Workout")
