# fittrack/cli/seed.py
import click
from flask.cli import AppGroup
from sqlalchemy import select

from fittrack import db
from fittrack.models.workout import Workout, Exercise, Program, ProgramWorkout

seed_group = AppGroup("seed", help="Comandos de seed (datos iniciales)")

# ---- Catálogo por defecto ----
DEFAULT_WORKOUTS = [
    {"title": "Full Body Basics", "duration": 30, "difficulty": "easy", "type": "strength",
     "description": "Circuito de cuerpo completo con peso corporal."},
    {"title": "HIIT Cardio Blast", "duration": 20, "difficulty": "medium", "type": "cardio",
     "description": "Intervalos de alta intensidad 40/20."},
    {"title": "Mobility Flow", "duration": 25, "difficulty": "easy", "type": "flexibility",
     "description": "Movilidad de cadera, columna y hombros."},
    {"title": "Lower Body Strength", "duration": 45, "difficulty": "hard", "type": "strength",
     "description": "Sentadilla, zancada y peso muerto rumano."},
]

# Mismos ejercicios base para cada entreno del seed
DEFAULT_EXERCISES = [
    {"name": "Squats", "sets": 3, "reps": 12, "rest_time": 60, "weight": "70", "order": 1,
     "description": "Pies a la anchura de hombros, baja como si te sentaras y vuelve arriba."},
    {"name": "Push-ups", "sets": 3, "reps": 10, "rest_time": 60, "weight": None, "order": 2,
     "description": "Desde plancha, baja el pecho al suelo y empuja."},
    {"name": "Lunges", "sets": 3, "reps": 10, "rest_time": 60, "weight": "20", "order": 3,
     "description": "Paso al frente y baja hasta que ambas rodillas estén a 90 grados."},
    {"name": "Plank", "sets": 3, "reps": 1, "rest_time": 60, "weight": None, "order": 4,
     "description": "Plancha sobre antebrazos con el core activo 30-60 s."},
]

# (título, duración en días, dificultad, títulos de entrenos en orden)
DEFAULT_PROGRAMS = [
    ("Starter 15", 15, "easy", ["Full Body Basics", "Mobility Flow"]),
    ("Strength & Conditioning 30", 30, "medium",
     ["Lower Body Strength", "HIIT Cardio Blast", "Full Body Basics"]),
]


def _upsert_workouts(items):
    created = 0
    by_title = {}
    for data in items:
        w = db.session.execute(select(Workout).filter_by(title=data["title"])).scalar_one_or_none()
        if w is None:
            w = Workout(**data)
            for ex in DEFAULT_EXERCISES:
                w.exercises.append(Exercise(**ex))
            db.session.add(w)
            created += 1
        by_title[w.title] = w
    db.session.flush()
    return created, by_title


@seed_group.command("catalog")
def seed_catalog():
    """
    Carga entrenos, ejercicios y programas de ejemplo (idempotente por título).
    """
    created_w, by_title = _upsert_workouts(DEFAULT_WORKOUTS)

    created_p = 0
    for title, duration, difficulty, workout_titles in DEFAULT_PROGRAMS:
        if db.session.execute(select(Program).filter_by(title=title)).scalar_one_or_none():
            continue
        p = Program(title=title, duration=duration, difficulty=difficulty)
        for position, wt in enumerate(workout_titles, start=1):
            p.items.append(ProgramWorkout(workout_id=by_title[wt].id, position=position))
        db.session.add(p)
        created_p += 1

    db.session.commit()
    click.secho(f"Hecho. Entrenos nuevos: {created_w}, programas nuevos: {created_p}", fg="green")
