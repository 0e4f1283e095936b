# scripts/bootstrap.py
from sqlalchemy import inspect

from fittrack import create_app, db

TABLES = [
    "users",
    "workouts",
    "exercises",
    "programs",
    "program_workouts",
    "user_programs",
    "scheduled_workouts",
    "completed_workouts",
    "favorites",
    "progress_tests",
]


def main():
    app = create_app()
    with app.app_context():
        print("DB =>", app.config.get("SQLALCHEMY_DATABASE_URI"))

        # crea tablas faltantes (create_app ya importa todos los modelos)
        db.create_all()

        existing = set(inspect(db.engine).get_table_names())
        for t in TABLES:
            print(f"[table] {t:20s}", "OK" if t in existing else "FALTA")


if __name__ == "__main__":
    main()
