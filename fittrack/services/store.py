# fittrack/services/store.py
"""
Capa de acceso a datos (Domain Store).

Operaciones CRUD con nombre sobre cada entidad. Sin reglas de negocio ni
comprobaciones de autorización: eso es cosa de los servicios que la usan.

  - "No existe" se devuelve como None.
  - Un fallo de base de datos se propaga como PersistenceError.

Las escrituras NO hacen commit por su cuenta; se agrupan con `atomic()` para
que una operación de varios pasos sea todo-o-nada.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, List, Optional

from flask import current_app
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from fittrack.errors import ConflictError, PersistenceError
from fittrack.models.user import User
from fittrack.models.workout import Workout, Exercise, Program, ProgramWorkout
from fittrack.models.schedule import UserProgram, ScheduledWorkout, CompletedWorkout
from fittrack.models.tracking import Favorite, ProgressTest

logger = logging.getLogger(__name__)


class DomainStore:
    """Se construye una vez en create_app y se comparte vía app.extensions."""

    def __init__(self, session):
        self.session = session

    # -----------------------------------------------------------------
    # Unidad de trabajo
    # -----------------------------------------------------------------
    @contextmanager
    def atomic(self) -> Iterator["DomainStore"]:
        """
        Commit al salir sin errores; rollback ante cualquier excepción.
        Un IntegrityError se traduce a ConflictError y el resto de errores
        de SQLAlchemy a PersistenceError.
        """
        try:
            yield self
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning(f"[store] integridad violada: {exc.orig}")
            raise ConflictError("El registro entra en conflicto con uno existente") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(f"[store] fallo de persistencia: {exc}")
            raise PersistenceError("No se pudo guardar en base de datos") from exc
        except Exception:
            self.session.rollback()
            raise

    def _flush(self):
        self.session.flush()

    # -----------------------------------------------------------------
    # Users
    # -----------------------------------------------------------------
    def get_user(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.session.execute(
            select(User).filter_by(username=username)
        ).scalar_one_or_none()

    def create_user(self, username: str, password_hash: str, **profile) -> User:
        user = User(username=username, password=password_hash)
        for field, value in profile.items():
            if field in User.PROFILE_FIELDS:
                setattr(user, field, value)
        self.session.add(user)
        self._flush()
        return user

    def update_user(self, user: User, **changes) -> User:
        # Solo campos de perfil; None significa "no tocar"
        for field, value in changes.items():
            if field in User.PROFILE_FIELDS and value is not None:
                setattr(user, field, value)
        self._flush()
        return user

    # -----------------------------------------------------------------
    # Workouts / exercises
    # -----------------------------------------------------------------
    def list_workouts(self) -> List[Workout]:
        return list(self.session.execute(
            select(Workout).order_by(Workout.created_at.desc(), Workout.id.desc())
        ).scalars())

    def get_workout(self, workout_id: int) -> Optional[Workout]:
        return self.session.get(Workout, workout_id)

    def add_workout(self, **data) -> Workout:
        workout = Workout(**data)
        self.session.add(workout)
        self._flush()
        return workout

    def list_exercises(self, workout_id: int) -> List[Exercise]:
        return list(self.session.execute(
            select(Exercise)
            .filter_by(workout_id=workout_id)
            .order_by(Exercise.order.asc(), Exercise.id.asc())
        ).scalars())

    # -----------------------------------------------------------------
    # Programs
    # -----------------------------------------------------------------
    def list_programs(self) -> List[Program]:
        return list(self.session.execute(
            select(Program).order_by(Program.id.asc())
        ).scalars())

    def get_program(self, program_id: int) -> Optional[Program]:
        return self.session.get(Program, program_id)

    def add_program(self, workout_ids: List[int], **data) -> Program:
        program = Program(**data)
        for position, workout_id in enumerate(workout_ids, start=1):
            program.items.append(ProgramWorkout(workout_id=workout_id, position=position))
        self.session.add(program)
        self._flush()
        return program

    def get_program_workouts(self, program_id: int) -> List[Workout]:
        """Entrenos del programa en su orden definido (position, id)."""
        return list(self.session.execute(
            select(Workout)
            .join(ProgramWorkout, ProgramWorkout.workout_id == Workout.id)
            .where(ProgramWorkout.program_id == program_id)
            .order_by(ProgramWorkout.position.asc(), ProgramWorkout.id.asc())
        ).scalars())

    # -----------------------------------------------------------------
    # Favorites
    # -----------------------------------------------------------------
    def get_favorites(self, user_id: int) -> List[Workout]:
        return list(self.session.execute(
            select(Workout)
            .join(Favorite, Favorite.workout_id == Workout.id)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        ).scalars())

    def get_favorite(self, favorite_id: int) -> Optional[Favorite]:
        return self.session.get(Favorite, favorite_id)

    def get_favorite_by_workout(self, user_id: int, workout_id: int) -> Optional[Favorite]:
        return self.session.execute(
            select(Favorite).filter_by(user_id=user_id, workout_id=workout_id)
        ).scalar_one_or_none()

    def add_favorite(self, user_id: int, workout_id: int) -> Favorite:
        fav = Favorite(user_id=user_id, workout_id=workout_id)
        self.session.add(fav)
        self._flush()
        return fav

    def remove_favorite(self, favorite: Favorite) -> None:
        self.session.delete(favorite)
        self._flush()

    # -----------------------------------------------------------------
    # Completed workouts (histórico)
    # -----------------------------------------------------------------
    def get_completed_workouts(self, user_id: int) -> List[CompletedWorkout]:
        return list(self.session.execute(
            select(CompletedWorkout)
            .filter_by(user_id=user_id)
            .order_by(CompletedWorkout.completed_at.desc(), CompletedWorkout.id.desc())
        ).scalars())

    def add_completed_workout(
        self,
        user_id: int,
        workout_id: int,
        scheduled_date: Optional[date] = None,
        scheduled_workout_id: Optional[int] = None,
        completed_at: Optional[datetime] = None,
    ) -> CompletedWorkout:
        cw = CompletedWorkout(
            user_id=user_id,
            workout_id=workout_id,
            scheduled_date=scheduled_date,
            scheduled_workout_id=scheduled_workout_id,
            completed_at=completed_at or datetime.utcnow(),
        )
        self.session.add(cw)
        self._flush()
        return cw

    # -----------------------------------------------------------------
    # Progress tests
    # -----------------------------------------------------------------
    def get_progress_tests(self, user_id: int) -> List[ProgressTest]:
        return list(self.session.execute(
            select(ProgressTest)
            .filter_by(user_id=user_id)
            .order_by(ProgressTest.completed_at.desc(), ProgressTest.id.desc())
        ).scalars())

    def add_progress_test(self, user_id: int, title: str, description: str = None, result: str = None) -> ProgressTest:
        pt = ProgressTest(user_id=user_id, title=title, description=description, result=result)
        self.session.add(pt)
        self._flush()
        return pt

    # -----------------------------------------------------------------
    # User programs
    # -----------------------------------------------------------------
    def list_user_programs(self, user_id: int) -> List[UserProgram]:
        return list(self.session.execute(
            select(UserProgram)
            .filter_by(user_id=user_id)
            .order_by(UserProgram.started_at.desc(), UserProgram.id.desc())
        ).scalars())

    def get_user_program(self, user_program_id: int) -> Optional[UserProgram]:
        return self.session.get(UserProgram, user_program_id)

    def get_active_user_program(self, user_id: int) -> Optional[UserProgram]:
        return self.session.execute(
            select(UserProgram)
            .filter_by(user_id=user_id, is_active=True)
            .order_by(UserProgram.id.desc())
            .limit(1)
        ).scalar_one_or_none()

    def create_user_program(self, user_id: int, program_id: int) -> UserProgram:
        up = UserProgram(user_id=user_id, program_id=program_id, current_day=1, is_active=True)
        self.session.add(up)
        self._flush()
        return up

    # -----------------------------------------------------------------
    # Scheduled workouts
    # -----------------------------------------------------------------
    def add_scheduled_workout(
        self,
        user_id: int,
        workout_id: int,
        scheduled_date: date,
        program_id: Optional[int] = None,
        program_day: Optional[int] = None,
        user_program_id: Optional[int] = None,
    ) -> ScheduledWorkout:
        sw = ScheduledWorkout(
            user_id=user_id,
            workout_id=workout_id,
            scheduled_date=scheduled_date,
            is_completed=False,
            program_id=program_id,
            program_day=program_day,
            user_program_id=user_program_id,
        )
        self.session.add(sw)
        self._flush()
        return sw

    def get_scheduled_workout(self, scheduled_workout_id: int) -> Optional[ScheduledWorkout]:
        return self.session.get(ScheduledWorkout, scheduled_workout_id)

    def get_scheduled_workouts_by_date(self, user_id: int, day: date) -> List[ScheduledWorkout]:
        return list(self.session.execute(
            select(ScheduledWorkout)
            .filter_by(user_id=user_id, scheduled_date=day)
            .order_by(ScheduledWorkout.id.asc())
        ).scalars())

    def get_scheduled_workouts_by_date_range(self, user_id: int, start: date, end: date) -> List[ScheduledWorkout]:
        """Rango cerrado [start, end]."""
        return list(self.session.execute(
            select(ScheduledWorkout)
            .where(
                ScheduledWorkout.user_id == user_id,
                ScheduledWorkout.scheduled_date >= start,
                ScheduledWorkout.scheduled_date <= end,
            )
            .order_by(ScheduledWorkout.scheduled_date.asc(), ScheduledWorkout.id.asc())
        ).scalars())

    def mark_scheduled_workout_completed(self, scheduled_workout: ScheduledWorkout, completed: bool) -> ScheduledWorkout:
        # Solo esta fila: nunca por workout_id
        scheduled_workout.is_completed = bool(completed)
        self._flush()
        return scheduled_workout

    # -----------------------------------------------------------------
    # Agregados para estadísticas
    # -----------------------------------------------------------------
    def count_completed_workouts(self, user_id: int) -> int:
        return int(self.session.execute(
            select(func.count(CompletedWorkout.id)).where(CompletedWorkout.user_id == user_id)
        ).scalar() or 0)

    def count_progress_tests(self, user_id: int) -> int:
        return int(self.session.execute(
            select(func.count(ProgressTest.id)).where(ProgressTest.user_id == user_id)
        ).scalar() or 0)

    def completion_dates(self, user_id: int) -> List[date]:
        """Días distintos (según completed_at) con al menos un entreno completado, descendente."""
        stamps = self.session.execute(
            select(CompletedWorkout.completed_at).where(CompletedWorkout.user_id == user_id)
        ).scalars()
        return sorted({ts.date() for ts in stamps if ts is not None}, reverse=True)


def get_store() -> DomainStore:
    """Store registrado en la app actual."""
    return current_app.extensions["fittrack.store"]
