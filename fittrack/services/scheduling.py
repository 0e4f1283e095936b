# fittrack/services/scheduling.py
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from fittrack.errors import (
    AlreadyActiveError,
    InvalidRangeError,
    ProgramNotFoundError,
    ValidationError,
)
from fittrack.models.schedule import UserProgram, ScheduledWorkout
from fittrack.models.workout import Workout
from fittrack.services.store import DomainStore

logger = logging.getLogger(__name__)

# Un entreno cada N días al asignar un programa (configurable vía SCHEDULE_INTERVAL_DAYS)
DEFAULT_INTERVAL_DAYS = 3


# -------------------------------------------------------------------
# Cálculo puro (sin BD)
# -------------------------------------------------------------------
def build_day_plan(workouts: Sequence[Workout], duration: int) -> List[Tuple[int, Workout]]:
    """
    Reparte los entrenos del programa en los días 1..duration.
    Si hay menos entrenos que días, se vuelve a empezar la lista: el entreno
    se repite pero el número de día nunca.
      [W1, W2], duration=5 -> [(1,W1), (2,W2), (3,W1), (4,W2), (5,W1)]
    """
    if not workouts:
        raise ValidationError("El programa no tiene entrenos")
    if duration is None or duration < 1:
        raise ValidationError("La duración del programa debe ser >= 1")
    return [(day, workouts[(day - 1) % len(workouts)]) for day in range(1, duration + 1)]


def schedule_dates(start: date, duration: int, interval_days: int) -> List[date]:
    """Fecha de cada día de programa: el día 1 cae en `start`, el resto cada `interval_days`."""
    if interval_days < 1:
        raise ValidationError("interval_days debe ser >= 1")
    return [start + timedelta(days=i * interval_days) for i in range(duration)]


# -------------------------------------------------------------------
# Operaciones
# -------------------------------------------------------------------
def assign_program(
    store: DomainStore,
    user_id: int,
    program_id: int,
    interval_days: Optional[int] = None,
    start_date: Optional[date] = None,
) -> Tuple[UserProgram, List[ScheduledWorkout]]:
    """
    Apunta al usuario a un programa y crea un ScheduledWorkout por día.
    Todo va en una única transacción: si algo falla no queda ni el
    UserProgram ni entrenos sueltos.
    """
    program = store.get_program(program_id)
    if program is None:
        raise ProgramNotFoundError(f"Programa {program_id} no encontrado")

    interval = DEFAULT_INTERVAL_DAYS if interval_days is None else interval_days
    # Mismo reloj (UTC) que completed_at y la racha
    start = start_date or datetime.utcnow().date()

    plan = build_day_plan(store.get_program_workouts(program_id), program.duration)
    dates = schedule_dates(start, program.duration, interval)

    with store.atomic():
        if store.get_active_user_program(user_id) is not None:
            raise AlreadyActiveError("El usuario ya tiene un programa activo")

        user_program = store.create_user_program(user_id, program_id)
        scheduled = [
            store.add_scheduled_workout(
                user_id=user_id,
                workout_id=workout.id,
                scheduled_date=when,
                program_id=program_id,
                program_day=day,
                user_program_id=user_program.id,
            )
            for (day, workout), when in zip(plan, dates)
        ]

    logger.info(
        f"[assign] user={user_id} program={program_id} days={len(scheduled)} "
        f"interval={interval} start={start.isoformat()}"
    )
    return user_program, scheduled


def schedule_workout(
    store: DomainStore,
    user_id: int,
    workout_id: int,
    scheduled_date: Optional[date],
    program_id: Optional[int] = None,
    program_day: Optional[int] = None,
) -> ScheduledWorkout:
    """Programa un único entreno (autorelleno del calendario). Se permiten varios por fecha."""
    if scheduled_date is None:
        raise ValidationError("scheduled_date es obligatorio (YYYY-MM-DD)")
    if workout_id is None or store.get_workout(workout_id) is None:
        raise ValidationError(f"workout_id inválido: {workout_id}")
    if program_day is not None:
        if program_id is None:
            raise ValidationError("program_day requiere program_id")
        if program_day < 1:
            raise ValidationError("program_day debe ser >= 1")
    if program_id is not None and store.get_program(program_id) is None:
        raise ValidationError(f"program_id inválido: {program_id}")

    # Si es del programa activo, la fila queda ligada a esa asignación
    user_program_id = None
    if program_id is not None:
        active = store.get_active_user_program(user_id)
        if active is not None and active.program_id == program_id:
            user_program_id = active.id

    with store.atomic():
        sw = store.add_scheduled_workout(
            user_id=user_id,
            workout_id=workout_id,
            scheduled_date=scheduled_date,
            program_id=program_id,
            program_day=program_day,
            user_program_id=user_program_id,
        )
    return sw


def list_scheduled_by_date(store: DomainStore, user_id: int, day: date) -> List[ScheduledWorkout]:
    if day is None:
        raise ValidationError("date es obligatorio (YYYY-MM-DD)")
    return store.get_scheduled_workouts_by_date(user_id, day)


def list_scheduled_by_range(store: DomainStore, user_id: int, start: date, end: date) -> List[ScheduledWorkout]:
    if start is None or end is None:
        raise ValidationError("start y end son obligatorios (YYYY-MM-DD)")
    if start > end:
        raise InvalidRangeError("start no puede ser posterior a end")
    return store.get_scheduled_workouts_by_date_range(user_id, start, end)
