# fittrack/services/completion.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from fittrack.errors import AlreadyActiveError, NotFoundError, ValidationError
from fittrack.models.schedule import UserProgram, ScheduledWorkout, CompletedWorkout
from fittrack.services.store import DomainStore

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    updated_workout: ScheduledWorkout
    completed_workout: Optional[CompletedWorkout] = None
    # Programa afectado si el avance de día lo ha tocado
    user_program: Optional[UserProgram] = None


def _owned_scheduled_workout(store: DomainStore, scheduled_workout_id: int, user_id: int) -> ScheduledWorkout:
    sw = store.get_scheduled_workout(scheduled_workout_id)
    if sw is None or sw.user_id != user_id:
        raise NotFoundError(f"Entreno programado {scheduled_workout_id} no encontrado")
    return sw


def _owned_user_program(store: DomainStore, user_program_id: int, user_id: int) -> UserProgram:
    up = store.get_user_program(user_program_id)
    if up is None or up.user_id != user_id:
        raise NotFoundError(f"Programa de usuario {user_program_id} no encontrado")
    return up


def _belongs_to(sw: ScheduledWorkout, up: UserProgram) -> bool:
    """
    La fila pertenece a la asignación `up`. Las filas sin user_program_id
    (sueltas o antiguas) solo cuentan si son del mismo programa y no
    anteriores al inicio de la asignación.
    """
    if sw.user_program_id is not None:
        return sw.user_program_id == up.id
    return up.program_id == sw.program_id and sw.scheduled_date >= up.started_at.date()


def _advance_program(store: DomainStore, sw: ScheduledWorkout, now: datetime) -> Optional[UserProgram]:
    """
    Mueve el cursor current_day del programa activo tras completar `sw`:
      - día pasado         -> sin cambios
      - último día         -> programa terminado (is_active=False, completed_at)
      - día actual         -> +1
      - día futuro         -> salta a ese día (sin el +1)
    El cursor nunca retrocede ni pasa de la duración.
    Devuelve el UserProgram si lo ha modificado.
    """
    if sw.program_id is None or sw.program_day is None:
        return None

    up = store.get_active_user_program(sw.user_id)
    if up is None or not _belongs_to(sw, up):
        return None

    if sw.program_day < up.current_day:
        return None

    duration = up.program.duration
    if sw.program_day >= duration:
        up.current_day = max(up.current_day, duration)
        up.is_active = False
        up.completed_at = now
        logger.info(f"[progress] user_program={up.id} terminado (day {sw.program_day}/{duration})")
    elif sw.program_day == up.current_day:
        up.current_day += 1
    else:
        # Completado fuera de orden
        up.current_day = sw.program_day
    return up


def set_completion(store: DomainStore, scheduled_workout_id: int, user_id: int, is_completed: bool) -> CompletionResult:
    """
    Marca / desmarca un ScheduledWorkout concreto.

    Solo cambia is_completed de ESA fila. Al pasar a completado añade una
    fila al histórico y puede avanzar el programa. Repetir la misma marca es
    idempotente: no duplica histórico ni vuelve a avanzar.
    """
    sw = _owned_scheduled_workout(store, scheduled_workout_id, user_id)
    target = bool(is_completed)

    if sw.is_completed == target:
        return CompletionResult(updated_workout=sw)

    now = datetime.utcnow()
    with store.atomic():
        store.mark_scheduled_workout_completed(sw, target)
        if not target:
            return CompletionResult(updated_workout=sw)

        cw = store.add_completed_workout(
            user_id=user_id,
            workout_id=sw.workout_id,
            scheduled_date=sw.scheduled_date,
            scheduled_workout_id=sw.id,
            completed_at=now,
        )
        up = _advance_program(store, sw, now)

    logger.info(
        f"[complete] user={user_id} scheduled={sw.id} workout={sw.workout_id} "
        f"date={sw.scheduled_date.isoformat()} program_day={sw.program_day}"
    )
    return CompletionResult(updated_workout=sw, completed_workout=cw, user_program=up)


def update_program_progress(
    store: DomainStore,
    user_program_id: int,
    user_id: int,
    current_day: Optional[int] = None,
    is_active: Optional[bool] = None,
    completed_at: Optional[datetime] = None,
) -> UserProgram:
    """Actualización manual del progreso (solo los campos que vengan)."""
    up = _owned_user_program(store, user_program_id, user_id)

    if current_day is not None:
        duration = up.program.duration
        if current_day < 1 or current_day > duration:
            raise ValidationError(f"current_day debe estar entre 1 y {duration}")

    with store.atomic():
        if is_active and not up.is_active:
            other = store.get_active_user_program(user_id)
            if other is not None and other.id != up.id:
                raise AlreadyActiveError("El usuario ya tiene un programa activo")
        if current_day is not None:
            up.current_day = current_day
        if is_active is not None:
            up.is_active = bool(is_active)
        if completed_at is not None:
            up.completed_at = completed_at
    return up


def unsubscribe(store: DomainStore, user_program_id: int, user_id: int) -> UserProgram:
    """Desapunta al usuario. La propiedad se comprueba ANTES de tocar nada."""
    up = _owned_user_program(store, user_program_id, user_id)
    with store.atomic():
        up.is_active = False
        up.unsubscribed_at = datetime.utcnow()
    logger.info(f"[unsubscribe] user={user_id} user_program={up.id}")
    return up
