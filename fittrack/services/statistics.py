# fittrack/services/statistics.py
from datetime import date, datetime, timedelta
from typing import Dict, Iterable

from fittrack.services.store import DomainStore


def calcular_racha(dias: Iterable[date], hoy: date = None) -> int:
    """
    Días consecutivos con al menos un entreno completado.
    La racha termina hoy, o ayer si hoy aún no se ha entrenado
    (no se rompe a primera hora de la mañana).
    """
    # completed_at se guarda en UTC
    hoy = hoy or datetime.utcnow().date()
    completados = set(dias)

    cursor = hoy if hoy in completados else hoy - timedelta(days=1)
    racha = 0
    while cursor in completados:
        racha += 1
        cursor -= timedelta(days=1)
    return racha


def get_statistics(store: DomainStore, user_id: int) -> Dict[str, int]:
    """Agregado calculado al vuelo (no se persiste)."""
    return {
        "workouts": store.count_completed_workouts(user_id),
        "streak": calcular_racha(store.completion_dates(user_id)),
        "progressTests": store.count_progress_tests(user_id),
    }
