# fittrack/utils/parsing.py
"""Coerción de entrada (query string / JSON) a tipos Python."""

from datetime import date, datetime

from fittrack.errors import ValidationError


def parse_date(value, field: str = "date", required: bool = True):
    """
    'YYYY-MM-DD' (o ISO con hora, se queda con la fecha) -> date.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field} es obligatorio (YYYY-MM-DD)")
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    try:
        if "T" in s:
            return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field} inválido (YYYY-MM-DD): {s!r}")


def parse_datetime(value, field: str):
    if value is None or value == "":
        return None
    try:
        dt = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field} inválido (ISO 8601): {value!r}")
    # Se guarda naive en UTC
    if dt.tzinfo is not None:
        dt = (dt - dt.utcoffset()).replace(tzinfo=None)
    return dt


def parse_int(value, field: str, required: bool = False):
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} es obligatorio")
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} debe ser un entero")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field} debe ser un entero: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} debe ser un entero: {value!r}")


def parse_bool(value, field: str, required: bool = False):
    if value is None:
        if required:
            raise ValidationError(f"{field} es obligatorio")
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "0", "no"):
        return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValidationError(f"{field} debe ser booleano: {value!r}")
