import pytest
from datetime import date, datetime

from fittrack.errors import ValidationError
from fittrack.utils.parsing import parse_bool, parse_date, parse_datetime, parse_int


def test_parse_int_acepta_enteros():
    assert parse_int(3, "programDay") == 3
    assert parse_int("7", "programDay") == 7
    # Un float entero de JSON (2.0) es válido
    assert parse_int(2.0, "programDay") == 2
    assert parse_int(None, "programDay") is None


@pytest.mark.parametrize("value", [2.9, 0.5, "2.5", True, "dos"])
def test_parse_int_rechaza_no_enteros(value):
    with pytest.raises(ValidationError):
        parse_int(value, "programDay")


def test_parse_int_obligatorio():
    with pytest.raises(ValidationError):
        parse_int("", "workoutId", required=True)


def test_parse_date():
    assert parse_date("2025-06-30") == date(2025, 6, 30)
    assert parse_date("2025-06-30T22:00:00Z") == date(2025, 6, 30)
    with pytest.raises(ValidationError):
        parse_date("30/06/2025")


def test_parse_datetime_pasa_a_utc_naive():
    assert parse_datetime("2025-07-20T12:00:00+02:00", "completedAt") == datetime(2025, 7, 20, 10, 0)


def test_parse_bool():
    assert parse_bool("false", "isCompleted") is False
    assert parse_bool(1, "isCompleted") is True
    with pytest.raises(ValidationError):
        parse_bool("quizá", "isCompleted")
