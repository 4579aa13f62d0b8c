from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_time_of_day


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} non valido")
    return str(value).strip()


def require_iso_date(value: str, field_name: str = "Data") -> str:
    value = require_non_empty(value, field_name)
    try:
        parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} non valida (formato AAAA-MM-GG)")
    return value


def require_time_of_day(value: str, field_name: str = "Orario") -> str:
    value = require_non_empty(value, field_name)
    try:
        parse_time_of_day(value)
    except ValueError:
        raise ValidationError(f"{field_name} non valido (formato HH:MM)")
    return value


def require_non_negative_number(value: Any, field_name: str) -> float:
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} non valida")
    if number < 0 or number != number:
        raise ValidationError(f"{field_name} non può essere negativa")
    return number


_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def require_flag(value: Any, field_name: str) -> bool:
    """JSON booleans, 0/1, or the usual on/off words."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValidationError(f"{field_name} non valido")
