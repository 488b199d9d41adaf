from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..core.enums import RecordStatus
from ..core.exceptions import ValidationError
from .datetime_utils import try_parse_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Best-effort integer coercion for form/JSON input; bools are not ints here."""

    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number or number in (float("inf"), float("-inf")):
        return default
    return int(number)


def require_positive_int(value: Any, field_name: str) -> int:
    n = to_int(value)
    if n is None or n <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return n


def require_iso_date(value: Any, field_name: str) -> date:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    parsed = try_parse_iso_date(value)
    if parsed is None:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")
    return parsed


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    v = str(value).strip()
    return v or None


def parse_record_status(value: Optional[str]) -> RecordStatus:
    v = (value or "").strip().lower()
    if not v or v in {"active", "activo", "activa"}:
        return RecordStatus.ACTIVE
    if v in {"inactive", "inactivo", "inactiva"}:
        return RecordStatus.INACTIVE
    raise ValidationError("Status must be Active or Inactive")
