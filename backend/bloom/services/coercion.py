# row coercion: tolerant conversions for values coming out of the data store
# every helper degrades to a default and notes a warning instead of raising

import json
import math
from datetime import date, datetime
from typing import Any, Optional


def note(warnings: Optional[list[str]], message: str) -> None:
    """append a warning if the caller is collecting them"""
    if warnings is not None:
        warnings.append(message)


def round_half_up(value: float) -> int:
    """round .5 away from zero for positives, matching how the frontend rounds"""
    return int(math.floor(value + 0.5))


def to_number(value: Any, default: float = 0.0, *, field: str = "",
              warnings: Optional[list[str]] = None) -> float:
    """coerce a numeric column to float.
    handles text and decimal columns (incl. bson Decimal128). None means default,
    an unparseable value also means default but is reported."""
    if value is None:
        return default
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            note(warnings, f"{field or 'value'}: non-numeric {value!r}, using {default}")
            return default

    if math.isnan(number) or math.isinf(number):
        note(warnings, f"{field or 'value'}: non-finite {value!r}, using {default}")
        return default
    return number


def to_int(value: Any, default: int = 0, *, field: str = "",
           warnings: Optional[list[str]] = None) -> int:
    return int(to_number(value, default, field=field, warnings=warnings))


def number_or_default(value: Any, default: float, *, field: str = "",
                      warnings: Optional[list[str]] = None) -> float:
    """like to_number, but a zero value also falls back to the default.
    used for targets where 0 means "not configured"."""
    return to_number(value, 0.0, field=field, warnings=warnings) or default


def parse_json_list(value: Any, *, field: str = "",
                    warnings: Optional[list[str]] = None) -> list[str]:
    """decode a json-encoded text column holding a list of strings"""
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]

    try:
        decoded = json.loads(value)
    except (TypeError, ValueError):
        note(warnings, f"{field or 'value'}: malformed json, using []")
        return []

    if not isinstance(decoded, list):
        note(warnings, f"{field or 'value'}: expected a json list, using []")
        return []
    return [str(item) for item in decoded]


def to_datetime(value: Any) -> Optional[datetime]:
    """accept a datetime, a date, or an iso-8601 string. None if it can't be read."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        # python < 3.11 doesn't accept a trailing Z
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def to_iso_date(value: Any) -> str:
    """render a date-like value as YYYY-MM-DD, or "" when absent"""
    parsed = to_datetime(value)
    return parsed.date().isoformat() if parsed else ""


def to_iso_timestamp(value: Any) -> Optional[str]:
    parsed = to_datetime(value)
    return parsed.isoformat() if parsed else None
