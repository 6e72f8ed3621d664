from __future__ import annotations

# roster/utils.py
import datetime as dt
from typing import Any, Optional


def date_to_sql_date(d: Optional[dt.date]) -> Optional[str]:
    """date -> 'YYYY-MM-DD' for a DATE column; None stays None (binds SQL NULL)."""
    if d is None:
        return None
    if isinstance(d, dt.datetime):
        d = d.date()
    return d.isoformat()


def sql_date_to_date(value: Any) -> Optional[dt.date]:
    """
    Stored DATE value -> date. Accepts ISO text as well as date/datetime objects
    returned by connections opened with detect_types. NULL -> None.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, bytes):
        value = value.decode("ascii")
    if isinstance(value, str):
        return dt.date.fromisoformat(value.strip()[:10])
    raise ValueError(f"unsupported date value: {value!r}")


def dash_to_date(s: str | None) -> Optional[dt.date]:
    """'YYYY-MM-DD' (or empty) from CLI/HTTP input -> date."""
    if not s:
        return None
    return dt.date.fromisoformat(s)
