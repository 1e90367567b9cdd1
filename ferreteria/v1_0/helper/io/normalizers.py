from datetime import datetime, timezone, tzinfo
from typing import Any, Tuple


def to_str(v: Any) -> str:
    if v is None: return ""
    return str(v).strip()

def parse_timestamp(v: Any, tz: tzinfo) -> Tuple[datetime, datetime]:
    """
    Parse a raw movement timestamp.

    Accepts ISO 8601 strings (a trailing "Z" included) and epoch
    milliseconds. Naive values are taken as wall time in `tz`.

    Returns:
        (display, sort): the instant in `tz` and the same instant in UTC.

    Raises:
        ValueError: if the value cannot be parsed.
    """
    if isinstance(v, bool) or v is None:
        raise ValueError(f"fecha inválida: {v!r}")
    if isinstance(v, (int, float)):
        dt = datetime.fromtimestamp(v / 1000.0, tz=timezone.utc)
    else:
        s = str(v).strip()
        if not s:
            raise ValueError("fecha vacía")
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt.astimezone(tz), dt.astimezone(timezone.utc)

def format_display(dt: datetime) -> str:
    return dt.strftime("%d/%m/%Y %H:%M")
