"""
Date helpers shared by billing and persistence.
Display strings use the Colombian long form with a 12-hour clock,
e.g. "29 de febrero de 2024, 3:05 p. m.".
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from parking_ledger.config import settings

MONTH_NAMES_ES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


def display_zone() -> ZoneInfo:
    return ZoneInfo(settings.DISPLAY_TIMEZONE)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_display_zone(value: datetime) -> datetime:
    """Same instant on the display zone's wall clock. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(display_zone())


def format_display_date(value: datetime) -> str:
    """Long-form date/time in the display timezone."""
    local = to_display_zone(value)
    hour = local.hour % 12 or 12
    suffix = "a. m." if local.hour < 12 else "p. m."
    return (
        f"{local.day} de {MONTH_NAMES_ES[local.month - 1]} de {local.year}, "
        f"{hour}:{local.minute:02d} {suffix}"
    )


def to_iso(value: datetime) -> str:
    return value.isoformat()


def from_iso(raw: str) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing 'Z' is accepted."""
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)
