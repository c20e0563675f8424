"""
Plages de dates — presets relatifs → bornes absolues (ISO 8601 UTC, suffixe Z).
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from ..core.schemas import DateRange

DateBounds = Tuple[Optional[str], Optional[str]]


def to_iso(moment: datetime) -> str:
    """ISO 8601 UTC à la seconde : 2024-03-15T10:00:00Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def preset_bounds(preset: str, now: Optional[datetime] = None) -> Tuple[Optional[datetime], Optional[datetime]]:
    now = now or _utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if preset == "today":
        return today, now
    if preset == "yesterday":
        return today - timedelta(days=1), today
    if preset == "this_week":
        # Semaine commençant le dimanche (weekday() : lundi=0)
        return today - timedelta(days=(today.weekday() + 1) % 7), now
    if preset == "this_month":
        return today.replace(day=1), now
    if preset == "this_year":
        return today.replace(month=1, day=1), now
    return None, None


def resolve_date_range(date_range: Optional[DateRange], now: Optional[datetime] = None) -> DateBounds:
    """
    Bornes explicites prioritaires (verbatim), sinon preset calculé depuis `now`.
    Ni l'un ni l'autre → (None, None), pas de borne.
    """
    if date_range is None:
        return None, None
    if date_range.from_ or date_range.to:
        return date_range.from_, date_range.to
    if not date_range.preset:
        return None, None

    start, end = preset_bounds(date_range.preset, now)
    return (to_iso(start) if start else None, to_iso(end) if end else None)
