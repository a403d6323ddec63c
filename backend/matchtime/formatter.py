"""
Match time formatting in the fixed display zone.

Sports APIs hand us `dateEvent` / `strTime` as bare wall-clock strings with
no zone marker. They are treated as UTC, shifted by the app-wide offset and
rendered two ways:

  countdown()                 "2d 4h" / "1h 30m" / "0m 30s", or None once started
  format_relative_datetime()  "Today, 8:30 PM IST" / "Mar 1, 2024, 3:00 PM IST"

Nothing here raises on bad input. Parse failures become None (instants,
countdowns) or a raw "{date} {time} {zone}" string (labels).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from matchtime.config import TARGET_OFFSET, TARGET_OFFSET_MINUTES, ZONE_LABEL
from models.match import KickoffInfo, TargetInstant

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_DAY_LABELS = {0: "Today", 1: "Tomorrow", -1: "Yesterday"}


class MatchTimeParseError(ValueError):
    """Malformed date or time field. Never escapes this module."""


def _numeric(part: str) -> int:
    part = part.strip()
    if not part or not (part.isascii() and part.isdigit()):
        raise MatchTimeParseError(f"not a number: {part!r}")
    return int(part)


def _parse_date(value: str) -> tuple[int, int, int]:
    parts = str(value).strip().split("-")
    if len(parts) != 3:
        raise MatchTimeParseError(f"bad date: {value!r}")
    year, month, day = (_numeric(p) for p in parts)
    return year, month, day


def _parse_time(value: str) -> tuple[int, int]:
    # Seconds (and anything after them) are ignored
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        raise MatchTimeParseError(f"bad time: {value!r}")
    return _numeric(parts[0]), _numeric(parts[1])


def _as_utc(moment: Optional[datetime]) -> datetime:
    if moment is None:
        return datetime.now(timezone.utc)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _parse_instant(date: str, time: str, assume_utc: bool = True) -> TargetInstant:
    year, month, day = _parse_date(date)
    hour, minute = _parse_time(time)
    try:
        utc = datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
        shifted = utc + TARGET_OFFSET if assume_utc else utc
    except (ValueError, OverflowError) as exc:
        raise MatchTimeParseError(str(exc)) from exc
    return TargetInstant(instant=shifted, offset_minutes=TARGET_OFFSET_MINUTES)


def to_target_instant(date: str, time: str, assume_utc: bool = True) -> Optional[TargetInstant]:
    """Wall-clock fields -> instant in the display zone, or None if invalid."""
    try:
        return _parse_instant(date, time, assume_utc)
    except MatchTimeParseError as exc:
        logger.debug("Unparseable match time %r %r: %s", date, time, exc)
        return None


def countdown(target: TargetInstant, now: Optional[datetime] = None) -> Optional[str]:
    """
    Time left until `target`, most significant unit pair only.

    Returns None when the target is not in the future.
    """
    try:
        remaining = target.instant - _as_utc(now)
    except (TypeError, AttributeError, OverflowError):
        return None
    if remaining <= timedelta(0):
        return None

    total = int(remaining.total_seconds())
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {seconds}s"


def _clock(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def format_relative_datetime(
    date: str,
    time: str,
    now: Optional[datetime] = None,
    assume_utc: bool = True,
) -> str:
    """
    "Today" / "Tomorrow" / "Yesterday" / "Mon D, YYYY", then the 12-hour
    time and zone label. Day difference is by calendar date in the display
    zone, not by elapsed hours.

    With assume_utc=False the fields are taken as display-zone wall clock
    already and are not shifted.
    """
    fallback = f"{date} {time} {ZONE_LABEL}"
    try:
        target = _parse_instant(date, time, assume_utc).instant
        today = (_as_utc(now) + TARGET_OFFSET).date()
    except (MatchTimeParseError, TypeError, AttributeError, OverflowError):
        return fallback

    diff_days = (target.date() - today).days
    day_label = _DAY_LABELS.get(diff_days)
    if day_label is None:
        day_label = f"{MONTH_ABBREVIATIONS[target.month - 1]} {target.day}, {target.year}"

    return f"{day_label}, {_clock(target)} {ZONE_LABEL}"


def _iso_in_zone(target: TargetInstant) -> str:
    # instant's UTC fields are display-zone wall clock; label them with the real offset
    zone = timezone(timedelta(minutes=target.offset_minutes))
    return target.instant.replace(tzinfo=zone).isoformat()


def kickoff_info(
    date: Optional[str],
    time: Optional[str],
    now: Optional[datetime] = None,
    assume_utc: bool = True,
) -> KickoffInfo:
    """Label, countdown and display-zone ISO timestamp for one match."""
    label = format_relative_datetime(date, time, now, assume_utc)
    target = to_target_instant(date, time, assume_utc)
    if target is None:
        return KickoffInfo(label=label)
    return KickoffInfo(
        label=label,
        countdown=countdown(target, now),
        starts_at=_iso_in_zone(target),
    )
