"""Dyno state normalization.

Pure Python, no framework dependencies.

Raw Akkeris states: start-failure, stopping, stopped, waiting, pending,
starting, probe-failure, running, app-crashed.
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from akabot.domain.models import DisplayDyno, DynoRecord

# A failing readiness probe inside this window is still warm-up.
PROBE_GRACE = timedelta(seconds=90)

ZERO_TIMESTAMP = "0001-01-01T00:00:00Z"

CRASHED_STATES = frozenset({"start-failure", "app-crashed"})

# Column where the state starts in monospace dyno listings
NAME_COLUMN = 28


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, returning None if it can't be read."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def zone_for(name: Optional[str], fallback: str = "UTC") -> tzinfo:
    """Resolve a timezone name, trying the fallback and then UTC."""
    for candidate in (name, fallback):
        if not candidate:
            continue
        try:
            return ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError):
            continue
    return timezone.utc


def format_local(value: Optional[str], tz: tzinfo) -> str:
    """Render a timestamp like ``10/19/2026, 3:04:05 PM`` in ``tz``."""
    if not value or value == ZERO_TIMESTAMP:
        return "unknown"
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    local = parsed.astimezone(tz)
    hour = local.hour % 12 or 12
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {local.strftime('%p')}"
    )


def map_state(dyno: DynoRecord, now: datetime) -> Tuple[str, bool]:
    """Return (display state, warning) for a dyno's raw state."""
    state = dyno.state.lower()
    if state in CRASHED_STATES:
        return "crashed", True
    if state == "waiting":
        return "starting", False
    if state == "probe-failure":
        started = parse_timestamp(dyno.created_at)
        if started is not None and now - started > PROBE_GRACE:
            return "unhealthy", True
        return "starting", False
    return state, False


def normalize(
    dyno: DynoRecord,
    now: Optional[datetime] = None,
    tz: tzinfo = timezone.utc,
) -> DisplayDyno:
    """Map a raw dyno record to its display form. Never raises on state."""
    if now is None:
        now = datetime.now(timezone.utc)
    state, warning = map_state(dyno, now)
    return DisplayDyno(
        dyno_name=f"{dyno.type}.{dyno.name}",
        state=state,
        warning=warning,
        updated_at=format_local(dyno.updated_at, tz),
    )


def padding(dyno_name: str) -> str:
    """Spacing after ``name:`` so short names line up."""
    if len(dyno_name) > NAME_COLUMN - 2:
        return "  "
    return " " * (NAME_COLUMN - (len(dyno_name) + 2))
