"""Calendar windows used by the vote quota and vote history.

A "day" is the local calendar day: local midnight up to the next local
midnight minus one millisecond. Local means the configured voting timezone,
or the server's zone when none is configured.
"""

import os
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pulsar.domain.error import ValidationError
from pulsar.domain.value.common import ValueObject
from pulsar.domain.value.types import TimeRange

ONE_DAY = timedelta(days=1)
ONE_MILLISECOND = timedelta(milliseconds=1)
LOCALTIME = "/etc/localtime"


class TimeWindow(ValueObject):
    """Inclusive ``[start, end]`` window; a missing bound is open."""

    start: datetime | None = None
    end: datetime | None = None

    def contains(self, moment: datetime) -> bool:
        """Check whether a moment falls inside the window."""
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment > self.end:
            return False
        return True


def _local_zone_names() -> list[str]:
    names = []
    tz_env = os.environ.get("TZ", "").lstrip(":")
    if tz_env:
        names.append(tz_env)
    target = os.path.realpath(LOCALTIME)
    if "zoneinfo/" in target:
        names.append(target.split("zoneinfo/", 1)[1])
    return names


def _local_zone() -> tzinfo:
    """Server's named zone, so local midnight follows its DST rules.

    Looks at ``TZ`` and then the ``/etc/localtime`` link. When neither names
    an IANA zone, falls back to the current fixed UTC offset, which does not
    follow DST changes. Set ``voting.timezone`` on such hosts.
    """
    for key in _local_zone_names():
        try:
            return ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError):
            continue
    local = datetime.now().astimezone().tzinfo
    return local if local is not None else timezone.utc


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve the voting timezone.

    Args:
        name: IANA zone name, or None for the server's local zone

    Returns:
        tzinfo for the zone

    Raises:
        ValidationError: If the zone name is unknown
    """
    if not name:
        return _local_zone()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name}")


def local_now(tz: tzinfo) -> datetime:
    """Current time as an aware datetime in the given zone."""
    return datetime.now(tz)


def day_window(now: datetime) -> TimeWindow:
    """Local calendar day containing ``now``."""
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return TimeWindow(start=start, end=start + ONE_DAY - ONE_MILLISECOND)


def next_reset(now: datetime) -> datetime:
    """Next local midnight after ``now``."""
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start + ONE_DAY


def milliseconds_until(now: datetime, moment: datetime) -> int:
    """Whole milliseconds from ``now`` to ``moment``.

    Both sides are compared in UTC so offset changes inside the day count.
    """
    delta = moment.astimezone(timezone.utc) - now.astimezone(timezone.utc)
    return int(delta / ONE_MILLISECOND)


def history_window(time_range: TimeRange, now: datetime) -> TimeWindow:
    """Window selected by a vote history time range.

    Args:
        time_range: today, week (last 7x24h), month (last 30x24h) or all
        now: Current local time

    Returns:
        Window to filter votes by creation time
    """
    if time_range == TimeRange.TODAY:
        return day_window(now)
    if time_range == TimeRange.WEEK:
        return TimeWindow(start=now - timedelta(days=7))
    if time_range == TimeRange.MONTH:
        return TimeWindow(start=now - timedelta(days=30))
    return TimeWindow()
