"""
Date arithmetic shared by the aggregator and the heatmap renderer.

All functions take the reference instant ``now`` as a parameter; nothing in
here reads the system clock.
"""

from datetime import datetime, timedelta

# Trailing window of history, in days (about six months)
WINDOW_DAYS = 183

# Returned by days_since() for timestamps older than the window
OUT_OF_RANGE = 99999

ONE_DAY = timedelta(days=1)

# datetime.weekday(): Monday=0 ... Sunday=6
_OFFSETS = {
    6: 7,  # Sunday
    0: 6,  # Monday
    1: 5,  # Tuesday
    2: 4,  # Wednesday
    3: 3,  # Thursday
    4: 2,  # Friday
    5: 1,  # Saturday
}


def start_of_day(moment: datetime) -> datetime:
    """Return midnight of the day ``moment`` falls on, in its own timezone."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def alignment_offset(now: datetime) -> int:
    """
    Shift applied to day counts so the calendar lines up with week columns.

    Args:
        now: Reference instant

    Returns:
        Integer from 1 (Saturday) to 7 (Sunday)
    """
    return _OFFSETS[now.weekday()]


def days_since(timestamp: datetime, now: datetime) -> int:
    """
    Count whole days between the day of ``timestamp`` and the day of ``now``.

    Timestamps on or after the start of today, including ones in the future
    because of clock skew, count as today (0). Anything older than
    WINDOW_DAYS returns OUT_OF_RANGE.

    Args:
        timestamp: Commit time (timezone aware; naive values are read in
            ``now``'s timezone)
        now: Reference instant

    Returns:
        Days in [0, WINDOW_DAYS] or OUT_OF_RANGE
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=now.tzinfo)
    elif now.tzinfo is not None:
        # Days are counted in the viewer's timezone
        timestamp = timestamp.astimezone(now.tzinfo)

    day = start_of_day(timestamp)
    today = start_of_day(now)
    if day >= today:
        return 0

    # Round partial days up: a day boundary was crossed
    elapsed = today - day
    days = elapsed // ONE_DAY
    if elapsed % ONE_DAY:
        days += 1

    if days > WINDOW_DAYS:
        return OUT_OF_RANGE
    return days


def day_index(timestamp: datetime, now: datetime) -> int | None:
    """
    Map a commit timestamp to its aligned histogram slot.

    Returns:
        Index in [alignment_offset(now), WINDOW_DAYS + alignment_offset(now)],
        or None when the timestamp falls outside the window
    """
    days = days_since(timestamp, now)
    if days == OUT_OF_RANGE:
        return None
    return days + alignment_offset(now)
