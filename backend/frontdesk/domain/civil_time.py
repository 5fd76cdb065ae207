"""
Civil time helpers

All stored and displayed timestamps use a fixed UTC+5:30 wall clock,
independent of the server or operator timezone. Civil values are naive
datetimes already shifted to that offset.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

CIVIL_OFFSET = timedelta(hours=5, minutes=30)
ONE_DAY = timedelta(days=1)

STORAGE_FORMAT = "%Y-%m-%d %H:%M:%S"
INPUT_FORMAT = "%Y-%m-%dT%H:%M"


class Clock:
    """Time source; now() returns an aware UTC instant"""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    """Wall clock of the host"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


system_clock = SystemClock()


def get_clock() -> Clock:
    """Dependency: the clock services read "now" from"""
    return system_clock


def to_civil_time(instant: datetime) -> datetime:
    """
    Shift a raw instant to civil time.

    Aware values are converted to UTC first; naive values are taken to be UTC.
    Apply exactly once per raw instant: a civil value passed back in is
    shifted again.
    """
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc).replace(tzinfo=None)
    return instant + CIVIL_OFFSET


def civil_now(clock: Optional[Clock] = None) -> datetime:
    """Current civil time from the given clock"""
    return to_civil_time((clock or system_clock).now())


def format_for_storage(civil: datetime) -> str:
    """YYYY-MM-DD HH:mm:ss"""
    return civil.strftime(STORAGE_FORMAT)


def format_for_input(civil: datetime) -> str:
    """YYYY-MM-DDTHH:mm, as used by datetime-local inputs"""
    return civil.strftime(INPUT_FORMAT)


def format_for_display(civil: datetime) -> str:
    """DD/MM/YYYY hh:mm AM/PM"""
    meridiem = "PM" if civil.hour >= 12 else "AM"
    hour = civil.hour % 12 or 12
    return f"{civil:%d/%m/%Y} {hour:02d}:{civil:%M} {meridiem}"


def parse_civil(value: str) -> datetime:
    """Parse a storage or input formatted string back to a civil datetime"""
    for fmt in (STORAGE_FORMAT, INPUT_FORMAT):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date/time: {value!r}")


def add_days(civil: datetime, days: int) -> datetime:
    """Calendar-day addition, time of day preserved"""
    return civil + timedelta(days=days)


def days_between(to: datetime, from_: Optional[datetime] = None,
                 clock: Optional[Clock] = None) -> int:
    """
    Whole days from `from_` to `to`, rounded up and never below one.

    Args:
        to: civil end instant
        from_: civil start instant, defaults to civil now
        clock: time source used when `from_` is omitted

    Returns:
        ceil((to - from_) / 1 day), floored at 1
    """
    if from_ is None:
        from_ = civil_now(clock)
    whole, remainder = divmod(to - from_, ONE_DAY)
    if remainder:
        whole += 1
    return max(1, whole)
