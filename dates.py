# Calendar-day helpers shared by the streak, check-in queries and CTA rules.
from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True)
class ServerTimestamp:
    """Instant assigned by the store when an entry is written."""

    seconds: int
    nanoseconds: int = 0

    @classmethod
    def now(cls) -> "ServerTimestamp":
        ns = time.time_ns()
        return cls(ns // 1_000_000_000, ns % 1_000_000_000)

    @classmethod
    def from_millis(cls, ms: int) -> "ServerTimestamp":
        return cls(ms // 1000, (ms % 1000) * 1_000_000)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "ServerTimestamp":
        return cls.from_millis(int(dt.timestamp() * 1000))

    def to_millis(self) -> int:
        return self.seconds * 1000 + self.nanoseconds // 1_000_000

    def to_datetime(self) -> datetime:
        # Truncate to microseconds; float seconds can round across midnight.
        return datetime.fromtimestamp(self.seconds) + timedelta(microseconds=self.nanoseconds // 1000)


def to_canonical_date(value: datetime | date | ServerTimestamp) -> datetime:
    """Return a naive local datetime for either representation."""
    if isinstance(value, ServerTimestamp):
        return value.to_datetime()
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    return datetime(value.year, value.month, value.day)


def normalize_to_start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def is_same_day(a, b) -> bool:
    d1 = normalize_to_start_of_day(to_canonical_date(a))
    d2 = normalize_to_start_of_day(to_canonical_date(b))
    return d1 == d2


def is_today(value) -> bool:
    return is_same_day(value, datetime.now())


def get_today_start() -> datetime:
    return normalize_to_start_of_day(datetime.now())


def get_tomorrow_start() -> datetime:
    return get_today_start() + timedelta(days=1)


def days_between(a, b) -> int:
    d1 = normalize_to_start_of_day(to_canonical_date(a))
    d2 = normalize_to_start_of_day(to_canonical_date(b))
    return abs((d2 - d1).days)


def day_start_ms(value) -> int:
    dt = normalize_to_start_of_day(to_canonical_date(value))
    return int(dt.timestamp() * 1000)
