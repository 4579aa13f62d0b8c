from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import pytz

from ..core.constants import DEFAULT_TIMEZONE, HOURS_PRECISION

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_time_of_day(value: str) -> time:
    """Parse a zero-padded 24h HH:MM or HH:MM:SS string."""
    fmt = TIME_FORMAT if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value, fmt).time()


def minutes_of_day(value: str) -> int:
    t = parse_time_of_day(value)
    return t.hour * 60 + t.minute


def month_key(value: str) -> str:
    """'2024-03-01' -> '03.2024'"""
    d = parse_iso_date(value)
    return f"{d.month:02d}.{d.year}"


def round_hours(hours: float) -> float:
    return float(Decimal(str(hours)).quantize(Decimal(1).scaleb(-HOURS_PRECISION), rounding=ROUND_HALF_UP))


class ZoneClock:
    """Current time and civil-date arithmetic in one fixed time zone.

    The process's own local zone is never consulted, so cutoffs keep their
    meaning wherever the service runs. Wrapped so tests can pass a fixed `now`.
    """

    def __init__(self, tz_name: str = DEFAULT_TIMEZONE):
        self._tz = pytz.timezone(tz_name)

    @property
    def zone(self) -> str:
        return self._tz.zone

    def now(self) -> datetime:
        return datetime.now(pytz.utc).astimezone(self._tz)

    def to_local(self, value: Optional[datetime] = None) -> datetime:
        """Bring `value` (default: now) into the fixed zone.

        Naive datetimes are taken as already expressed in the fixed zone.
        """
        if value is None:
            return self.now()
        if value.tzinfo is None:
            return self._tz.localize(value)
        return value.astimezone(self._tz)

    def today(self, now: Optional[datetime] = None) -> str:
        return self.to_local(now).strftime(DATE_FORMAT)

    def time_str(self, now: Optional[datetime] = None) -> str:
        return self.to_local(now).strftime(TIME_FORMAT)

    def localize(self, day: str, time_of_day: str) -> datetime:
        naive = datetime.combine(parse_iso_date(day), parse_time_of_day(time_of_day))
        return self._tz.normalize(self._tz.localize(naive))

    def hours_between(self, day: str, check_in: str, check_out: str, *, roll_forward: bool = False) -> float:
        """Hours from check_in to check_out, both read on `day`.

        With roll_forward, a check_out at or before check_in is read on the
        following day. The result is rounded but not clamped.
        """
        start = self.localize(day, check_in)
        end = self.localize(day, check_out)
        if roll_forward and end <= start:
            next_day = (parse_iso_date(day) + timedelta(days=1)).strftime(DATE_FORMAT)
            end = self.localize(next_day, check_out)
        return round_hours((end - start).total_seconds() / 3600)


def normalize_time_of_day(value: str) -> str:
    """'9:05' / '09:05' / '09:05:00' -> '09:05:00'"""
    return parse_time_of_day(value).strftime(TIME_FORMAT)
