"""
Repeat schedules for events.

A repeating event is stored as one row per occurrence. expand() works out
the (call_time, release_time) pair of each occurrence from the first one.
"""

import calendar
import enum
from datetime import datetime, date, timedelta
from typing import Iterator, Optional, Tuple

from grease.errors import ValidationError

NO_REPEAT = 'no'


class Period(enum.Enum):
    DAILY = 'daily'
    WEEKLY = 'weekly'
    BIWEEKLY = 'biweekly'
    MONTHLY = 'monthly'
    YEARLY = 'yearly'

    @classmethod
    def parse(cls, value: str) -> Optional['Period']:
        """Turn a repeat setting into a Period, or None for 'no'."""
        if value == NO_REPEAT:
            return None
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                f"The repeat value '{value}' is not allowed. The only allowed values "
                "are 'no', 'daily', 'weekly', 'biweekly', 'monthly', or 'yearly'."
            )

    def step_after(self, call_time: datetime) -> timedelta:
        """Time between an occurrence at call_time and the next one."""
        if self is Period.DAILY:
            return timedelta(days=1)
        if self is Period.WEEKLY:
            return timedelta(weeks=1)
        if self is Period.BIWEEKLY:
            return timedelta(weeks=2)
        if self is Period.YEARLY:
            return timedelta(days=365)
        # Monthly: length of the month the current occurrence falls in
        return timedelta(days=calendar.monthrange(call_time.year, call_time.month)[1])


class Occurrences:
    """Lazily generated occurrence times. Can be iterated more than once."""

    def __init__(self, call_time: datetime, release_time: Optional[datetime],
                 period: Optional[Period], until: Optional[date]):
        self.call_time = call_time
        self.release_time = release_time
        self.period = period
        self.until = until

    def __iter__(self) -> Iterator[Tuple[datetime, Optional[datetime]]]:
        call_time, release_time = self.call_time, self.release_time
        yield call_time, release_time

        if self.period is None:
            return

        while True:
            step = self.period.step_after(call_time)
            call_time += step
            if release_time is not None:
                release_time += step
            if call_time.date() >= self.until:
                return
            yield call_time, release_time

    def __repr__(self):
        return f'<Occurrences from {self.call_time} {self.period} until {self.until}>'


def expand(call_time, release_time=None, period=None, until=None) -> Occurrences:
    """
    Occurrences of an event repeating every period until a date.

    Args:
        call_time: call time of the first occurrence
        release_time: release time of the first occurrence, if any
        period: a Period, or None for a one-off event
        until: occurrences must fall strictly before this date

    The first pair is always included. Release times keep their offset
    from the call time.
    """
    if period is not None and until is None:
        raise ValidationError('Must supply a repeat until time if repeat is supplied.')
    return Occurrences(call_time, release_time, period, until)
