"""Recurrence rules and occurrence expansion.

An event has a base interval (its first occurrence) and a recurrence rule.
Expanding the pair yields the concrete intervals a client can book:

    >>> base = TimeInterval(datetime(2024, 1, 1, 10), datetime(2024, 1, 1, 11))
    >>> rule = RecurrenceRule(Frequency.WEEKLY, OccurrenceCount(3))
    >>> [o.start.day for o in expand(base, rule)]
    [1, 8, 15]

Occurrence ``k`` starts ``k`` calendar units after the base start and keeps
the base duration. Month and year steps clamp to the last day of the target
month (Jan 31 + 1 month is Feb 29 in a leap year) and are always taken from
the base start, so a series anchored on the 31st returns to the 31st
whenever the month has one.

Occurrences are never stored; they are recomputed on every call.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Self, assert_never

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from bookings.domain.errors import ConfigurationError


class Frequency(Enum):
    """How often an event repeats."""

    NEVER = "never"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class OccurrenceCount:
    """Stop after ``count`` occurrences."""

    count: int

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise ConfigurationError("Occurrence count must be an integer")
        if self.count < 1:
            raise ConfigurationError("Occurrence count must be at least 1")


@dataclass(frozen=True)
class UntilDate:
    """Stop once an occurrence would start on a day after ``until``."""

    until: date

    def __post_init__(self) -> None:
        if isinstance(self.until, datetime):
            object.__setattr__(self, "until", self.until.date())
        elif not isinstance(self.until, date):
            raise ConfigurationError("Until date must be a date")


EndCondition = OccurrenceCount | UntilDate | None


@dataclass(frozen=True)
class TimeInterval:
    """A start/end pair; the base event or one generated occurrence."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ConfigurationError("Interval end must be after its start")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def starting_at(self, start: datetime) -> "TimeInterval":
        """Return an interval of the same duration beginning at ``start``."""
        return TimeInterval(start=start, end=start + self.duration)


@dataclass(frozen=True)
class RecurrenceRule:
    """Frequency plus the condition that ends the series."""

    frequency: Frequency
    end_condition: EndCondition = None

    def __post_init__(self) -> None:
        if self.frequency is Frequency.NEVER:
            if self.end_condition is not None:
                raise ConfigurationError(
                    "A non-repeating event cannot have an end condition"
                )
        elif self.end_condition is None:
            raise ConfigurationError(
                f"A {self.frequency.value} recurrence needs an occurrence count or an until date"
            )
        elif not isinstance(self.end_condition, (OccurrenceCount, UntilDate)):
            raise ConfigurationError("Unknown end condition")

    @classmethod
    def never(cls) -> Self:
        return cls(frequency=Frequency.NEVER)

    @property
    def is_repeating(self) -> bool:
        return self.frequency is not Frequency.NEVER

    @classmethod
    def from_primitives(cls, data: Mapping[str, Any] | None) -> Self:
        """Build a rule from its wire shape.

        Accepts ``{"frequency": "weekly", "endCondition": {...}}`` where the
        end condition is ``null``, ``{"type": "occurrences", "occurrences": 3}``
        or ``{"type": "date", "until": "2024-03-15"}``. A missing recurrence
        means the event does not repeat.

        Raises:
            ConfigurationError: If any part of the shape is malformed.
        """
        if data is None:
            return cls.never()
        if not isinstance(data, Mapping):
            raise ConfigurationError("Recurrence must be an object")

        try:
            frequency = Frequency(data.get("frequency"))
        except ValueError as exc:
            raise ConfigurationError("Unknown recurrence frequency") from exc

        return cls(
            frequency=frequency,
            end_condition=_end_condition_from_primitives(data.get("endCondition")),
        )

    def to_primitives(self) -> dict[str, Any]:
        end = self.end_condition
        if end is None:
            end_condition = None
        elif isinstance(end, OccurrenceCount):
            end_condition = {"type": "occurrences", "occurrences": end.count}
        elif isinstance(end, UntilDate):
            end_condition = {"type": "date", "until": end.until.isoformat()}
        else:
            assert_never(end)
        return {"frequency": self.frequency.value, "endCondition": end_condition}


def _end_condition_from_primitives(data: Any) -> EndCondition:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise ConfigurationError("End condition must be an object")

    kind = data.get("type")
    if kind == "occurrences":
        return OccurrenceCount(data.get("occurrences"))
    if kind == "date":
        return UntilDate(_parse_until(data.get("until")))
    raise ConfigurationError("Unknown end condition type")


def _parse_until(value: Any) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value).date()
        except ValueError as exc:
            raise ConfigurationError("Until date is not a valid ISO date") from exc
    raise ConfigurationError("Until date is required")


_STEPS: dict[Frequency, relativedelta] = {
    Frequency.DAILY: relativedelta(days=1),
    Frequency.WEEKLY: relativedelta(weeks=1),
    Frequency.MONTHLY: relativedelta(months=1),
    Frequency.YEARLY: relativedelta(years=1),
}


def _shifted(interval: TimeInterval, step: relativedelta, times: int = 1) -> TimeInterval | None:
    """Return ``interval`` moved ``times`` steps, or None past the last representable date."""
    try:
        return interval.starting_at(interval.start + step * times)
    except (OverflowError, ValueError):
        return None


def next_interval(interval: TimeInterval, frequency: Frequency) -> TimeInterval:
    """Advance ``interval`` by one step of ``frequency``, keeping its duration.

    ``Frequency.NEVER`` returns the interval unchanged.

    Raises:
        ConfigurationError: If the next interval would end after year 9999.
    """
    if frequency is Frequency.NEVER:
        return interval
    following = _shifted(interval, _STEPS[frequency])
    if following is None:
        raise ConfigurationError("Next occurrence is past the last supported date")
    return following


def _reached_end(end_condition: EndCondition, emitted: int, start: datetime) -> bool:
    if end_condition is None:
        raise ConfigurationError("A repeating recurrence needs an end condition")
    if isinstance(end_condition, OccurrenceCount):
        return emitted >= end_condition.count
    if isinstance(end_condition, UntilDate):
        return start.date() > end_condition.until
    assert_never(end_condition)


def _check_terminates(base: TimeInterval, rule: RecurrenceRule) -> None:
    if not rule.is_repeating:
        return

    end = rule.end_condition
    if isinstance(end, UntilDate) and end.until < base.start.date():
        raise ConfigurationError("Until date is before the first occurrence")
    if isinstance(end, OccurrenceCount):
        last = _shifted(base, _STEPS[rule.frequency], end.count - 1)
        if last is None:
            raise ConfigurationError("Occurrence count runs past the last supported date")


def _generate(base: TimeInterval, rule: RecurrenceRule) -> Iterator[TimeInterval]:
    if not rule.is_repeating:
        yield base
        return

    step = _STEPS[rule.frequency]
    emitted = 0
    while True:
        occurrence = _shifted(base, step, emitted)
        # An until date near year 9999 ends with the calendar.
        if occurrence is None:
            return
        if _reached_end(rule.end_condition, emitted, occurrence.start):
            return
        yield occurrence
        emitted += 1


def iter_occurrences(base: TimeInterval, rule: RecurrenceRule) -> Iterator[TimeInterval]:
    """Lazily yield the occurrences of ``base`` under ``rule``.

    The rule is checked before the iterator is returned, so a rule that
    could never terminate fails here rather than on first use. Call again
    to restart the series.

    Raises:
        ConfigurationError: If the rule cannot produce a finite series.
    """
    _check_terminates(base, rule)
    return _generate(base, rule)


def expand(base: TimeInterval, rule: RecurrenceRule) -> list[TimeInterval]:
    """Return every occurrence of ``base`` under ``rule``, in order.

    Raises:
        ConfigurationError: If the rule cannot produce a finite series.
    """
    return list(iter_occurrences(base, rule))


def describe(rule: RecurrenceRule) -> str | None:
    """Summarize a rule for display, or None when the event does not repeat."""
    if not rule.is_repeating:
        return None

    text = f"Repeats {rule.frequency.value}"
    end = rule.end_condition
    if isinstance(end, OccurrenceCount):
        text += ", once" if end.count == 1 else f", {end.count} times"
    elif isinstance(end, UntilDate):
        text += f", until {end.until:%b} {end.until.day}, {end.until.year}"
    return text
