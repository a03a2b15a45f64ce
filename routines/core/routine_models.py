from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Union

TokenKind = Literal["person", "action", "day-pattern", "time-of-day", "time", "plain"]
TimeOfDay = Literal["morning", "afternoon", "evening"]

WEEKDAY_CODES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")
WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class Daily:
    interval: int | None = None
    type: str = field(default="daily", init=False, repr=False)


@dataclass(frozen=True)
class Weekdays:
    type: str = field(default="weekdays", init=False, repr=False)


@dataclass(frozen=True)
class Weekends:
    type: str = field(default="weekends", init=False, repr=False)


@dataclass(frozen=True)
class Weekly:
    days: tuple[int, ...]
    type: str = field(default="weekly", init=False, repr=False)

    def __post_init__(self) -> None:
        days = normalize_days(self.days)
        if not days:
            raise ValueError(f"Weekly needs at least one day in 0-6, got {self.days!r}")
        object.__setattr__(self, "days", days)


@dataclass(frozen=True)
class Biweekly:
    days: tuple[int, ...] | None = None
    type: str = field(default="biweekly", init=False, repr=False)

    def __post_init__(self) -> None:
        if self.days is not None:
            object.__setattr__(self, "days", normalize_days(self.days) or None)


@dataclass(frozen=True)
class Monthly:
    type: str = field(default="monthly", init=False, repr=False)


@dataclass(frozen=True)
class Quarterly:
    type: str = field(default="quarterly", init=False, repr=False)


@dataclass(frozen=True)
class Yearly:
    type: str = field(default="yearly", init=False, repr=False)


Recurrence = Union[Daily, Weekdays, Weekends, Weekly, Biweekly, Monthly, Quarterly, Yearly]


def normalize_days(days: Any) -> tuple[int, ...]:
    """Deduplicate and sort weekday numbers, dropping anything outside 0-6."""
    values = {int(day) for day in days}
    return tuple(sorted(day for day in values if 0 <= day <= 6))


@dataclass(frozen=True)
class SemanticToken:
    text: str
    kind: TokenKind


@dataclass(frozen=True)
class Person:
    id: str
    name: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Person:
        return cls(id=str(data["id"]), name=str(data["name"]))


@dataclass(frozen=True)
class ParsedRoutine:
    raw: str
    assignee: str | None
    assignee_name: str | None
    action: str
    recurrence: Recurrence
    time_of_day: TimeOfDay | None
    time: str | None
    tokens: tuple[SemanticToken, ...]


@dataclass(frozen=True)
class RecurrencePattern:
    type: str
    days: list[str] | None = None
    interval: int | None = None
    start_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type}
        if self.days is not None:
            payload["days"] = list(self.days)
        if self.interval is not None:
            payload["interval"] = self.interval
        if self.start_date is not None:
            payload["start_date"] = self.start_date
        return payload


@dataclass(frozen=True)
class RoutineRecord:
    name: str
    recurrence_pattern: RecurrencePattern
    time_of_day: str | None
    default_assignee: str | None
    raw_input: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "recurrence_pattern": self.recurrence_pattern.to_dict(),
            "time_of_day": self.time_of_day,
            "default_assignee": self.default_assignee,
            "raw_input": self.raw_input,
        }
