"""Value types shared by the fetcher, renderer and dispatcher."""

from __future__ import annotations

import datetime
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from harvest_blame.dates import iter_days

T = TypeVar("T")


@dataclass(frozen=True)
class User:
    """A Harvest person, as returned by the people endpoint."""

    id: str
    first_name: str
    last_name: str
    email: str

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class DateRange:
    """Calendar date range with both ends inclusive."""

    start: datetime.date
    end: datetime.date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"start date {self.start} is after end date {self.end}"
            )

    def __iter__(self) -> Iterator[datetime.date]:
        return iter_days(self.start, self.end)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def __contains__(self, day: object) -> bool:
        return isinstance(day, datetime.date) and self.start <= day <= self.end

    def days(self) -> list[datetime.date]:
        return list(self)


@dataclass(frozen=True)
class RawEntry:
    """A single time entry: hours a user logged against one day."""

    user_id: str
    spent_at: datetime.date
    hours: float


@dataclass(frozen=True)
class Timesheet:
    """Dense per-day hours for one user.

    ``hours`` is wrapped in a read-only mapping proxy on construction,
    so a timesheet cannot be changed once built.
    """

    user: User
    hours: Mapping[datetime.date, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "hours", MappingProxyType(dict(self.hours)))

    @property
    def total(self) -> int:
        return sum(self.hours.values())


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of one time-tracking service call."""

    success: bool
    data: T | None = None
    status_code: int | None = None

    @classmethod
    def ok(cls, data: Any, status_code: int | None = 200) -> ApiResult:
        return cls(True, data, status_code)

    @classmethod
    def failed(cls, status_code: int | None = None) -> ApiResult:
        return cls(False, None, status_code)
