"""Data models for the graph dashboard widget."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional


class Period(Enum):
    """Trailing time window selectable in the widget."""

    LAST_7_DAYS = "7days"
    LAST_15_DAYS = "15days"
    LAST_1_MONTH = "1month"

    @property
    def label(self) -> str:
        return _PERIOD_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> "Period":
        """Parse a wire value ("7days", "15days", "1month") into a Period.

        Raises:
            ValueError: If the value is not one of the known periods
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Invalid period: {value!r}. Use one of: {valid}")


_PERIOD_LABELS = {
    Period.LAST_7_DAYS: "Last 7 days",
    Period.LAST_15_DAYS: "Last 15 days",
    Period.LAST_1_MONTH: "Last 1 month",
}


@dataclass(frozen=True)
class Record:
    """One dated observation: a category with its student count and fees."""

    date: date
    name: str
    students: int
    fees: int

    @classmethod
    def from_dict(cls, data: dict) -> "Record":
        """Build a Record from its JSON form.

        Raises:
            ValueError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Record must be an object, got {type(data).__name__}")
        try:
            record_date = datetime.strptime(data["date"], "%Y-%m-%d").date()
            name = data["name"]
            students = data["students"]
            fees = data["fees"]
        except KeyError as e:
            raise ValueError(f"Record is missing field {e}")
        except TypeError:
            raise ValueError(f"Record date must be a string, got {data['date']!r}")

        if not isinstance(name, str):
            raise ValueError(f"Record name must be a string, got {name!r}")
        for label, value in (("students", students), ("fees", fees)):
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Record {label} must be a non-negative integer, got {value!r}")

        return cls(date=record_date, name=name, students=students, fees=fees)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "name": self.name,
            "students": self.students,
            "fees": self.fees,
        }


class Status(Enum):
    """Fetch status held by the graph view."""

    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True)
class ViewState:
    """Selected period plus the outcome of its fetch."""

    period: Period
    status: Status = Status.LOADING
    records: tuple[Record, ...] = field(default_factory=tuple)
    message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.status is Status.READY and not self.records
