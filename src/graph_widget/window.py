"""Trailing-window selection over the seeded records."""

from datetime import date, timedelta
from enum import Enum
from typing import Callable, Iterable, Optional

from dateutil.relativedelta import relativedelta
from loguru import logger

from .models import Period, Record

WINDOW_DAYS = {
    Period.LAST_7_DAYS: 7,
    Period.LAST_15_DAYS: 15,
}


class ReferenceMode(Enum):
    """Date the trailing window is measured back from."""

    TODAY = "today"
    LATEST = "latest"

    @classmethod
    def parse(cls, value: str) -> "ReferenceMode":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid reference mode: {value!r}. Use 'today' or 'latest'.")


def cutoff(period: Period, reference: date) -> date:
    """Earliest date included in the window for a period.

    Args:
        period: Selected trailing window
        reference: Date the window ends at

    Returns:
        Window cutoff date (inclusive)
    """
    if period is Period.LAST_1_MONTH:
        # relativedelta clamps to the last day of a shorter month
        return reference - relativedelta(months=1)
    return reference - timedelta(days=WINDOW_DAYS[period])


class DataWindowService:
    """Returns the subset of a fixed record set that falls in a period."""

    def __init__(
        self,
        records: Iterable[Record],
        reference: ReferenceMode = ReferenceMode.TODAY,
        today: Callable[[], date] = date.today,
    ):
        """Initialize the service.

        Args:
            records: Seed records, kept in the given order
            reference: Whether windows end at today or at the latest record date
            today: Clock used for ReferenceMode.TODAY
        """
        self.records = tuple(records)
        self.reference = reference
        self._today = today

    def reference_date(self) -> date:
        if self.reference is ReferenceMode.LATEST and self.records:
            return max(record.date for record in self.records)
        return self._today()

    def get_window(self, period: Period, reference: Optional[date] = None) -> list[Record]:
        """Get all records dated on or after the period's cutoff.

        Args:
            period: Selected trailing window
            reference: Override for the window end date

        Returns:
            Matching records in seed order
        """
        if not isinstance(period, Period):
            raise TypeError(f"period must be a Period, got {period!r}")

        end = reference if reference is not None else self.reference_date()
        start = cutoff(period, end)
        window = [record for record in self.records if record.date >= start]
        logger.debug(
            f"[get_window] - window_selected - period={period.value} cutoff={start} "
            f"matched={len(window)} total={len(self.records)}"
        )
        return window


class LocalWindowSource:
    """Async source that serves windows from an in-process service."""

    def __init__(self, service: DataWindowService):
        self.service = service

    async def get_window(self, period: Period) -> list[Record]:
        return self.service.get_window(period)
