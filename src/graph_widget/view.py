"""Graph view: period selection, fetch state and chart rendering."""

import asyncio
import html
import json
from dataclasses import dataclass
from typing import Optional, Protocol

from loguru import logger

from .exceptions import ServiceError
from .models import Period, Record, Status, ViewState

FETCH_ERROR_MESSAGE = "Error fetching data"
LOADING_MESSAGE = "Loading..."
EMPTY_MESSAGE = "No data available. Please check again later"


class WindowSource(Protocol):
    async def get_window(self, period: Period) -> list[Record]: ...


@dataclass(frozen=True)
class Series:
    """One line of the chart."""

    data_key: str
    name: str
    stroke: str


@dataclass(frozen=True)
class ChartSpec:
    """Line chart description: category axis, two series, tooltip and legend."""

    data: list[dict]
    x_key: str = "name"
    series: tuple[Series, ...] = (
        Series(data_key="students", name="Students", stroke="red"),
        Series(data_key="fees", name="Fees", stroke="green"),
    )
    tooltip: bool = True
    legend: bool = True

    @classmethod
    def from_records(cls, records: tuple[Record, ...]) -> "ChartSpec":
        return cls(data=[record.to_dict() for record in records])

    def to_dict(self) -> dict:
        return {
            "type": "line",
            "xAxis": {"dataKey": self.x_key},
            "series": [
                {"dataKey": s.data_key, "name": s.name, "stroke": s.stroke}
                for s in self.series
            ],
            "tooltip": self.tooltip,
            "legend": self.legend,
            "data": self.data,
        }


@dataclass(frozen=True)
class Rendered:
    """What the widget shows for a view state."""

    kind: str  # "loading", "error", "empty" or "chart"
    message: Optional[str] = None
    chart: Optional[ChartSpec] = None

    def to_html(self) -> str:
        if self.kind == "chart" and self.chart is not None:
            props = html.escape(json.dumps(self.chart.to_dict()), quote=True)
            return f'<div class="row"><div class="graph-line-chart" data-chart="{props}"></div></div>'
        if self.kind == "error":
            return f'<div class="row"><div class="text-danger">Error: {html.escape(self.message or "")}</div></div>'
        return f'<div class="row"><div>{html.escape(self.message or "")}</div></div>'

    def to_text(self) -> str:
        if self.kind == "error":
            return f"Error: {self.message}"
        if self.kind != "chart" or self.chart is None:
            return self.message or ""

        lines = [f"{'Name':<12} {'Students':>8} {'Fees':>8}", "-" * 30]
        for row in self.chart.data:
            lines.append(f"{row['name']:<12} {row['students']:>8} {row['fees']:>8}")
        return "\n".join(lines)


def render_state(state: ViewState) -> Rendered:
    """Map a view state to what the widget displays."""
    if state.status is Status.LOADING:
        return Rendered(kind="loading", message=LOADING_MESSAGE)
    if state.status is Status.ERROR:
        return Rendered(kind="error", message=state.message)
    if state.is_empty:
        return Rendered(kind="empty", message=EMPTY_MESSAGE)
    return Rendered(kind="chart", chart=ChartSpec.from_records(state.records))


class GraphView:
    """Holds the selected period and the outcome of its most recent fetch.

    Every fetch is tagged with a generation number. Only the fetch started by
    the latest period selection may write the state; results from earlier
    fetches are dropped when they arrive.
    """

    def __init__(self, source: WindowSource, period: Period = Period.LAST_7_DAYS):
        self.source = source
        self._state = ViewState(period=period)
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def period(self) -> Period:
        return self._state.period

    def mount(self) -> asyncio.Task:
        """Start loading the initial period. Must be called inside a running loop."""
        return self._start_fetch(self._state.period)

    def select_period(self, period: Period) -> Optional[asyncio.Task]:
        """Switch to another period and fetch its window.

        Returns:
            The fetch task, or None if the period is already selected
        """
        if period is self._state.period:
            return None
        return self._start_fetch(period)

    async def wait(self) -> ViewState:
        """Wait for the latest fetch to settle and return the state."""
        if self._task is not None:
            await self._task
        return self._state

    def render(self) -> Rendered:
        return render_state(self._state)

    def _start_fetch(self, period: Period) -> asyncio.Task:
        self._generation += 1
        self._state = ViewState(period=period, status=Status.LOADING)
        self._task = asyncio.ensure_future(self._fetch(self._generation, period))
        return self._task

    async def _fetch(self, generation: int, period: Period) -> None:
        logger.debug(f"[_fetch] - start - period={period.value} generation={generation}")
        try:
            records = await self.source.get_window(period)
        except ServiceError as e:
            if generation != self._generation:
                logger.debug(f"[_fetch] - stale_error_dropped - period={period.value} error={e}")
                return
            logger.error(f"[_fetch] - fetch_failed - period={period.value} error={e}")
            self._state = ViewState(period=period, status=Status.ERROR, message=FETCH_ERROR_MESSAGE)
            return

        if generation != self._generation:
            logger.debug(f"[_fetch] - stale_response_dropped - period={period.value} generation={generation}")
            return
        self._state = ViewState(period=period, status=Status.READY, records=tuple(records))
        logger.debug(f"[_fetch] - done - period={period.value} records={len(records)}")
