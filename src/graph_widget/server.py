"""Graph Widget server - FastMCP server with the widget's HTTP data endpoint."""

from typing import Optional

from fastmcp import FastMCP
from loguru import logger
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse

from .client import DATA_PATH
from .config import Settings, load_env
from .exceptions import ServiceError
from .logging_setup import setup_logging
from .markup import mount_widget
from .models import Period, Record
from .options import OptionStore
from .plugin import CONTAINER_ID, GraphDashboardWidget
from .view import GraphView, WindowSource
from .window import DataWindowService

DASHBOARD_PATH = "/graph-widget/v1/dashboard"

load_env()

mcp = FastMCP(
    "Graph Widget",
    instructions="Student and fee figures per subject over the last 7 days, 15 days or month.",
)

# Initialized on first use
_plugin: Optional[GraphDashboardWidget] = None
_service: Optional[DataWindowService] = None


def _get_plugin() -> GraphDashboardWidget:
    global _plugin
    if _plugin is None:
        settings = Settings.from_env()
        _plugin = GraphDashboardWidget(OptionStore(settings.options_path))
    return _plugin


def _get_service() -> DataWindowService:
    """Get or create the data window service from the seeded option."""
    global _service
    if _service is None:
        settings = Settings.from_env()
        records = _get_plugin().load_records()
        _service = DataWindowService(records, reference=settings.reference)
        logger.info(
            f"[_get_service] - service_ready - records={len(records)} reference={settings.reference.value}"
        )
    return _service


class _ServiceSource:
    """Window source that loads the service on first fetch, so storage errors
    reach the view as ServiceError."""

    async def get_window(self, period: Period) -> list[Record]:
        return _get_service().get_window(period)


def _error_response(code: str, message: str, status: int) -> JSONResponse:
    return JSONResponse({"code": code, "message": message, "data": {"status": status}}, status_code=status)


def _format_window(period: Period, records: list[Record]) -> str:
    """Format a window of records for display."""
    if not records:
        return f"No data for {period.label.lower()}."

    lines = [f"{period.label} ({len(records)} records):", ""]
    for record in records:
        lines.append(
            f"  {record.date.isoformat()}  {record.name:<12} students={record.students:<5} fees={record.fees}"
        )
    lines.append("")
    lines.append(
        f"Total: students={sum(r.students for r in records)} fees={sum(r.fees for r in records)}"
    )
    return "\n".join(lines)


@mcp.custom_route(DATA_PATH, methods=["GET"])
async def data_endpoint(request: Request) -> JSONResponse:
    """Return the records in the requested period as a JSON array."""
    raw_period = request.query_params.get("period")
    if raw_period is None:
        return _error_response("rest_missing_callback_param", "Missing parameter(s): period", 400)
    try:
        period = Period.parse(raw_period)
    except ValueError as e:
        return _error_response("rest_invalid_param", f"Invalid parameter(s): period. {e}", 400)

    try:
        records = _get_service().get_window(period)
    except ServiceError as e:
        logger.error(f"[data_endpoint] - service_error - period={period.value} error={e}")
        return _error_response("graph_widget_data_error", "Error loading data", 500)

    return JSONResponse([record.to_dict() for record in records])


@mcp.custom_route(DASHBOARD_PATH, methods=["GET"])
async def dashboard_endpoint(request: Request) -> HTMLResponse:
    """Render the dashboard page with the widget mounted for the requested period."""
    try:
        period = Period.parse(request.query_params.get("period", Period.LAST_7_DAYS.value))
    except ValueError as e:
        return HTMLResponse(f"<p>{e}</p>", status_code=400)

    page = await render_dashboard(_get_plugin(), _ServiceSource(), period)
    return HTMLResponse(page)


async def render_dashboard(
    plugin: GraphDashboardWidget, source: WindowSource, period: Period
) -> str:
    """Build the dashboard page and mount the settled widget view into it."""
    view = GraphView(source, period)
    view.mount()
    await view.wait()
    page, mounted = mount_widget(plugin.dashboard_page(), view.render().to_html(), CONTAINER_ID)
    if not mounted:
        logger.debug(f"[render_dashboard] - container_missing - container={CONTAINER_ID}")
    return page


@mcp.tool()
async def get_graph_data(period: str = "7days") -> str:
    """Get student and fee figures for a trailing time window.

    Args:
        period: Window to report on. Options: "7days", "15days", "1month"

    Returns:
        One line per record with date, subject, students and fees, plus totals.
    """
    try:
        selected = Period.parse(period)
    except ValueError as e:
        return str(e)

    try:
        records = _get_service().get_window(selected)
    except ServiceError as e:
        return f"Data error: {e}"
    return _format_window(selected, records)


@mcp.tool()
async def list_periods() -> str:
    """List the time windows the widget supports.

    Returns:
        Period values with their labels.
    """
    return "\n".join(f"  {p.value:<8} {p.label}" for p in Period)


def main():
    """Run the MCP server over stdio."""
    setup_logging(log_file=Settings.from_env().log_file)
    mcp.run()


if __name__ == "__main__":
    main()
