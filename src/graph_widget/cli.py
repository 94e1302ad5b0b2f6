"""Graph Widget CLI - Command-line interface for the graph dashboard widget.

Usage:
    python -m graph_widget.cli <command> [options]

Commands:
    activate                     Write the sample records into option storage
    periods                      List supported periods
    data [period]                Fetch a period's records from the API
    show [period]                Render the widget for a period from the API
    dashboard [period]           Print the dashboard page with the widget mounted
    serve [--host H] [--port P]  Run the HTTP/MCP server
"""

import asyncio
import sys

from loguru import logger

from .config import Settings, load_env
from .exceptions import ServiceError
from .logging_setup import setup_logging
from .models import Period


def _get_settings() -> Settings:
    try:
        return Settings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _get_client():
    from .client import GraphWidgetClient

    settings = _get_settings()
    return GraphWidgetClient(settings.base_url, timeout=settings.timeout)


def _get_plugin():
    from .options import OptionStore
    from .plugin import GraphDashboardWidget

    return GraphDashboardWidget(OptionStore(_get_settings().options_path))


def _parse_period(args) -> Period:
    value = args[0] if args else Period.LAST_7_DAYS.value
    try:
        return Period.parse(value)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


async def cmd_activate(args):
    try:
        count = _get_plugin().activate()
    except ServiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Stored {count} sample records.")


async def cmd_periods(args):
    for period in Period:
        print(f"  {period.value:<8} {period.label}")


async def cmd_data(args):
    period = _parse_period(args)
    client = _get_client()
    try:
        records = await client.get_window(period)
        if not records:
            print(f"No data for {period.label.lower()}.")
            return
        print(f"{period.label} ({len(records)} records):")
        for record in records:
            print(f"  {record.date.isoformat()}  {record.name:<12} students={record.students:<5} fees={record.fees}")
    except ServiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        await client.close()


async def cmd_show(args):
    from .view import GraphView

    period = _parse_period(args)
    client = _get_client()
    try:
        view = GraphView(client, period)
        view.mount()
        await view.wait()
        print(period.label)
        print()
        print(view.render().to_text())
    finally:
        await client.close()


async def cmd_dashboard(args):
    from .server import render_dashboard
    from .window import DataWindowService, LocalWindowSource

    period = _parse_period(args)
    settings = _get_settings()
    plugin = _get_plugin()
    try:
        service = DataWindowService(plugin.load_records(), reference=settings.reference)
    except ServiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(await render_dashboard(plugin, LocalWindowSource(service), period))


def cmd_serve(args):
    from .server import mcp

    settings = _get_settings()
    host = settings.host
    port = settings.port
    i = 0
    while i < len(args):
        if args[i] == "--host" and i + 1 < len(args):
            host = args[i + 1]
            i += 2
        elif args[i] == "--port" and i + 1 < len(args):
            try:
                port = int(args[i + 1])
            except ValueError:
                print(f"Error: Invalid port '{args[i + 1]}'", file=sys.stderr)
                sys.exit(1)
            i += 2
        else:
            print(f"Error: Unknown option '{args[i]}'", file=sys.stderr)
            sys.exit(1)

    logger.info(f"[cmd_serve] - starting - host={host} port={port}")
    mcp.run(transport="http", host=host, port=port)


COMMANDS = {
    "activate": cmd_activate,
    "periods": cmd_periods,
    "data": cmd_data,
    "show": cmd_show,
    "dashboard": cmd_dashboard,
}

USAGE = """\
Usage: python -m graph_widget.cli <command> [options]

Commands:
  activate                     Write the sample records into option storage
  periods                      List supported periods
  data [period]                Fetch a period's records from the API (default: 7days)
  show [period]                Render the widget for a period from the API
  dashboard [period]           Print the dashboard page with the widget mounted
  serve [--host H] [--port P]  Run the HTTP/MCP server

Periods: 7days, 15days, 1month"""


def main():
    load_env()
    setup_logging(log_file=_get_settings().log_file)

    args = sys.argv[1:]
    if not args or args[0] in ("-h", "--help", "help"):
        print(USAGE)
        sys.exit(0)

    command = args[0]
    if command == "serve":
        cmd_serve(args[1:])
        return
    if command not in COMMANDS:
        print(f"Error: Unknown command '{command}'", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    asyncio.run(COMMANDS[command](args[1:]))


if __name__ == "__main__":
    main()
