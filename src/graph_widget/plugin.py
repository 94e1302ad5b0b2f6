"""Plugin lifecycle: activation seeding, widget container and script assets."""

from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from . import __version__
from .exceptions import OptionStoreError
from .models import Record
from .options import OptionStore

OPTION_NAME = "graph_widget_data"
WIDGET_ID = "dashboard_graph_widget"
WIDGET_TITLE = "Graph Widget"
CONTAINER_ID = "dashboard-widget-container"
SCRIPT_HANDLE = "graph-dashboard-script"
DASHBOARD_HOOK = "index.php"

# Sample data written on activation, kept in insertion order.
SEED_DATA = [
    {"date": "2023-06-12", "name": "php", "students": 200, "fees": 2000},
    {"date": "2023-06-14", "name": "java", "students": 200, "fees": 4000},
    {"date": "2023-06-15", "name": "react", "students": 500, "fees": 6000},
    {"date": "2023-06-16", "name": "python", "students": 150, "fees": 3000},
    {"date": "2023-06-17", "name": "javascript", "students": 300, "fees": 5000},
    {"date": "2023-06-18", "name": "c++", "students": 250, "fees": 4500},
    {"date": "2023-06-19", "name": "ruby", "students": 120, "fees": 2200},
    {"date": "2023-06-20", "name": "html", "students": 180, "fees": 3200},
    {"date": "2023-06-21", "name": "css", "students": 90, "fees": 1800},
    {"date": "2023-06-22", "name": "sql", "students": 220, "fees": 4200},
    {"date": "2023-06-23", "name": "flutter", "students": 350, "fees": 5500},
    {"date": "2023-06-24", "name": "swift", "students": 280, "fees": 4800},
    {"date": "2023-06-25", "name": "kotlin", "students": 190, "fees": 3400},
    {"date": "2023-06-26", "name": "typescript", "students": 270, "fees": 4600},
    {"date": "2023-06-27", "name": "scala", "students": 110, "fees": 2400},
    {"date": "2023-06-28", "name": "go", "students": 130, "fees": 2600},
    {"date": "2023-06-29", "name": "rust", "students": 80, "fees": 1600},
    {"date": "2023-08-03", "name": "php", "students": 80, "fees": 1600},
    {"date": "2023-08-04", "name": "react", "students": 420, "fees": 2800},
    {"date": "2023-08-08", "name": "python", "students": 240, "fees": 4200},
    {"date": "2023-08-06", "name": "javascript", "students": 390, "fees": 2200},
    {"date": "2023-08-08", "name": "c++", "students": 280, "fees": 4500},
    {"date": "2023-08-08", "name": "html", "students": 170, "fees": 3000},
    {"date": "2023-08-09", "name": "css", "students": 110, "fees": 2000},
    {"date": "2023-08-10", "name": "sql", "students": 320, "fees": 5200},
    {"date": "2023-08-11", "name": "flutter", "students": 420, "fees": 6000},
    {"date": "2023-08-12", "name": "swift", "students": 320, "fees": 4800},
    {"date": "2023-08-13", "name": "kotlin", "students": 210, "fees": 3600},
    {"date": "2023-08-14", "name": "typescript", "students": 310, "fees": 2200},
    {"date": "2023-08-23", "name": "scala", "students": 130, "fees": 2400},
    {"date": "2023-08-22", "name": "go", "students": 140, "fees": 2600},
    {"date": "2023-08-20", "name": "java", "students": 190, "fees": 3800},
]


@dataclass(frozen=True)
class ScriptAsset:
    """A front-end script to include on the dashboard page."""

    handle: str
    src: str
    version: str
    dependencies: list[str] = field(default_factory=list)
    in_footer: bool = True

    def to_html(self) -> str:
        return f'<script id="{self.handle}-js" src="{self.src}?ver={self.version}"></script>'


class GraphDashboardWidget:
    """Dashboard widget plugin bound to an option store."""

    def __init__(self, store: OptionStore, assets_url: str = "/static/graph-widget"):
        """Initialize the plugin.

        Args:
            store: Option storage that holds the seeded records
            assets_url: URL prefix of the bundled front-end build
        """
        self.store = store
        self.assets_url = assets_url.rstrip("/")

    def activate(self) -> int:
        """Write the sample records into option storage.

        Overwrites any previous value.

        Returns:
            Number of records written
        """
        self.store.update_option(OPTION_NAME, [dict(item) for item in SEED_DATA])
        logger.info(f"[activate] - seed_data_written - option={OPTION_NAME} count={len(SEED_DATA)}")
        return len(SEED_DATA)

    def load_records(self) -> tuple[Record, ...]:
        """Read the seeded records, activating first if nothing is stored.

        Returns:
            Immutable tuple of records in seed order

        Raises:
            OptionStoreError: If the stored value cannot be read or parsed
        """
        if not self.store.has_option(OPTION_NAME):
            logger.info(f"[load_records] - option_missing - option={OPTION_NAME} activating")
            self.activate()

        raw = self.store.get_option(OPTION_NAME)
        if not isinstance(raw, list):
            raise OptionStoreError(f"Option {OPTION_NAME} must hold a list of records")
        try:
            return tuple(Record.from_dict(item) for item in raw)
        except ValueError as e:
            raise OptionStoreError(f"Option {OPTION_NAME} holds a malformed record: {e}")

    def render_widget(self) -> str:
        """HTML container the widget view is mounted into."""
        return f'<div id="{CONTAINER_ID}"></div>'

    def enqueue_scripts(self, hook: str) -> Optional[ScriptAsset]:
        """Script asset for the given admin page, or None off the dashboard."""
        if hook != DASHBOARD_HOOK:
            return None
        return ScriptAsset(
            handle=SCRIPT_HANDLE,
            src=f"{self.assets_url}/index.js",
            version=__version__,
            dependencies=["wp-element", "wp-components", "wp-i18n", "wp-api-fetch"],
        )

    def dashboard_page(self, hook: str = DASHBOARD_HOOK) -> str:
        """Build the admin page holding the widget box.

        Args:
            hook: Admin page being loaded; the widget only appears on the dashboard

        Returns:
            Full HTML document
        """
        widget = ""
        if hook == DASHBOARD_HOOK:
            widget = (
                f'<div class="postbox" id="{WIDGET_ID}">'
                f'<h2 class="hndle">{WIDGET_TITLE}</h2>'
                f'<div class="inside">{self.render_widget()}</div>'
                "</div>"
            )
        asset = self.enqueue_scripts(hook)
        script = asset.to_html() if asset else ""
        return (
            "<!DOCTYPE html>"
            f"<html><head><title>Dashboard</title></head>"
            f'<body><div id="dashboard-widgets">{widget}</div>{script}</body></html>'
        )
