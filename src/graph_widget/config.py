"""Environment-based settings."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .window import ReferenceMode


def load_env() -> None:
    """Load .env from the project directory, falling back to a search from cwd."""
    here = Path(__file__).resolve().parent
    for candidate in [here / ".env", here.parent / ".env", here.parent.parent / ".env"]:
        if candidate.exists():
            load_dotenv(candidate)
            return
    load_dotenv()


def _get_number(name: str, default: str, kind: type):
    raw = os.getenv(name, default)
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"{name} must be a {kind.__name__}, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the client, the server and the CLI."""

    base_url: str = "http://127.0.0.1:8000"
    options_path: str = "graph_widget_options.json"
    reference: ReferenceMode = ReferenceMode.TODAY
    timeout: float = 30.0
    host: str = "127.0.0.1"
    port: int = 8000
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from GRAPH_WIDGET_* environment variables.

        Raises:
            ValueError: If a variable holds an invalid value
        """
        try:
            reference = ReferenceMode.parse(os.getenv("GRAPH_WIDGET_REFERENCE", "today"))
        except ValueError as e:
            raise ValueError(f"GRAPH_WIDGET_REFERENCE: {e}")

        return cls(
            base_url=os.getenv("GRAPH_WIDGET_BASE_URL", cls.base_url),
            options_path=os.getenv("GRAPH_WIDGET_OPTIONS_PATH", cls.options_path),
            reference=reference,
            timeout=_get_number("GRAPH_WIDGET_TIMEOUT", "30", float),
            host=os.getenv("GRAPH_WIDGET_HOST", cls.host),
            port=_get_number("GRAPH_WIDGET_PORT", "8000", int),
            log_file=os.getenv("GRAPH_WIDGET_LOG_FILE") or None,
        )
