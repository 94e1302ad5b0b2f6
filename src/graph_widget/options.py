"""Key/value option storage persisted as a single JSON file."""

import json
from pathlib import Path
from typing import Any, Union

from loguru import logger

from .exceptions import OptionStoreError


class OptionStore:
    """Generic option storage, the counterpart of a CMS options table.

    Values are stored as JSON under string keys. Every write rewrites the
    whole file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise OptionStoreError(f"Failed to read options from {self.path}: {e}")
        except ValueError as e:
            raise OptionStoreError(f"Options file {self.path} is not valid JSON: {e}")
        if not isinstance(data, dict):
            raise OptionStoreError(f"Options file {self.path} must contain a JSON object")
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise OptionStoreError(f"Failed to write options to {self.path}: {e}")

    def get_option(self, name: str, default: Any = None) -> Any:
        return self._read_all().get(name, default)

    def has_option(self, name: str) -> bool:
        return name in self._read_all()

    def update_option(self, name: str, value: Any) -> None:
        """Create or overwrite an option."""
        data = self._read_all()
        data[name] = value
        self._write_all(data)
        logger.debug(f"[update_option] - option_saved - name={name} path={self.path}")
