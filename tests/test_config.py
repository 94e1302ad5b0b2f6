from __future__ import annotations

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from loguru import logger

from graph_widget.config import Settings
from graph_widget.logging_setup import parse_level, setup_logging
from graph_widget.window import ReferenceMode


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.base_url, "http://127.0.0.1:8000")
        self.assertIs(settings.reference, ReferenceMode.TODAY)
        self.assertEqual(settings.port, 8000)
        self.assertIsNone(settings.log_file)

    def test_reads_environment(self) -> None:
        env = {
            "GRAPH_WIDGET_BASE_URL": "http://example.test",
            "GRAPH_WIDGET_REFERENCE": "Latest",
            "GRAPH_WIDGET_TIMEOUT": "2.5",
            "GRAPH_WIDGET_PORT": "9001",
            "GRAPH_WIDGET_LOG_FILE": "logs/widget.log",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.base_url, "http://example.test")
        self.assertIs(settings.reference, ReferenceMode.LATEST)
        self.assertEqual(settings.timeout, 2.5)
        self.assertEqual(settings.port, 9001)
        self.assertEqual(settings.log_file, "logs/widget.log")

    def test_invalid_values_name_the_variable(self) -> None:
        for env, name in (
            ({"GRAPH_WIDGET_REFERENCE": "yesterday"}, "GRAPH_WIDGET_REFERENCE"),
            ({"GRAPH_WIDGET_PORT": "http"}, "GRAPH_WIDGET_PORT"),
        ):
            with mock.patch.dict(os.environ, env, clear=True):
                with self.assertRaises(ValueError) as ctx:
                    Settings.from_env()
            self.assertIn(name, str(ctx.exception))


class LogLevelTests(unittest.TestCase):
    def test_parse_level(self) -> None:
        self.assertEqual(parse_level("debug"), "DEBUG")
        self.assertEqual(parse_level(30), "WARNING")
        self.assertEqual(parse_level("verbose"), "INFO")
        self.assertEqual(parse_level(None), "INFO")

    def test_log_file_sink_receives_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "graph_widget.log"
            setup_logging("WARNING", log_file=str(log_path))
            try:
                logger.debug("[test] - file_sink_check")
            finally:
                logger.remove()
                logger.add(sys.stderr)
            self.assertIn("file_sink_check", log_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
