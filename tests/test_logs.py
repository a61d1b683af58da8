"""Tests for file logging setup."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from notepeek.logs import configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger("notepeek")
        self._saved = (list(self.logger.handlers), self.logger.level, self.logger.propagate)

    def tearDown(self) -> None:
        for handler in self.logger.handlers:
            if handler not in self._saved[0]:
                handler.close()
        self.logger.handlers, self.logger.level, self.logger.propagate = self._saved

    def test_records_go_to_requested_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "run.log"

            result = configure_logging(log_path, verbose=True)
            logging.getLogger("notepeek.controller").debug("hello from test")
            for handler in self.logger.handlers:
                handler.flush()

            self.assertEqual(result, log_path)
            self.assertIn("hello from test", log_path.read_text(encoding="utf-8"))
            self.assertEqual(self.logger.level, logging.DEBUG)
            self.assertFalse(self.logger.propagate)

    def test_default_level_is_warning(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            configure_logging(Path(tmp) / "run.log")

            self.assertEqual(self.logger.level, logging.WARNING)

    def test_unwritable_location_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")

            self.assertIsNone(configure_logging(blocker / "sub" / "run.log"))


if __name__ == "__main__":
    unittest.main()
