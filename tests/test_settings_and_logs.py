from __future__ import annotations

import io
import logging
import tempfile
import unittest
from pathlib import Path

from playground import logs
from playground.settings import DEFAULT_PROCESS_TIMEOUT, DEFAULT_URL, Settings, default_root


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        self.assertEqual(settings.root, default_root())
        self.assertEqual(settings.url, DEFAULT_URL)
        self.assertEqual(settings.process_timeout, DEFAULT_PROCESS_TIMEOUT)
        self.assertFalse(settings.offline)
        self.assertEqual(settings.log_level, "INFO")

    def test_environment_overrides(self) -> None:
        settings = Settings.from_env(
            {
                "PLAYGROUND_ROOT": "/srv/playground",
                "PLAYGROUND_URL": "http://example.test/",
                "PLAYGROUND_PROCESS_TIMEOUT": "0.5",
                "PLAYGROUND_OFFLINE": "yes",
                "PLAYGROUND_LOG_LEVEL": "debug",
            }
        )
        self.assertEqual(settings.root, Path("/srv/playground"))
        self.assertEqual(settings.url, "http://example.test/")
        self.assertEqual(settings.process_timeout, 0.5)
        self.assertTrue(settings.offline)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_offline_flag_is_false_for_other_values(self) -> None:
        self.assertFalse(Settings.from_env({"PLAYGROUND_OFFLINE": "0"}).offline)

    def test_invalid_timeout_raises(self) -> None:
        with self.assertRaises(ValueError):
            Settings.from_env({"PLAYGROUND_PROCESS_TIMEOUT": "soon"})
        with self.assertRaises(ValueError):
            Settings.from_env({"PLAYGROUND_PROCESS_TIMEOUT": "-1"})

    def test_ensure_root_creates_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            settings = Settings(root=Path(tmp) / "a" / "b")
            self.assertTrue(settings.ensure_root().is_dir())


class LoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        logging.getLogger(logs.ROOT_LOGGER).handlers.clear()

    def test_levels_are_split_between_streams(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        logs.configure_logging(logging.DEBUG, stdout=out, stderr=err)
        logger = logs.get_logger("unit")
        logger.debug("quiet detail")
        logger.info("hello")
        logger.error("broken")
        self.assertIn("DEBUG:playground.unit:quiet detail", out.getvalue())
        self.assertIn("INFO:playground.unit:hello", out.getvalue())
        self.assertNotIn("broken", out.getvalue())
        self.assertIn("ERROR:playground.unit:broken", err.getvalue())
        self.assertNotIn("hello", err.getvalue())

    def test_configure_is_idempotent(self) -> None:
        logs.configure_logging()
        logger = logs.configure_logging()
        self.assertEqual(len(logger.handlers), 2)
        self.assertFalse(logger.propagate)

    def test_max_level_filter(self) -> None:
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "m", None, None)
        self.assertFalse(logs.MaxLevelFilter(max_level=logging.INFO).filter(record))
        self.assertTrue(logs.MaxLevelFilter(max_level=logging.WARNING).filter(record))
        with self.assertRaises(TypeError):
            logs.MaxLevelFilter(logging.INFO)  # type: ignore[misc]

    def test_lazy_message_skipped_below_level(self) -> None:
        out = io.StringIO()
        logs.configure_logging(logging.INFO, stdout=out, stderr=io.StringIO())
        message = logs.LazyMessage(lambda: "expensive")
        logs.get_logger("lazy").debug("%s", message)
        self.assertEqual(message.calls, 0)
        logs.get_logger("lazy").info("%s", message)
        self.assertEqual(message.calls, 1)
        self.assertIn("expensive", out.getvalue())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
