import io
import logging
import sys
import unittest

from colorsudoku.utils.logger import PACKAGE_LOGGER, configure_logging, get_logger


class LoggerSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        configure_logging(logging.INFO, stream=sys.stderr)

    def test_repeated_setup_keeps_one_handler(self) -> None:
        configure_logging(logging.INFO)
        configure_logging("debug")
        package = logging.getLogger(PACKAGE_LOGGER)
        named = [h for h in package.handlers if h.get_name() == "colorsudoku-stream"]
        self.assertEqual(len(named), 1)
        self.assertEqual(package.level, logging.DEBUG)

    def test_module_loggers_write_through_package_handler(self) -> None:
        buffer = io.StringIO()
        configure_logging("WARNING", stream=buffer)
        logger = get_logger("colorsudoku.engine.generator")
        logger.info("hidden")
        logger.warning("carving stopped early")
        text = buffer.getvalue()
        self.assertNotIn("hidden", text)
        self.assertIn("WARNING | colorsudoku.engine.generator | carving stopped early", text)

    def test_root_logger_is_left_alone(self) -> None:
        root_handlers = list(logging.getLogger().handlers)
        configure_logging(logging.ERROR)
        self.assertEqual(logging.getLogger().handlers, root_handlers)

    def test_unknown_level_name_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            configure_logging("chatty")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
