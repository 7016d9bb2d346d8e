import unittest

from loguru import logger

import almanac.event_processing  # noqa: F401  registers the custom levels on import
from almanac.logger import EVENTS, VISUAL, configure_logging


class TestConfigureLogging(unittest.TestCase):
    def test_configure_after_import(self) -> None:
        self.addCleanup(logger.remove)
        configure_logging(level="DEBUG", colorize=False)
        self.assertEqual(logger.level(VISUAL).no, 8)
        self.assertEqual(logger.level(EVENTS).no, 9)

    def test_configure_twice(self) -> None:
        self.addCleanup(logger.remove)
        configure_logging(colorize=False)
        configure_logging(colorize=False)
        logger.log(EVENTS, "still usable")


if __name__ == "__main__":
    unittest.main(verbosity=2)
