import logging
import unittest

from strex.logging_utils import ConsoleFormatter, setup_logging


class TestLoggingUtils(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self.saved_handlers = root.handlers[:]
        self.saved_level = root.level

    def tearDown(self):
        root = logging.getLogger()
        root.handlers[:] = self.saved_handlers
        root.setLevel(self.saved_level)

    def test_default_level_is_warning(self):
        setup_logging("1.2.3")
        root = logging.getLogger()
        self.assertEqual(root.level, logging.WARNING)
        self.assertEqual(len(root.handlers), 1)

    def test_debug_level(self):
        setup_logging("1.2.3", debug=True)
        self.assertEqual(logging.getLogger().level, logging.DEBUG)

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging("1.2.3")
        setup_logging("1.2.3")
        self.assertEqual(len(logging.getLogger().handlers), 1)

    def test_format(self):
        formatter = ConsoleFormatter("1.2.3")
        record = logging.LogRecord("strex.engine", logging.WARNING, __file__, 1, "gave up", None, None)
        record.created = 0.25
        line = formatter.format(record)
        self.assertEqual(line, "1970-01-01T00:00:00.250000Z | strex 1.2.3 | WARNING | strex.engine | gave up")


if __name__ == "__main__":
    unittest.main()
