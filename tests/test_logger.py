import logging
import os
import tempfile
import unittest

from pysp3.logger import (ROOT_LOGGER, ColoredFormatter, LoggerConfig,
                          setup_logger, setup_logger_from_config)


class TestLogger(unittest.TestCase):

    def tearDown(self):
        for name in [ROOT_LOGGER, 'pysp3.io.sp3_reader']:
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            logger.setLevel(logging.NOTSET)

    def test_setup_logger(self):
        logger = setup_logger(level='warning')
        self.assertEqual(logger.name, ROOT_LOGGER)
        self.assertEqual(logger.level, logging.WARNING)
        self.assertEqual(len(logger.handlers), 1)

    def test_handlers_are_replaced(self):
        setup_logger()
        logger = setup_logger()
        self.assertEqual(len(logger.handlers), 1)

    def test_unknown_level(self):
        with self.assertRaises(ValueError):
            setup_logger(level='TRACE')

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, 'sp3.log')
            logger = setup_logger(level='DEBUG', log_file=log_file, console=False)
            logging.getLogger('pysp3.io.sp3_reader').debug('read file <a.sp3>')
            self.tearDown()
            with open(log_file) as f:
                content = f.read()
        self.assertIn('pysp3.io.sp3_reader - DEBUG - read file <a.sp3>', content)
        self.assertEqual(logger.handlers, [])

    def test_module_levels(self):
        setup_logger_from_config({'default_level': 'INFO', 'console': False,
                                  'module_levels': {'pysp3.io.sp3_reader': 'ERROR'}})
        self.assertEqual(logging.getLogger(ROOT_LOGGER).level, logging.INFO)
        self.assertEqual(logging.getLogger('pysp3.io.sp3_reader').level, logging.ERROR)

    def test_logger_config(self):
        config = LoggerConfig()
        config.configure_from_dict({'default_level': 'DEBUG', 'console': False})
        logger = config.setup_all_loggers()
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(logger.handlers, [])

    def test_colored_formatter_keeps_record(self):
        record = logging.LogRecord('pysp3', logging.WARNING, __file__, 1, 'message', None, None)
        text = ColoredFormatter('%(levelname)s %(message)s').format(record)
        self.assertIn('\033[33mWARNING\033[0m', text)
        self.assertEqual(record.levelname, 'WARNING')


if __name__ == '__main__':
    unittest.main()
