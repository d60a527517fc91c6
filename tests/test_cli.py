import logging
import os
import tempfile
import unittest

from pysp3.cli import build_parser, config_from_args, main
from pysp3.io.sp3_reader import FaultPolicy
from pysp3.logger import ROOT_LOGGER

from tests.sp3_samples import orbit_lines, write_sp3


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.input = write_sp3(self.path('input.sp3'), orbit_lines())

    def tearDown(self):
        logger = logging.getLogger(ROOT_LOGGER)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)

    def path(self, name):
        return os.path.join(self.tmp.name, name)

    def test_options(self):
        args = build_parser().parse_args([
            'a.sp3', 'b.sp3', '--orbit', 'orbit.txt', '--satellite', '<all>',
            '--earth-rotation', 'gmst', '--no-cm2ce', '--fault-policy', 'skip_file',
            '--log-level', 'debug'])
        config = config_from_args(args)
        self.assertEqual(config.inputfiles, ['a.sp3', 'b.sp3'])
        self.assertEqual(config.outputfile_orbit, 'orbit.txt')
        self.assertEqual(config.satellite_identifier, '<all>')
        self.assertEqual(config.earth_rotation, 'gmst')
        self.assertEqual(config.gravityfield, 'none')
        self.assertEqual(config.fault_policy, FaultPolicy.SKIP_FILE)
        self.assertEqual(config.logging['default_level'], 'DEBUG')

    def test_config_file_with_override(self):
        config_path = self.path('conversion.yaml')
        with open(config_path, 'w') as f:
            f.write(f"inputfiles: [{self.input}]\n"
                    f"outputfile_orbit: {self.path('orbit.txt')}\n"
                    "satellite_identifier: L01\n")
        config = config_from_args(build_parser().parse_args(
            ['--config', config_path, '--satellite', 'L02']))
        self.assertEqual(config.inputfiles, [self.input])
        self.assertEqual(config.satellite_identifier, 'L02')

    def test_convert(self):
        status = main([self.input, '--orbit', self.path('orbit.txt'),
                       '--clock', self.path('clock.txt'), '--log-level', 'WARNING'])
        self.assertEqual(status, 0)
        self.assertTrue(os.path.exists(self.path('orbit.txt')))
        self.assertTrue(os.path.exists(self.path('clock.txt')))

    def test_log_file(self):
        log_file = self.path('sp3.log')
        status = main([self.input, '--orbit', self.path('orbit.txt'), '--log-file', log_file])
        self.assertEqual(status, 0)
        self.tearDown()
        with open(log_file) as f:
            content = f.read()
        self.assertIn('read file', content)

    def test_configuration_error(self):
        self.assertEqual(main([self.input, '--log-level', 'CRITICAL']), 2)

    def test_unwritable_output(self):
        status = main([self.input, '--orbit', self.path('missing/orbit.txt'), '--no-cm2ce',
                       '--log-level', 'CRITICAL'])
        self.assertEqual(status, 2)

    def test_missing_config_file(self):
        self.assertEqual(main(['--config', self.path('nope.yaml'), '--log-level', 'CRITICAL']), 2)

    def test_invalid_choice(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args(['--earth-rotation', 'iau2006'])


if __name__ == '__main__':
    unittest.main()
