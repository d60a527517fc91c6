import gzip
import os
import tempfile
import unittest
from pathlib import Path

import numpy as np

from pysp3.core.data_structures import (ClockEpoch, CovarianceEpoch,
                                        OrbitEpoch, VelocityEpoch)
from pysp3.core.time import date2time, time2mjd
from pysp3.io.instrument_writer import (CLOCK_COLUMNS, COVARIANCE_COLUMNS,
                                        ORBIT_COLUMNS, InstrumentWriter,
                                        append_base_name, orbit_dataframe,
                                        read_instrument)


class TestAppendBaseName(unittest.TestCase):

    def test_append_before_extension(self):
        self.assertEqual(append_base_name('out/orbit.txt', '.G01'), Path('out/orbit.G01.txt'))

    def test_gzip_extension(self):
        self.assertEqual(append_base_name('orbit.txt.gz', '.G01'), Path('orbit.G01.txt.gz'))

    def test_no_extension(self):
        self.assertEqual(append_base_name('orbit', '.L09'), Path('orbit.L09'))


class TestInstrumentWriter(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.t0 = date2time(2020, 1, 1)
        self.writer = InstrumentWriter()

    def test_orbit_table(self):
        epochs = [
            OrbitEpoch(self.t0 + 60.0, np.array([7001e3, 2.0, 3.0])),
            OrbitEpoch(self.t0, np.array([7000e3, 1.0, 2.0]), np.array([1.0, 7500.0, -0.5])),
        ]
        path = self.writer.write(os.path.join(self.tmp.name, 'orbit.txt'), epochs)
        with open(path) as f:
            self.assertEqual(f.readline().strip(), '# pysp3 orbit')

        df = read_instrument(path)
        self.assertEqual(list(df.columns), ORBIT_COLUMNS)
        self.assertEqual(len(df), 2)
        # sorted by time
        self.assertEqual(df['time_gps'].iloc[0], self.t0)
        self.assertAlmostEqual(df['mjd'].iloc[0], time2mjd(self.t0))
        np.testing.assert_allclose(df[['x', 'y', 'z']].iloc[0], [7000e3, 1.0, 2.0])
        np.testing.assert_allclose(df[['vx', 'vy', 'vz']].iloc[0], [1.0, 7500.0, -0.5])
        self.assertTrue(df[['vx', 'vy', 'vz']].iloc[1].isna().all())

    def test_clock_table(self):
        epochs = [ClockEpoch(self.t0, 1.25e-5), ClockEpoch(self.t0 + 30.0, -3.5e-9)]
        path = self.writer.write(os.path.join(self.tmp.name, 'clock.txt'), epochs)
        df = read_instrument(path)
        self.assertEqual(list(df.columns), CLOCK_COLUMNS)
        np.testing.assert_allclose(df['clock'], [1.25e-5, -3.5e-9])

    def test_covariance_table(self):
        cov = np.array([[1e-4, 2e-5, 3e-5], [2e-5, 4e-4, 5e-5], [3e-5, 5e-5, 9e-4]])
        path = self.writer.write(os.path.join(self.tmp.name, 'cov.txt'),
                                 [CovarianceEpoch(self.t0, cov)])
        df = read_instrument(path)
        self.assertEqual(list(df.columns), COVARIANCE_COLUMNS)
        np.testing.assert_allclose(df.iloc[0][['xx', 'yy', 'zz', 'xy', 'xz', 'yz']],
                                   [1e-4, 4e-4, 9e-4, 2e-5, 3e-5, 5e-5])

    def test_precision(self):
        position = np.array([6378136.123456789, -1234567.987654321, 0.000123456789])
        path = self.writer.write(os.path.join(self.tmp.name, 'orbit.txt'),
                                 [OrbitEpoch(self.t0 + 0.125, position)])
        df = read_instrument(path)
        np.testing.assert_allclose(df[['x', 'y', 'z']].iloc[0], position, rtol=0, atol=1e-8)
        self.assertEqual(df['time_gps'].iloc[0], self.t0 + 0.125)

    def test_gzip_output(self):
        path = self.writer.write(os.path.join(self.tmp.name, 'clock.txt.gz'),
                                 [ClockEpoch(self.t0, 1e-6)])
        with gzip.open(path, 'rt') as f:
            self.assertEqual(f.readline().strip(), '# pysp3 clock')
        self.assertEqual(len(read_instrument(path)), 1)

    def test_empty_sequence(self):
        with self.assertRaises(ValueError):
            self.writer.write(os.path.join(self.tmp.name, 'orbit.txt'), [])

    def test_unsupported_epoch(self):
        with self.assertRaises(TypeError):
            self.writer.to_dataframe([VelocityEpoch(0.0, np.zeros(3), np.zeros(3))])

    def test_missing_directory(self):
        with self.assertRaises(OSError):
            self.writer.write(os.path.join(self.tmp.name, 'missing', 'orbit.txt'),
                              [ClockEpoch(self.t0, 1e-6)])

    def test_orbit_dataframe_without_epochs(self):
        self.assertEqual(list(orbit_dataframe([]).columns), ORBIT_COLUMNS)


if __name__ == '__main__':
    unittest.main()
