import unittest
from datetime import datetime, timezone

from pysp3.core.constants import DELTA_TAI_GPS
from pysp3.core.time import (TimeSystem, calendar2gps, date2time,
                             get_leap_seconds, gps2utc, resolve_time_system,
                             tai2gps, time2datetime, time2mjd, time_converter,
                             utc2gps)


class TestCalendar(unittest.TestCase):

    def test_gps_epoch(self):
        self.assertEqual(date2time(1980, 1, 6), 0.0)
        self.assertEqual(date2time(1980, 1, 13), 604800.0)

    def test_fractional_seconds(self):
        t = date2time(2020, 1, 1, 12, 30, 15.25)
        self.assertAlmostEqual(t - date2time(2020, 1, 1), 12 * 3600 + 30 * 60 + 15.25)

    def test_mjd(self):
        self.assertEqual(time2mjd(0.0), 44244.0)
        self.assertAlmostEqual(time2mjd(date2time(2000, 1, 1, 12)), 51544.5)

    def test_datetime(self):
        self.assertEqual(time2datetime(date2time(2020, 5, 17, 6, 7, 8.0)),
                         datetime(2020, 5, 17, 6, 7, 8, tzinfo=timezone.utc))

    def test_invalid_calendar_raises(self):
        with self.assertRaises(ValueError):
            date2time(2020, 13, 1)


class TestLeapSeconds(unittest.TestCase):

    def test_leap_seconds_table(self):
        self.assertEqual(get_leap_seconds(datetime(1980, 1, 6)), 0)
        self.assertEqual(get_leap_seconds(datetime(2000, 1, 1)), 13)
        self.assertEqual(get_leap_seconds(datetime(2016, 6, 1)), 17)
        self.assertEqual(get_leap_seconds(datetime(2016, 12, 31, 23, 59, 59)), 17)
        self.assertEqual(get_leap_seconds(datetime(2017, 1, 1)), 18)
        self.assertEqual(get_leap_seconds(datetime(2024, 1, 1)), 18)

    def test_before_gps_epoch_raises(self):
        with self.assertRaises(ValueError):
            get_leap_seconds(datetime(1979, 12, 31))

    def test_utc_gps_round_trip(self):
        for t in [date2time(1999, 5, 1), date2time(2016, 12, 31, 23, 59, 0.0), date2time(2023, 3, 3)]:
            self.assertAlmostEqual(gps2utc(utc2gps(t)), t)


class TestTimeSystemResolver(unittest.TestCase):

    def test_utc_differs_by_leap_seconds(self):
        gps = calendar2gps(TimeSystem.GPS, 2020, 1, 1, 0, 0, 0.0)
        utc = calendar2gps(TimeSystem.UTC, 2020, 1, 1, 0, 0, 0.0)
        self.assertEqual(utc - gps, 18.0)

        gps = calendar2gps(TimeSystem.GPS, 2016, 6, 1, 0, 0, 0.0)
        utc = calendar2gps(TimeSystem.UTC, 2016, 6, 1, 0, 0, 0.0)
        self.assertEqual(utc - gps, 17.0)

    def test_tai_differs_by_constant(self):
        gps = calendar2gps(TimeSystem.GPS, 2020, 1, 1, 0, 0, 0.0)
        tai = calendar2gps(TimeSystem.TAI, 2020, 1, 1, 0, 0, 0.0)
        self.assertEqual(tai - gps, -DELTA_TAI_GPS)
        self.assertEqual(DELTA_TAI_GPS, 19.0)
        self.assertEqual(tai2gps(100.0), 81.0)

    def test_gps_is_identity(self):
        self.assertEqual(time_converter(TimeSystem.GPS)(123.5), 123.5)

    def test_resolve_known_tags(self):
        self.assertEqual(resolve_time_system("GPS"), TimeSystem.GPS)
        self.assertEqual(resolve_time_system("UTC"), TimeSystem.UTC)
        self.assertEqual(resolve_time_system("TAI"), TimeSystem.TAI)

    def test_unknown_tag_defaults_to_gps(self):
        with self.assertLogs('pysp3.core.time', level='WARNING') as logs:
            self.assertEqual(resolve_time_system("GLO"), TimeSystem.GPS)
        self.assertIn("Unknown time system (GLO)", logs.output[0])


if __name__ == '__main__':
    unittest.main()
