# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Time systems of SP3 files and conversion to GPS time.

All epochs are represented as GPS seconds, i.e. seconds since
1980-01-06 00:00:00 GPS as a plain float. SP3 files may declare their
epochs in GPS, UTC or TAI; the resolver maps calendar fields given in the
declared system onto this single continuous scale.
"""

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable

from .constants import DAY_SECONDS, DELTA_TAI_GPS, GPST0, MJD_GPST0

logger = logging.getLogger(__name__)

GPS_EPOCH_0 = datetime(*GPST0, tzinfo=timezone.utc)

# Leap seconds table (most recent first)
# GPS time is ahead of UTC by these leap seconds
LEAPSECONDS_TABLE = [
    datetime(2017, 1, 1, 0, 0, 0, tzinfo=timezone.utc),  # 18 seconds
    datetime(2015, 7, 1, 0, 0, 0, tzinfo=timezone.utc),  # 17 seconds
    datetime(2012, 7, 1, 0, 0, 0, tzinfo=timezone.utc),  # 16 seconds
    datetime(2009, 1, 1, 0, 0, 0, tzinfo=timezone.utc),  # 15 seconds
    datetime(2006, 1, 1, 0, 0, 0, tzinfo=timezone.utc),  # 14 seconds
    datetime(1999, 1, 1, 0, 0, 0, tzinfo=timezone.utc),  # 13 seconds
    datetime(1997, 7, 1, 0, 0, 0, tzinfo=timezone.utc),  # 12 seconds
    datetime(1996, 1, 1, 0, 0, 0, tzinfo=timezone.utc),  # 11 seconds
    datetime(1994, 7, 1, 0, 0, 0, tzinfo=timezone.utc),  # 10 seconds
    datetime(1993, 7, 1, 0, 0, 0, tzinfo=timezone.utc),  # 9 seconds
    datetime(1992, 7, 1, 0, 0, 0, tzinfo=timezone.utc),  # 8 seconds
    datetime(1991, 1, 1, 0, 0, 0, tzinfo=timezone.utc),  # 7 seconds
    datetime(1990, 1, 1, 0, 0, 0, tzinfo=timezone.utc),  # 6 seconds
    datetime(1988, 1, 1, 0, 0, 0, tzinfo=timezone.utc),  # 5 seconds
    datetime(1985, 7, 1, 0, 0, 0, tzinfo=timezone.utc),  # 4 seconds
    datetime(1983, 7, 1, 0, 0, 0, tzinfo=timezone.utc),  # 3 seconds
    datetime(1982, 7, 1, 0, 0, 0, tzinfo=timezone.utc),  # 2 seconds
    datetime(1981, 7, 1, 0, 0, 0, tzinfo=timezone.utc),  # 1 second
    GPS_EPOCH_0  # 0 seconds
]


class TimeSystem(Enum):
    """Time systems that can be declared in the %c lines of an SP3 file"""
    GPS = "GPS"
    UTC = "UTC"
    TAI = "TAI"


def ensure_utc_timezone(dt: datetime) -> datetime:
    """Ensure datetime has UTC timezone"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    elif dt.tzinfo != timezone.utc:
        return dt.astimezone(timezone.utc)
    return dt


def get_leap_seconds(time_utc: datetime) -> int:
    """Get leap seconds at given UTC time.

    Parameters
    ----------
    time_utc : datetime.datetime
        UTC time

    Returns
    -------
    int
        Number of leap seconds to add to UTC to get GPS time
    """
    time_utc = ensure_utc_timezone(time_utc)

    if time_utc < GPS_EPOCH_0:
        raise ValueError(f"Time must be after GPS epoch {GPS_EPOCH_0}")

    for i, leap_time in enumerate(LEAPSECONDS_TABLE):
        if time_utc >= leap_time:
            return len(LEAPSECONDS_TABLE) - 1 - i

    return 0


def date2time(year: int, month: int, day: int,
              hour: int = 0, minute: int = 0, second: float = 0.0) -> float:
    """
    Convert calendar fields to seconds since the GPS reference epoch

    The fields are counted without leap seconds, so the result is GPS
    seconds only if the fields are given in GPS time.

    Parameters:
    -----------
    year, month, day, hour, minute : int
        Calendar date and time of day
    second : float
        Seconds of minute (may be fractional)

    Returns:
    --------
    float
        Seconds since 1980-01-06 00:00:00
    """
    delta = datetime(year, month, day, hour, minute) - datetime(*GPST0)
    return delta.days * DAY_SECONDS + delta.seconds + float(second)


def time2datetime(t: float) -> datetime:
    """Convert GPS seconds to a (GPS time scale) datetime"""
    return GPS_EPOCH_0 + timedelta(seconds=t)


def time2mjd(t: float) -> float:
    """Convert GPS seconds to Modified Julian Date in the GPS time scale"""
    return MJD_GPST0 + t / DAY_SECONDS


def utc2gps(t_utc: float) -> float:
    """Convert UTC seconds (counted from the GPS epoch) to GPS seconds"""
    return t_utc + get_leap_seconds(time2datetime(t_utc))


def gps2utc(t_gps: float) -> float:
    """Convert GPS seconds to UTC seconds (counted from the GPS epoch)"""
    leap = get_leap_seconds(time2datetime(t_gps))
    # evaluate again at the UTC instant, the step happens in UTC
    return t_gps - get_leap_seconds(time2datetime(t_gps - leap))


def tai2gps(t_tai: float) -> float:
    """Convert TAI seconds (counted from the GPS epoch) to GPS seconds"""
    return t_tai - DELTA_TAI_GPS


def resolve_time_system(tag: str) -> TimeSystem:
    """
    Resolve the 3-character time system tag of an SP3 %c line

    Unknown tags are reported and GPS time is assumed.
    """
    try:
        return TimeSystem(tag.strip().upper())
    except ValueError:
        logger.warning(f"Unknown time system ({tag}), assuming GPS time")
        return TimeSystem.GPS


_TO_GPS = {
    TimeSystem.GPS: lambda t: t,
    TimeSystem.UTC: utc2gps,
    TimeSystem.TAI: tai2gps,
}


def time_converter(time_system: TimeSystem) -> Callable[[float], float]:
    """Return the function mapping seconds in ``time_system`` to GPS seconds"""
    return _TO_GPS[time_system]


def calendar2gps(time_system: TimeSystem, year: int, month: int, day: int,
                 hour: int, minute: int, second: float) -> float:
    """Convert calendar fields given in ``time_system`` to GPS seconds"""
    return time_converter(time_system)(date2time(year, month, day, hour, minute, second))


__all__ = [
    'TimeSystem', 'LEAPSECONDS_TABLE', 'GPS_EPOCH_0',
    'get_leap_seconds', 'date2time', 'time2datetime', 'time2mjd',
    'utc2gps', 'gps2utc', 'tai2gps',
    'resolve_time_system', 'time_converter', 'calendar2gps',
]
