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

"""Orbit, clock and covariance tables.

Each table is a whitespace separated text file with a ``#`` comment line
naming the content, followed by a line of column names and one line per
epoch sorted by time::

    # pysp3 orbit
    time_gps mjd x y z vx vy vz
    1261872000 58849 -6356271.658 ...
"""

import gzip
import logging
from pathlib import Path
from typing import Sequence, Union

import numpy as np
import pandas as pd

from ..core.data_structures import ClockEpoch, CovarianceEpoch, OrbitEpoch
from ..core.time import time2mjd

logger = logging.getLogger(__name__)

ORBIT_COLUMNS = ['time_gps', 'mjd', 'x', 'y', 'z', 'vx', 'vy', 'vz']
CLOCK_COLUMNS = ['time_gps', 'mjd', 'clock']
COVARIANCE_COLUMNS = ['time_gps', 'mjd', 'xx', 'yy', 'zz', 'xy', 'xz', 'yz']


def append_base_name(path: Union[str, Path], text: str) -> Path:
    """
    Append ``text`` to the base name of a file, before its extension

    ``orbit.txt`` + ``.G01`` -> ``orbit.G01.txt``,
    ``orbit.txt.gz`` + ``.G01`` -> ``orbit.G01.txt.gz``
    """
    path = Path(path)
    suffixes = ''
    if path.suffix == '.gz':
        suffixes = path.suffix
        path = path.with_suffix('')
    suffixes = path.suffix + suffixes
    return path.with_name(path.stem + text + suffixes)


def orbit_dataframe(epochs: Sequence[OrbitEpoch]) -> pd.DataFrame:
    """Orbit epochs as table, missing velocities are NaN"""
    epochs = sorted(epochs, key=lambda e: e.time)
    rows = []
    for epoch in epochs:
        velocity = epoch.velocity if epoch.velocity is not None else np.full(3, np.nan)
        rows.append([epoch.time, time2mjd(epoch.time), *epoch.position, *velocity])
    return pd.DataFrame(rows, columns=ORBIT_COLUMNS)


def clock_dataframe(epochs: Sequence[ClockEpoch]) -> pd.DataFrame:
    """Clock epochs as table"""
    epochs = sorted(epochs, key=lambda e: e.time)
    rows = [[epoch.time, time2mjd(epoch.time), epoch.value] for epoch in epochs]
    return pd.DataFrame(rows, columns=CLOCK_COLUMNS)


def covariance_dataframe(epochs: Sequence[CovarianceEpoch]) -> pd.DataFrame:
    """Covariance epochs as table of the 6 independent elements"""
    epochs = sorted(epochs, key=lambda e: e.time)
    rows = []
    for epoch in epochs:
        c = epoch.covariance
        rows.append([epoch.time, time2mjd(epoch.time),
                     c[0, 0], c[1, 1], c[2, 2], c[0, 1], c[0, 2], c[1, 2]])
    return pd.DataFrame(rows, columns=COVARIANCE_COLUMNS)


class InstrumentWriter:
    """Write epoch sequences as text tables"""

    def __init__(self, float_format: str = '%.15g'):
        self.float_format = float_format

    @staticmethod
    def to_dataframe(epochs: Sequence) -> tuple:
        """Return (kind, DataFrame) for a homogeneous epoch sequence"""
        if not epochs:
            raise ValueError("Cannot write an empty epoch sequence")
        first = epochs[0]
        if isinstance(first, OrbitEpoch):
            return 'orbit', orbit_dataframe(epochs)
        if isinstance(first, ClockEpoch):
            return 'clock', clock_dataframe(epochs)
        if isinstance(first, CovarianceEpoch):
            return 'covariance', covariance_dataframe(epochs)
        raise TypeError(f"Unsupported epoch type: {type(first).__name__}")

    def write(self, path: Union[str, Path], epochs: Sequence) -> Path:
        """
        Write an epoch sequence

        Parameters:
        -----------
        path : str or Path
            Output file, gzip compressed if the name ends with ``.gz``
        epochs : sequence
            OrbitEpoch, ClockEpoch or CovarianceEpoch instances

        Raises:
        -------
        OSError
            If the file cannot be written
        """
        path = Path(path)
        kind, df = self.to_dataframe(epochs)
        opener = gzip.open if path.suffix == '.gz' else open
        with opener(path, 'wt') as f:
            f.write(f"# pysp3 {kind}\n")
            df.to_csv(f, sep=' ', index=False, float_format=self.float_format,
                      na_rep='nan', lineterminator='\n')
        logger.debug(f"{len(df)} {kind} epochs written to <{path}>")
        return path


def read_instrument(path: Union[str, Path]) -> pd.DataFrame:
    """Read a table written by :class:`InstrumentWriter`"""
    return pd.read_csv(path, sep=r'\s+', comment='#')


__all__ = [
    'InstrumentWriter', 'append_base_name', 'read_instrument',
    'orbit_dataframe', 'clock_dataframe', 'covariance_dataframe',
    'ORBIT_COLUMNS', 'CLOCK_COLUMNS', 'COVARIANCE_COLUMNS',
]
