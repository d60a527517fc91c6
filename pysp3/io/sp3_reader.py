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

"""SP3 precise orbit reader.

The file is consumed line by line. Each line is classified by its leading
tag and handled by :func:`parse_line`, which takes the current
:class:`ParserState` and returns the updated state together with the records
emitted by that line::

    #  ##          header lines                    ignored
    /*             comments                        ignored
    %f %i          floating point/integer bases    ignored
    +              satellite list                  default identifier
    %c             file type / time system         two line block
    *              epoch header                    time, transformation
    P              position and clock              OrbitEpoch, ClockEpoch
    EP             position covariance             CovarianceEpoch
    V              velocity                        VelocityEpoch
    EOF            end of file                     stop

Units in the file are km (positions), dm/s (velocities), microseconds
(clocks) and mm / 1e-7 (EP standard deviations / correlations).
"""

import gzip
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from ..core.constants import (SP3_CLK_NODATA, SP3_CLK_SCALE, SP3_CORR_SCALE,
                              SP3_POS_SCALE, SP3_SDEV_SCALE, SP3_VEL_SCALE)
from ..core.data_structures import (ClockEpoch, CovarianceEpoch, OrbitEpoch,
                                    SatelliteArcs, Sp3Record, TransformContext,
                                    VelocityEpoch)
from ..core.time import TimeSystem, calendar2gps, resolve_time_system
from ..models.corrections import CorrectionProvider
from .columns import Sp3FormatError, to_float, to_int, to_str

logger = logging.getLogger(__name__)

HEADER_TAGS = ('#', '/*', '%f', '%i')


class FaultPolicy(Enum):
    """What happens with the remaining input files after a format error"""
    STOP = 'stop'            # keep what was read, process no further files
    SKIP_FILE = 'skip_file'  # keep what was read, continue with the next file


@dataclass(frozen=True)
class ParserState:
    """
    State of the line parser within one file

    Attributes
    ----------
    identifier : str
        Selected satellite, taken from the satellite list if empty
    time_system : TimeSystem
        Time system declared in the %c lines
    time : float
        Current epoch (GPS seconds)
    satellite : str
        Satellite of the last position/velocity line
    context : TransformContext
        Transformation of the current epoch
    skip_lines : int
        Lines to consume without interpretation
    finished : bool
        EOF line reached
    """
    identifier: str = ""
    time_system: TimeSystem = TimeSystem.GPS
    time: float = 0.0
    satellite: str = ""
    context: TransformContext = field(default_factory=TransformContext)
    skip_lines: int = 0
    finished: bool = False


def _vector3(line: str) -> np.ndarray:
    return np.array([to_float(line, 4, 14), to_float(line, 18, 14), to_float(line, 32, 14)])


def parse_epoch_line(line: str, time_system: TimeSystem) -> float:
    """Epoch header ``*  2020  1  1  0  0  0.00000000`` -> GPS seconds"""
    year = to_int(line, 3, 4)
    month = to_int(line, 8, 2)
    day = to_int(line, 11, 2)
    hour = to_int(line, 14, 2)
    minute = to_int(line, 17, 2)
    second = to_float(line, 20, 11)
    return calendar2gps(time_system, year, month, day, hour, minute, second)


def parse_position_line(line: str, state: ParserState) -> Tuple[str, Tuple[Sp3Record, ...]]:
    """Position and clock of a ``P`` line"""
    sat = to_str(line, 1, 3)
    position = SP3_POS_SCALE * _vector3(line)
    clock = to_float(line, 46, 14)

    records = []
    if np.linalg.norm(position) > 0:
        records.append(Sp3Record(sat, OrbitEpoch(state.time, state.context.transform_position(position))))
    if clock < SP3_CLK_NODATA:
        records.append(Sp3Record(sat, ClockEpoch(state.time, SP3_CLK_SCALE * clock)))
    return sat, tuple(records)


def parse_covariance_line(line: str, state: ParserState) -> Sp3Record:
    """Position covariance of an ``EP`` line"""
    sdev = np.array([to_float(line, 4, 4), to_float(line, 9, 4), to_float(line, 14, 4)])
    xy = to_float(line, 27, 8)
    xz = to_float(line, 36, 8)
    yz = to_float(line, 54, 8)

    covariance = np.diag((SP3_SDEV_SCALE * sdev) ** 2)
    covariance[0, 1] = covariance[1, 0] = SP3_CORR_SCALE * xy * sdev[0] * sdev[1]
    covariance[0, 2] = covariance[2, 0] = SP3_CORR_SCALE * xz * sdev[0] * sdev[2]
    covariance[1, 2] = covariance[2, 1] = SP3_CORR_SCALE * yz * sdev[1] * sdev[2]
    covariance = state.context.transform_covariance(covariance)
    return Sp3Record(state.satellite, CovarianceEpoch(state.time, covariance))


def parse_velocity_line(line: str, state: ParserState) -> Tuple[str, Tuple[Sp3Record, ...]]:
    """Velocity of a ``V`` line"""
    sat = to_str(line, 1, 3)
    velocity = SP3_VEL_SCALE * _vector3(line)
    if not np.linalg.norm(velocity) > 0:
        return sat, ()
    epoch = VelocityEpoch(state.time, state.context.transform_velocity(velocity), state.context.omega)
    return sat, (Sp3Record(sat, epoch),)


def parse_line(state: ParserState, line: str,
               corrections: Optional[CorrectionProvider] = None) -> Tuple[ParserState, Tuple[Sp3Record, ...]]:
    """
    Interpret one line of an SP3 file

    Parameters:
    -----------
    state : ParserState
        State after the previous line
    line : str
        Line to interpret
    corrections : CorrectionProvider, optional
        Evaluated at every epoch header (identity transformation if None)

    Returns:
    --------
    state : ParserState
        Updated state
    records : tuple of Sp3Record
        Epochs emitted by this line

    Raises:
    -------
    Sp3FormatError
        If a field cannot be decoded
    """
    if state.finished:
        return state, ()

    if state.skip_lines:
        return replace(state, skip_lines=state.skip_lines - 1), ()

    if line.startswith(HEADER_TAGS):
        return state, ()

    # satellite list and orbit accuracy lines
    if line.startswith('+'):
        if not state.identifier and to_int(line, 3, 3) > 0:
            return replace(state, identifier=to_str(line, 9, 3)), ()
        return state, ()

    # file type and time system, the second %c line is skipped
    if line.startswith('%c'):
        return replace(state, time_system=resolve_time_system(to_str(line, 9, 3)), skip_lines=1), ()

    if line.startswith('* '):
        time = parse_epoch_line(line, state.time_system)
        context = corrections.context(time) if corrections is not None else TransformContext()
        return replace(state, time=time, context=context), ()

    if line.startswith('P'):
        sat, records = parse_position_line(line, state)
        return replace(state, satellite=sat), records

    if line.startswith('EP'):
        return state, (parse_covariance_line(line, state),)

    if line.startswith('V'):
        sat, records = parse_velocity_line(line, state)
        return replace(state, satellite=sat), records

    if line.startswith('EOF'):
        return replace(state, finished=True), ()

    return state, ()


def open_sp3(path: Union[str, Path]):
    """Open a (possibly gzip compressed) SP3 file for reading text"""
    path = Path(path)
    if path.suffix == '.gz':
        return gzip.open(path, 'rt', encoding='ascii', errors='replace')
    return open(path, 'r', encoding='ascii', errors='replace')


class Sp3Reader:
    """
    Read SP3 files into per-satellite sequences

    Parameters:
    -----------
    corrections : CorrectionProvider, optional
        Frame and center of mass corrections
    identifier : str
        Satellite to select; if empty the first satellite with data in the
        satellite list of the first file is used
    fault_policy : FaultPolicy
        Handling of the remaining files after a file failed to decode
    """

    def __init__(self, corrections: Optional[CorrectionProvider] = None,
                 identifier: str = "", fault_policy: FaultPolicy = FaultPolicy.STOP):
        self.corrections = corrections
        self.identifier = identifier
        self.fault_policy = FaultPolicy(fault_policy)

    def parse(self, lines: Iterable[str], arcs: SatelliteArcs,
              filename: Optional[str] = None) -> ParserState:
        """
        Parse the lines of one file into ``arcs``

        Records of lines before a format error are kept. The identifier
        resolved so far is stored even if the scan is aborted.
        """
        state = ParserState(identifier=self.identifier)
        try:
            for line_number, line in enumerate(lines, 1):
                try:
                    state, records = parse_line(state, line, self.corrections)
                except ValueError as e:
                    raise Sp3FormatError(str(e), filename, line_number, line) from e
                for record in records:
                    arcs.add(record)
                if state.finished:
                    break
        finally:
            self.identifier = state.identifier
            arcs.merge_velocities()
        return state

    def read_file(self, path: Union[str, Path], arcs: Optional[SatelliteArcs] = None) -> SatelliteArcs:
        """Read a single SP3 file, format errors are raised"""
        arcs = SatelliteArcs() if arcs is None else arcs
        with open_sp3(path) as f:
            self.parse(f, arcs, str(path))
        return arcs

    def read_files(self, paths: Iterable[Union[str, Path]],
                   arcs: Optional[SatelliteArcs] = None) -> SatelliteArcs:
        """
        Read SP3 files in the given order

        A file that cannot be read or decoded is abandoned with a warning;
        depending on the fault policy the following files are skipped
        (``stop``) or read (``skip_file``).
        """
        arcs = SatelliteArcs() if arcs is None else arcs
        paths = list(paths)
        for i, path in enumerate(paths):
            logger.info(f"read file <{path}>")
            try:
                self.read_file(path, arcs)
            except (Sp3FormatError, OSError) as e:
                logger.warning(f"{e} continue...")
                if self.fault_policy == FaultPolicy.STOP:
                    if i + 1 < len(paths):
                        logger.warning(f"{len(paths) - i - 1} remaining file(s) not processed")
                    break
        return arcs


def read_sp3(paths: Union[str, Path, List[Union[str, Path]]],
             corrections: Optional[CorrectionProvider] = None,
             identifier: str = "",
             fault_policy: FaultPolicy = FaultPolicy.STOP) -> Tuple[SatelliteArcs, str]:
    """
    Read one or more SP3 files

    Returns:
    --------
    arcs : SatelliteArcs
        Orbit, clock and covariance sequences of all satellites
    identifier : str
        Selected satellite identifier (resolved from the header if empty)
    """
    if isinstance(paths, (str, Path)):
        paths = [paths]
    reader = Sp3Reader(corrections, identifier, fault_policy)
    arcs = reader.read_files(paths)
    return arcs, reader.identifier


__all__ = [
    'FaultPolicy', 'ParserState', 'Sp3Reader', 'parse_line',
    'parse_epoch_line', 'parse_position_line', 'parse_covariance_line',
    'parse_velocity_line', 'open_sp3', 'read_sp3',
]
