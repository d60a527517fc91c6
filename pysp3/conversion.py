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

"""SP3 to orbit conversion: read all input files, then write the selected satellites"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import ConversionConfig
from .core.constants import ALL_SATELLITES
from .core.data_structures import SatelliteArcs
from .core.stats import print_statistics
from .io.instrument_writer import InstrumentWriter, append_base_name
from .io.sp3_reader import Sp3Reader

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of :func:`convert`"""
    arcs: SatelliteArcs
    identifier: str
    files: List[Path] = field(default_factory=list)


def _outputs(arcs: SatelliteArcs, config: ConversionConfig):
    return [
        ('orbit', config.outputfile_orbit, arcs.orbits),
        ('clock', config.outputfile_clock, arcs.clocks),
        ('covariance', config.outputfile_covariance, arcs.covariances),
    ]


def write_results(arcs: SatelliteArcs, identifier: str, config: ConversionConfig,
                  writer: Optional[InstrumentWriter] = None) -> List[Path]:
    """
    Write the sequences of the selected satellite(s)

    Parameters:
    -----------
    arcs : SatelliteArcs
        Sequences of all satellites
    identifier : str
        Selected satellite or ``<all>``; for ``<all>`` the identifier is
        appended to the base name of every output file
    config : ConversionConfig
        Output file names, artifacts without file name are not written
    writer : InstrumentWriter, optional
        Output writer

    Returns:
    --------
    list of Path
        Written files
    """
    writer = InstrumentWriter() if writer is None else writer
    written = []

    if identifier == ALL_SATELLITES:
        for kind, path, sequences in _outputs(arcs, config):
            if not path:
                continue
            for sat in sorted(sequences):
                if not sequences[sat]:
                    continue
                filename = append_base_name(path, '.' + sat)
                logger.info(f"write {kind} data to file <{filename}>")
                written.append(writer.write(filename, sequences[sat]))
        return written

    if not arcs.orbit(identifier):
        logger.warning(f"No data found for identifier='{identifier}'")

    for kind, path, sequences in _outputs(arcs, config):
        if not path:
            continue
        epochs = sequences.get(identifier, [])
        if not epochs:
            if kind != 'orbit':
                logger.warning(f"No {kind} data found for identifier='{identifier}'")
            continue
        logger.info(f"write {kind} data to file <{path}>")
        written.append(writer.write(path, epochs))
        if kind == 'orbit':
            print_statistics(epochs)
    return written


def convert(config: ConversionConfig, writer: Optional[InstrumentWriter] = None) -> ConversionResult:
    """
    Read the SP3 input files of ``config`` and write the selected satellites

    Format errors in an input file are logged and end the reading according
    to the fault policy; errors while writing are raised.

    Raises:
    -------
    ConfigError
        If the configuration is incomplete or invalid
    OSError
        If an output file cannot be written
    """
    config.validate()
    reader = Sp3Reader(config.correction_provider(), config.satellite_identifier, config.fault_policy)
    arcs = reader.read_files(config.inputfiles)
    files = write_results(arcs, reader.identifier, config, writer)
    return ConversionResult(arcs=arcs, identifier=reader.identifier, files=files)


__all__ = ['ConversionResult', 'convert', 'write_results']
