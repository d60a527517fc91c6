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

"""Command line interface: sp3-to-orbit"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import ConfigError, ConversionConfig, load_config
from .conversion import convert
from .io.sp3_reader import FaultPolicy
from .logger import setup_logger, setup_logger_from_config
from .models.earth_rotation import EARTH_ROTATION_MODELS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sp3-to-orbit',
        description='Read orbits from SP3 format and write orbit, clock and covariance tables')
    parser.add_argument('inputfiles', nargs='*', help='orbits in SP3 format (.gz accepted)')
    parser.add_argument('--config', type=str, help='YAML/JSON configuration file')
    parser.add_argument('--orbit', type=str, help='output orbit file')
    parser.add_argument('--clock', type=str, help='output clock file')
    parser.add_argument('--covariance', type=str, help='output 3x3 epoch covariance file')
    parser.add_argument('--satellite', type=str,
                        help='e.g. L09 for GRACE A, empty: take first satellite, '
                             '<all>: identifier is appended to each file')
    parser.add_argument('--earth-rotation', choices=sorted(EARTH_ROTATION_MODELS),
                        help='rotate from TRF to CRF with this model')
    parser.add_argument('--no-cm2ce', action='store_true',
                        help='do not apply the center of mass correction')
    parser.add_argument('--fault-policy', choices=[p.value for p in FaultPolicy],
                        help='after a file failed to decode: stop or skip to the next file')
    parser.add_argument('--log-level', type=str.upper, default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='log level (default INFO)')
    parser.add_argument('--log-file', type=str, default=None, help='additional log file')
    return parser


def config_from_args(args: argparse.Namespace) -> ConversionConfig:
    """Configuration file (if any) overridden by command line options"""
    config = load_config(args.config) if args.config else ConversionConfig()
    if args.inputfiles:
        config.inputfiles = list(args.inputfiles)
    if args.orbit:
        config.outputfile_orbit = args.orbit
    if args.clock:
        config.outputfile_clock = args.clock
    if args.covariance:
        config.outputfile_covariance = args.covariance
    if args.satellite is not None:
        config.satellite_identifier = args.satellite
    if args.earth_rotation:
        config.earth_rotation = args.earth_rotation
    if args.no_cm2ce:
        config.gravityfield = 'none'
    if args.fault_policy:
        config.fault_policy = FaultPolicy(args.fault_policy)
    if args.log_level:
        config.logging['default_level'] = args.log_level
    if args.log_file:
        config.logging['log_file'] = args.log_file
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level or 'INFO', log_file=args.log_file)

    try:
        config = config_from_args(args)
        if config.logging:
            setup_logger_from_config(config.logging)
        result = convert(config)
    except (ConfigError, OSError) as e:
        # OSError: unreadable config file or unwritable output file
        logger.error(f"Configuration error: {e}")
        return 2

    logger.info(f"{len(result.files)} file(s) written")
    return 0


if __name__ == '__main__':
    sys.exit(main())
