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

"""Conversion configuration.

Example ``conversion.yaml``::

    outputfile_orbit: orbit.txt
    outputfile_clock: clock.txt
    outputfile_covariance: covariance.txt
    satellite_identifier: ""          # empty: first satellite, <all>: every satellite
    earth_rotation: era               # null, era or gmst
    gravityfield: default             # default, none, {geocenter: [x, y, z]},
                                      # {tides: table.yaml} or a list of these
    fault_policy: stop                # stop or skip_file
    inputfiles:
      - igs21000.sp3
      - igs21001.sp3
    logging:
      default_level: INFO
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .io.sp3_reader import FaultPolicy
from .models.corrections import CorrectionProvider
from .models.earth_rotation import EARTH_ROTATION_MODELS, EarthRotation
from .models.gravity_field import (ConstantGravityField, DoodsonHarmonicTide,
                                   GravityField, GravityFieldSum,
                                   SphericalHarmonics, default_gravity_field)


class ConfigError(ValueError):
    """Invalid conversion configuration"""


def earth_rotation_from_config(value: Optional[str]) -> Optional[EarthRotation]:
    """Earth rotation model by name, None keeps the terrestrial frame"""
    if value is None or str(value).lower() in ('', 'none'):
        return None
    try:
        return EARTH_ROTATION_MODELS[str(value).lower()]()
    except KeyError:
        raise ConfigError(f"Unknown earth rotation model '{value}', "
                          f"expected one of {sorted(EARTH_ROTATION_MODELS)}") from None


def gravity_field_from_config(value: Any) -> Optional[GravityField]:
    """
    Gravity field for the center of mass correction

    Parameters:
    -----------
    value : str, dict, list or None
        ``default`` (or None): degree 1 ocean tides shipped with the package;
        ``none``: no correction;
        ``{geocenter: [x, y, z]}``: constant offset (m);
        ``{c10: .., c11: .., s11: .., R: .., GM: ..}``: constant coefficients;
        ``{tides: path}``: degree 1 tide table (see DoodsonHarmonicTide);
        a list: sum of the above
    """
    if value is None:
        return default_gravity_field()
    if value is False:
        return None
    if isinstance(value, str):
        if value.lower() == 'default':
            return default_gravity_field()
        if value.lower() == 'none':
            return None
        raise ConfigError(f"Unknown gravity field '{value}'")
    if isinstance(value, list):
        fields = [gravity_field_from_config(item) for item in value]
        return GravityFieldSum([f for f in fields if f is not None])
    if isinstance(value, dict):
        if 'geocenter' in value:
            return ConstantGravityField.from_geocenter(value['geocenter'])
        if 'tides' in value:
            return DoodsonHarmonicTide.from_geocenter_file(value['tides'])
        if {'c10', 'c11', 's11'} & set(value):
            harmonics = SphericalHarmonics.zeros(1)
            harmonics.cnm[0, 0] = float(value.get('c00', 0.0))
            harmonics.cnm[1, 0] = float(value.get('c10', 0.0))
            harmonics.cnm[1, 1] = float(value.get('c11', 0.0))
            harmonics.snm[1, 1] = float(value.get('s11', 0.0))
            harmonics.R = float(value.get('R', harmonics.R))
            harmonics.GM = float(value.get('GM', harmonics.GM))
            return ConstantGravityField(harmonics)
    raise ConfigError(f"Invalid gravity field configuration: {value!r}")


@dataclass
class ConversionConfig:
    """Options of an SP3 conversion"""
    inputfiles: List[str] = field(default_factory=list)
    outputfile_orbit: Optional[str] = None
    outputfile_clock: Optional[str] = None
    outputfile_covariance: Optional[str] = None
    satellite_identifier: str = ""
    earth_rotation: Optional[str] = None
    gravityfield: Any = 'default'
    fault_policy: Union[str, FaultPolicy] = FaultPolicy.STOP
    logging: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.inputfiles, (str, Path)):
            self.inputfiles = [self.inputfiles]
        self.inputfiles = [str(p) for p in self.inputfiles]
        self.satellite_identifier = self.satellite_identifier or ""
        try:
            self.fault_policy = FaultPolicy(self.fault_policy)
        except ValueError:
            raise ConfigError(f"Unknown fault policy '{self.fault_policy}', "
                              f"expected one of {[p.value for p in FaultPolicy]}") from None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConversionConfig':
        """Create configuration from dictionary, unknown keys are rejected"""
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)

    def validate(self) -> None:
        """Check that the configuration describes a runnable conversion"""
        if not self.inputfiles:
            raise ConfigError("No input files given")
        if not (self.outputfile_orbit or self.outputfile_clock or self.outputfile_covariance):
            raise ConfigError("No output file given")

    def correction_provider(self) -> CorrectionProvider:
        """Build the physical models once for the whole conversion"""
        return CorrectionProvider(
            gravity_field=gravity_field_from_config(self.gravityfield),
            earth_rotation=earth_rotation_from_config(self.earth_rotation),
        )


def load_config(filepath: Union[str, Path]) -> ConversionConfig:
    """
    Load a conversion configuration from a YAML or JSON file

    Raises:
        ConfigError: If the content is not a valid configuration
        FileNotFoundError: If the specified file doesn't exist
    """
    filepath = Path(filepath)
    with open(filepath) as f:
        if filepath.suffix == '.json':
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {filepath} must contain a mapping")
    return ConversionConfig.from_dict(data)


__all__ = [
    'ConfigError', 'ConversionConfig', 'load_config',
    'earth_rotation_from_config', 'gravity_field_from_config',
]
