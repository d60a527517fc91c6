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

"""Physical models used to correct SP3 orbits"""

from .earth_rotation import (
    EARTH_ROTATION_MODELS,
    EarthRotation,
    EraEarthRotation,
    GmstEarthRotation,
    earth_rotation_angle,
    gmst,
)
from .corrections import CorrectionProvider
from .gravity_field import (
    ConstantGravityField,
    DoodsonHarmonicTide,
    GravityField,
    GravityFieldSum,
    SphericalHarmonics,
    TideConstituent,
    default_degree1_tide,
    default_gravity_field,
    doodson2multipliers,
    doodson_arguments,
)

__all__ = [
    'CorrectionProvider',
    'EarthRotation', 'EraEarthRotation', 'GmstEarthRotation',
    'EARTH_ROTATION_MODELS', 'earth_rotation_angle', 'gmst',
    'SphericalHarmonics', 'GravityField', 'ConstantGravityField',
    'DoodsonHarmonicTide', 'GravityFieldSum', 'TideConstituent',
    'default_degree1_tide', 'default_gravity_field',
    'doodson2multipliers', 'doodson_arguments',
]
