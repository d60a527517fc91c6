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

"""Earth rotation models (celestial <-> terrestrial reference frame)"""

from abc import ABC, abstractmethod

import numpy as np
from scipy.spatial.transform import Rotation

from ..core.constants import DAY_SECONDS, MJD_J2000, OMGE
from ..core.time import gps2utc, time2mjd

# Earth Rotation Angle (IERS 2010, eq. 5.15)
ERA0 = 0.7790572732640
ERA_RATE = 1.00273781191135448
OMGE_ERA = 2.0 * np.pi * ERA_RATE / DAY_SECONDS  # rad/s


def earth_rotation_angle(t: float) -> float:
    """
    Earth Rotation Angle with UT1 approximated by UTC

    Parameters:
    -----------
    t : float
        GPS seconds

    Returns:
    --------
    float
        ERA (rad) in [0, 2*pi)
    """
    d = time2mjd(gps2utc(t)) - MJD_J2000
    return float(np.mod(2.0 * np.pi * (ERA0 + ERA_RATE * d), 2.0 * np.pi))


def gmst(t: float) -> float:
    """
    Greenwich Mean Sidereal Time (IAU 1982) with UT1 approximated by UTC

    Parameters:
    -----------
    t : float
        GPS seconds

    Returns:
    --------
    float
        GMST (rad) in [0, 2*pi)
    """
    T = (time2mjd(gps2utc(t)) - MJD_J2000) / 36525.0
    seconds = (67310.54841 + (876600.0 * 3600.0 + 8640184.812866) * T
               + 0.093104 * T**2 - 6.2e-6 * T**3)
    return float(np.mod(seconds / DAY_SECONDS * 2.0 * np.pi, 2.0 * np.pi))


class EarthRotation(ABC):
    """Rotation between the celestial (CRF) and terrestrial (TRF) frame"""

    @abstractmethod
    def rotation_matrix(self, t: float) -> np.ndarray:
        """Rotation matrix CRF -> TRF (3x3) at GPS seconds ``t``"""
        pass

    @abstractmethod
    def rotation_axis(self, t: float) -> np.ndarray:
        """Earth rotation vector (rad/s) in the CRF at GPS seconds ``t``"""
        pass


class _SiderealRotation(EarthRotation):
    """Rotation about the z-axis by a sidereal angle (no precession, nutation or polar motion)"""

    rate = OMGE

    @abstractmethod
    def angle(self, t: float) -> float:
        """Rotation angle (rad) about the z-axis at GPS seconds ``t``"""
        pass

    def rotation_matrix(self, t: float) -> np.ndarray:
        # passive rotation of coordinates, equals eci2ecef_dcm
        return Rotation.from_euler('z', -self.angle(t)).as_matrix()

    def rotation_axis(self, t: float) -> np.ndarray:
        return np.array([0.0, 0.0, self.rate])


class EraEarthRotation(_SiderealRotation):
    """Earth rotation by the Earth Rotation Angle"""

    name = 'era'
    rate = OMGE_ERA

    def angle(self, t: float) -> float:
        return earth_rotation_angle(t)


class GmstEarthRotation(_SiderealRotation):
    """Earth rotation by Greenwich Mean Sidereal Time"""

    name = 'gmst'
    rate = OMGE

    def angle(self, t: float) -> float:
        return gmst(t)


EARTH_ROTATION_MODELS = {
    EraEarthRotation.name: EraEarthRotation,
    GmstEarthRotation.name: GmstEarthRotation,
}


__all__ = [
    'EarthRotation', 'EraEarthRotation', 'GmstEarthRotation',
    'EARTH_ROTATION_MODELS', 'earth_rotation_angle', 'gmst', 'OMGE_ERA',
]
