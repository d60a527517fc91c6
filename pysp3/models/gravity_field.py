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

"""Time variable gravity field models in spherical harmonics.

Only the low degrees are needed here: the degree 1 coefficients describe
the offset between the center of mass and the center of the Earth figure
(geocenter motion)::

    x = sqrt(3) * R * c11,  y = sqrt(3) * R * s11,  z = sqrt(3) * R * c10

The default model is the geocenter motion caused by the ocean tides, given
as a sum of tidal constituents identified by Doodson numbers.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np
import yaml

from ..core.constants import (D2R, DELTA_TAI_GPS, DELTA_TT_TAI, GM_EARTH,
                              MJD_J2000, R_EARTH)
from ..core.time import time2mjd
from .earth_rotation import gmst

logger = logging.getLogger(__name__)

DEFAULT_TIDE_FILE = Path(__file__).parent / "data" / "ocean_tide_geocenter.yaml"


@dataclass
class SphericalHarmonics:
    """
    Fully normalized spherical harmonic coefficients

    Attributes:
    -----------
    cnm, snm : np.ndarray
        Coefficients indexed [n, m], shape (max_degree+1, max_degree+1)
    R : float
        Reference radius (m)
    GM : float
        Gravitational constant (m^3/s^2)
    """
    cnm: np.ndarray
    snm: np.ndarray
    R: float = R_EARTH
    GM: float = GM_EARTH

    @classmethod
    def zeros(cls, max_degree: int, R: float = R_EARTH, GM: float = GM_EARTH) -> 'SphericalHarmonics':
        n = max_degree + 1
        return cls(np.zeros((n, n)), np.zeros((n, n)), R, GM)

    @property
    def max_degree(self) -> int:
        return self.cnm.shape[0] - 1

    def x(self) -> np.ndarray:
        """Coefficient vector in degree order: c00, c10, c11, s11, c20, c21, s21, ..."""
        values = []
        for n in range(self.max_degree + 1):
            values.append(self.cnm[n, 0])
            for m in range(1, n + 1):
                values.extend([self.cnm[n, m], self.snm[n, m]])
        return np.array(values)

    def truncate(self, max_degree: int, max_order: Optional[int] = None) -> 'SphericalHarmonics':
        """Coefficients up to ``max_degree``/``max_order``, zero padded"""
        max_order = max_degree if max_order is None else max_order
        result = SphericalHarmonics.zeros(max_degree, self.R, self.GM)
        n = min(max_degree, self.max_degree) + 1
        result.cnm[:n, :n] = self.cnm[:n, :n]
        result.snm[:n, :n] = self.snm[:n, :n]
        result.cnm[:, max_order + 1:] = 0.0
        result.snm[:, max_order + 1:] = 0.0
        return result

    def rescale(self, R: float, GM: float) -> 'SphericalHarmonics':
        """Same field expressed with another reference radius and GM"""
        degrees = np.arange(self.max_degree + 1)[:, None]
        factor = (self.GM / GM) * (self.R / R) ** degrees
        return SphericalHarmonics(self.cnm * factor, self.snm * factor, R, GM)

    def __add__(self, other: 'SphericalHarmonics') -> 'SphericalHarmonics':
        other = other.rescale(self.R, self.GM)
        max_degree = max(self.max_degree, other.max_degree)
        a = self.truncate(max_degree)
        b = other.truncate(max_degree)
        return SphericalHarmonics(a.cnm + b.cnm, a.snm + b.snm, self.R, self.GM)

    def geocenter(self) -> np.ndarray:
        """Center of mass relative to the center of figure (m) from degree 1"""
        if self.max_degree < 1:
            return np.zeros(3)
        return np.sqrt(3.0) * self.R * np.array([self.cnm[1, 1], self.snm[1, 1], self.cnm[1, 0]])


class GravityField(ABC):
    """Gravity field model evaluated at an epoch"""

    @abstractmethod
    def spherical_harmonics(self, t: float, max_degree: int = 1,
                            max_order: Optional[int] = None) -> SphericalHarmonics:
        """
        Spherical harmonic coefficients at GPS seconds ``t``

        Parameters:
        -----------
        t : float
            GPS seconds
        max_degree : int
            Maximum degree of the returned coefficients
        max_order : int, optional
            Maximum order (default: max_degree)
        """
        pass


class ConstantGravityField(GravityField):
    """Time invariant coefficients"""

    def __init__(self, harmonics: SphericalHarmonics):
        self.harmonics = harmonics

    @classmethod
    def from_geocenter(cls, offset: Sequence[float], R: float = R_EARTH,
                       GM: float = GM_EARTH) -> 'ConstantGravityField':
        """Degree 1 field producing the given geocenter offset [x, y, z] (m)"""
        x, y, z = np.asarray(offset, dtype=np.float64)
        harmonics = SphericalHarmonics.zeros(1, R, GM)
        scale = 1.0 / (np.sqrt(3.0) * R)
        harmonics.cnm[1, 0] = z * scale
        harmonics.cnm[1, 1] = x * scale
        harmonics.snm[1, 1] = y * scale
        return cls(harmonics)

    def spherical_harmonics(self, t, max_degree=1, max_order=None):
        return self.harmonics.truncate(max_degree, max_order)


def doodson2multipliers(doodson: Union[str, float]) -> np.ndarray:
    """
    Convert a Doodson number (e.g. '255.555') into argument multipliers

    Returns:
    --------
    np.ndarray
        Integer multipliers of (tau, s, h, p, N', ps)
    """
    digits = str(doodson).replace('.', '').strip()
    if len(digits) != 6 or not digits.isdigit():
        raise ValueError(f"Invalid Doodson number: {doodson}")
    multipliers = np.array([int(d) for d in digits]) - np.array([0, 5, 5, 5, 5, 5])
    return multipliers


def doodson_arguments(t: float) -> np.ndarray:
    """
    Fundamental lunisolar arguments of the tidal potential

    Parameters:
    -----------
    t : float
        GPS seconds

    Returns:
    --------
    np.ndarray
        (tau, s, h, p, N', ps) in radians
    """
    T = (time2mjd(t + DELTA_TAI_GPS + DELTA_TT_TAI) - MJD_J2000) / 36525.0
    s = 218.3164477 + 481267.88123421 * T - 0.0015786 * T**2
    h = 280.46645 + 36000.7697489 * T + 0.00030322 * T**2
    p = 83.3532465 + 4069.0137287 * T - 0.0103200 * T**2
    N = 125.0445479 - 1934.1362891 * T + 0.0020754 * T**2
    ps = 282.93734 + 1.71946 * T + 0.00045688 * T**2
    s, h, p, N, ps = (np.mod(v, 360.0) * D2R for v in (s, h, p, N, ps))
    tau = gmst(t) + np.pi - s
    return np.array([tau, s, h, p, -N, ps])


@dataclass
class TideConstituent:
    """Tidal constituent with cos/sin amplitudes of the coefficients"""
    name: str
    doodson: str
    cnm_cos: np.ndarray
    cnm_sin: np.ndarray
    snm_cos: np.ndarray
    snm_sin: np.ndarray
    multipliers: np.ndarray = field(init=False)

    def __post_init__(self):
        self.multipliers = doodson2multipliers(self.doodson)


class DoodsonHarmonicTide(GravityField):
    """
    Tide model as a sum of constituents::

        cnm(t) = sum_k cnm_cos_k * cos(theta_k(t)) + cnm_sin_k * sin(theta_k(t))

    with theta_k the Doodson multipliers applied to the fundamental arguments.
    """

    def __init__(self, constituents: List[TideConstituent], R: float = R_EARTH,
                 GM: float = GM_EARTH, min_degree: int = 0, max_degree: Optional[int] = None):
        self.constituents = constituents
        self.R = R
        self.GM = GM
        self.min_degree = min_degree
        self.max_degree = max_degree

    def spherical_harmonics(self, t, max_degree=1, max_order=None):
        if self.max_degree is not None:
            max_degree = min(max_degree, self.max_degree)
        result = SphericalHarmonics.zeros(max_degree, self.R, self.GM)
        if not self.constituents:
            return result

        args = doodson_arguments(t)
        for tide in self.constituents:
            theta = float(tide.multipliers @ args)
            cos_t, sin_t = np.cos(theta), np.sin(theta)
            n = min(max_degree, tide.cnm_cos.shape[0] - 1) + 1
            result.cnm[:n, :n] += tide.cnm_cos[:n, :n] * cos_t + tide.cnm_sin[:n, :n] * sin_t
            result.snm[:n, :n] += tide.snm_cos[:n, :n] * cos_t + tide.snm_sin[:n, :n] * sin_t
        result.cnm[:self.min_degree] = 0.0
        result.snm[:self.min_degree] = 0.0
        return result.truncate(max_degree, max_order)

    @classmethod
    def from_geocenter_file(cls, path: Union[str, Path], R: float = R_EARTH,
                            GM: float = GM_EARTH) -> 'DoodsonHarmonicTide':
        """
        Read a degree 1 tide model from a YAML table of geocenter amplitudes

        The file holds a list ``constituents`` with ``name``, ``doodson`` and
        the in-phase/quadrature amplitudes ``x: [cos, sin]``, ``y``, ``z``
        in millimeters.
        """
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f)

        scale = 1e-3 / (np.sqrt(3.0) * R)
        constituents = []
        for entry in data.get('constituents') or []:
            cnm_cos, cnm_sin = np.zeros((2, 2)), np.zeros((2, 2))
            snm_cos, snm_sin = np.zeros((2, 2)), np.zeros((2, 2))
            x = entry.get('x', [0.0, 0.0])
            y = entry.get('y', [0.0, 0.0])
            z = entry.get('z', [0.0, 0.0])
            cnm_cos[1, 1], cnm_sin[1, 1] = x[0] * scale, x[1] * scale
            snm_cos[1, 1], snm_sin[1, 1] = y[0] * scale, y[1] * scale
            cnm_cos[1, 0], cnm_sin[1, 0] = z[0] * scale, z[1] * scale
            constituents.append(TideConstituent(
                name=entry['name'], doodson=str(entry['doodson']),
                cnm_cos=cnm_cos, cnm_sin=cnm_sin, snm_cos=snm_cos, snm_sin=snm_sin))
        return cls(constituents, R=R, GM=GM, min_degree=1, max_degree=1)


class GravityFieldSum(GravityField):
    """Sum of several gravity field models"""

    def __init__(self, fields: List[GravityField], R: float = R_EARTH, GM: float = GM_EARTH):
        self.fields = list(fields)
        self.R = R
        self.GM = GM

    def spherical_harmonics(self, t, max_degree=1, max_order=None):
        result = SphericalHarmonics.zeros(max_degree, self.R, self.GM)
        for gravity_field in self.fields:
            result = result + gravity_field.spherical_harmonics(t, max_degree, max_order)
        return result.truncate(max_degree, max_order)


def default_degree1_tide(path: Union[str, Path] = DEFAULT_TIDE_FILE) -> DoodsonHarmonicTide:
    """
    Degree 1 ocean tide model from the package table

    The table (``models/data/ocean_tide_geocenter.yaml``) lists per
    constituent the in-phase/quadrature geocenter amplitudes in mm,
    ``x(t) = x_cos * cos(theta) + x_sin * sin(theta)`` with ``theta`` from
    :func:`doodson_arguments`. It is shipped without coefficients: fill in
    the degree 1 terms of the ocean tide model in use, or configure
    ``gravityfield: {tides: file.yaml}``. An empty table yields no correction.
    """
    tide = DoodsonHarmonicTide.from_geocenter_file(path)
    if not tide.constituents:
        logger.warning(f"Degree 1 tide table <{path}> holds no constituents, "
                       "no center of mass correction applied")
    return tide


def default_gravity_field() -> GravityField:
    """Default model for the center of mass correction of SP3 orbits"""
    return GravityFieldSum([default_degree1_tide()])


__all__ = [
    'SphericalHarmonics', 'GravityField', 'ConstantGravityField',
    'TideConstituent', 'DoodsonHarmonicTide', 'GravityFieldSum',
    'doodson2multipliers', 'doodson_arguments',
    'default_degree1_tide', 'default_gravity_field', 'DEFAULT_TIDE_FILE',
]
