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

"""Core data structures for orbit conversion"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, NamedTuple, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitEpoch:
    """Satellite position (and optional velocity) at one epoch.

    Attributes
    ----------
    time : float
        Epoch in GPS seconds
    position : np.ndarray
        Position [x, y, z] in meters
    velocity : np.ndarray, optional
        Velocity [vx, vy, vz] in m/s, None if not available
    """
    time: float
    position: np.ndarray
    velocity: Optional[np.ndarray] = None


@dataclass(frozen=True)
class ClockEpoch:
    """Satellite clock offset (seconds) at one epoch"""
    time: float
    value: float


@dataclass(frozen=True)
class CovarianceEpoch:
    """Position covariance (3x3, m^2) at one epoch"""
    time: float
    covariance: np.ndarray


@dataclass(frozen=True)
class VelocityEpoch:
    """Velocity waiting to be paired with the position of the same epoch.

    ``velocity`` is already rotated into the output frame; the frame
    correction ``omega x position`` is added when the pair is merged.
    """
    time: float
    velocity: np.ndarray
    omega: np.ndarray


Epoch = Union[OrbitEpoch, ClockEpoch, CovarianceEpoch, VelocityEpoch]


class Sp3Record(NamedTuple):
    """Epoch emitted by the parser for one satellite"""
    satellite: str
    epoch: Epoch


@dataclass(frozen=True)
class TransformContext:
    """Per-epoch transformation from the SP3 frame to the output frame.

    Attributes
    ----------
    rotation : np.ndarray
        Rotation matrix applied to positions, velocities and covariances
        (TRF -> CRF, identity if no earth rotation is used)
    omega : np.ndarray
        Earth rotation vector (rad/s) in the output frame
    cm2ce_correction : np.ndarray
        Vector (m) subtracted from SP3 positions before the rotation
    """
    rotation: np.ndarray = field(default_factory=lambda: np.eye(3))
    omega: np.ndarray = field(default_factory=lambda: np.zeros(3))
    cm2ce_correction: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def transform_position(self, position: np.ndarray) -> np.ndarray:
        return self.rotation @ (position - self.cm2ce_correction)

    def transform_velocity(self, velocity: np.ndarray) -> np.ndarray:
        return self.rotation @ velocity

    def transform_covariance(self, covariance: np.ndarray) -> np.ndarray:
        return self.rotation @ covariance @ self.rotation.T


class SatelliteArcs:
    """Per-satellite orbit, clock and covariance sequences.

    Records are demultiplexed by satellite identifier into three independent
    mappings. Sequences only grow. Velocities are kept apart until
    :meth:`merge_velocities` pairs them with the position of the same
    satellite and epoch.
    """

    def __init__(self):
        self.orbits: Dict[str, List[OrbitEpoch]] = {}
        self.clocks: Dict[str, List[ClockEpoch]] = {}
        self.covariances: Dict[str, List[CovarianceEpoch]] = {}
        self._velocities: Dict[str, List[VelocityEpoch]] = {}

    def add(self, record: Sp3Record) -> None:
        """Append a parsed record to the sequence of its satellite"""
        epoch = record.epoch
        if isinstance(epoch, OrbitEpoch):
            target = self.orbits
        elif isinstance(epoch, ClockEpoch):
            target = self.clocks
        elif isinstance(epoch, CovarianceEpoch):
            target = self.covariances
        elif isinstance(epoch, VelocityEpoch):
            target = self._velocities
        else:
            raise TypeError(f"Unsupported epoch type: {type(epoch).__name__}")
        target.setdefault(record.satellite, []).append(epoch)

    def merge_velocities(self) -> int:
        """
        Attach pending velocities to the positions of the same epoch

        A velocity is matched to the most recently appended position of its
        satellite with the same time. Velocities without such a position
        are dropped.

        Returns:
        --------
        int
            Number of merged velocities
        """
        merged = 0
        for sat, velocities in self._velocities.items():
            orbit = self.orbits.get(sat, [])
            index = {epoch.time: i for i, epoch in enumerate(orbit)}
            dropped = 0
            for vel in velocities:
                i = index.get(vel.time)
                if i is None:
                    dropped += 1
                    continue
                position = orbit[i].position
                orbit[i] = replace(orbit[i], velocity=vel.velocity + np.cross(vel.omega, position))
                merged += 1
            if dropped:
                logger.warning(f"{dropped} velocities of satellite {sat} without position, dropped")
        self._velocities = {}
        return merged

    def satellites(self) -> List[str]:
        """All satellite identifiers present in any of the sequences"""
        return sorted(set(self.orbits) | set(self.clocks) | set(self.covariances))

    def orbit(self, sat: str) -> List[OrbitEpoch]:
        return self.orbits.get(sat, [])

    def clock(self, sat: str) -> List[ClockEpoch]:
        return self.clocks.get(sat, [])

    def covariance(self, sat: str) -> List[CovarianceEpoch]:
        return self.covariances.get(sat, [])

    def __len__(self) -> int:
        return len(self.satellites())

    def __repr__(self) -> str:
        return (f"SatelliteArcs(satellites={self.satellites()}, "
                f"orbit_epochs={sum(len(v) for v in self.orbits.values())})")


__all__ = [
    'OrbitEpoch', 'ClockEpoch', 'CovarianceEpoch', 'VelocityEpoch', 'Epoch',
    'Sp3Record', 'TransformContext', 'SatelliteArcs',
]
