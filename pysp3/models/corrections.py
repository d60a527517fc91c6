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

"""Per-epoch frame and center of mass corrections"""

from typing import Optional

import numpy as np

from ..core.data_structures import TransformContext
from .earth_rotation import EarthRotation
from .gravity_field import GravityField


class CorrectionProvider:
    """
    Evaluate the transformation context of an epoch

    Parameters:
    -----------
    gravity_field : GravityField, optional
        Model whose degree 1 coefficients give the CM2CE correction
        (no correction if None)
    earth_rotation : EarthRotation, optional
        Rotation TRF -> CRF (positions stay in the TRF if None)
    """

    def __init__(self, gravity_field: Optional[GravityField] = None,
                 earth_rotation: Optional[EarthRotation] = None):
        self.gravity_field = gravity_field
        self.earth_rotation = earth_rotation

    def cm2ce_correction(self, t: float) -> np.ndarray:
        """sqrt(3) * R * (c11, s11, c10) of the gravity field at ``t``"""
        if self.gravity_field is None:
            return np.zeros(3)
        return self.gravity_field.spherical_harmonics(t, 1, 1).geocenter()

    def context(self, t: float) -> TransformContext:
        """Transformation of all records belonging to the epoch ``t``"""
        if self.earth_rotation is None:
            return TransformContext(cm2ce_correction=self.cm2ce_correction(t))
        return TransformContext(
            rotation=self.earth_rotation.rotation_matrix(t).T,
            omega=np.asarray(self.earth_rotation.rotation_axis(t), dtype=np.float64),
            cm2ce_correction=self.cm2ce_correction(t),
        )
