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

"""Core Orbit Conversion Module.

- **Constants**: physical constants, SP3 units and sentinels
- **Data Structures**: orbit, clock and covariance epochs, the per-epoch
  transformation context and the per-satellite sequences
- **Time Systems**: GPS/UTC/TAI calendar epochs converted to GPS seconds
- **Statistics**: summary of converted arcs

Example Usage:
    >>> from pysp3.core import *
    >>>
    >>> t = calendar2gps(TimeSystem.UTC, 2020, 1, 1, 0, 0, 0.0)
    >>> arcs = SatelliteArcs()
    >>> arcs.add(Sp3Record('G01', ClockEpoch(t, 1e-4)))
"""

from .constants import *
from .data_structures import *
from .time import *
