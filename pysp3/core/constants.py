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

"""Physical and SP3 format constants"""

import numpy as np

# Time System Parameters
GPST0 = [1980, 1, 6, 0, 0, 0]  # GPS time reference epoch
MJD_GPST0 = 44244.0            # MJD of the GPS time reference epoch
MJD_J2000 = 51544.5            # MJD of J2000.0 (2000-01-01 12:00)
DAY_SECONDS = 86400.0

# Time system offsets
DELTA_TAI_GPS = 19.0           # TAI - GPS (seconds), constant
DELTA_TT_TAI = 32.184          # TT - TAI (seconds), constant

# Earth Parameters
OMGE = 7.2921151467E-5         # earth angular velocity (rad/s)
GM_EARTH = 3.986004415E14      # earth gravitational constant (m^3/s^2)
R_EARTH = 6378136.3            # reference radius of gravity field models (m)

# Unit conversions
D2R = np.pi / 180.0            # degrees to radians

# SP3 units and sentinels
SP3_POS_SCALE = 1e3            # km -> m
SP3_VEL_SCALE = 0.1            # dm/s -> m/s
SP3_CLK_SCALE = 1e-6           # microseconds -> seconds
SP3_CLK_NODATA = 999999.0      # clock values at or above this are missing
SP3_SDEV_SCALE = 1e-3          # EP standard deviations: mm -> m
SP3_CORR_SCALE = 1e-13         # correlation [1e-7] * sdev [mm]^2 -> m^2

# Satellite selection
ALL_SATELLITES = "<all>"
