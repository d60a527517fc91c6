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

"""
pysp3 - SP3 precise orbit conversion

Reads orbits, clocks and position covariances from SP3 files, converts
them to GPS time, optionally rotates them from the terrestrial to the
celestial frame and applies the center of Earth to center of mass
correction derived from degree 1 gravity field coefficients.
"""

__version__ = "1.0.0"
__author__ = "PyINS Development Team"
__title__ = "pysp3"
__description__ = "SP3 precise orbit conversion"

from .core import *
from .io import *
from .models import *
from .config import ConfigError, ConversionConfig, load_config
from .conversion import ConversionResult, convert, write_results
