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

"""I/O utilities for pysp3."""

from .columns import Sp3FormatError, to_float, to_int, to_str
from .instrument_writer import (
    InstrumentWriter,
    append_base_name,
    read_instrument,
)
from .sp3_reader import (
    FaultPolicy,
    ParserState,
    Sp3Reader,
    parse_line,
    read_sp3,
)

__all__ = [
    'Sp3FormatError', 'to_float', 'to_int', 'to_str',
    'InstrumentWriter', 'append_base_name', 'read_instrument',
    'FaultPolicy', 'ParserState', 'Sp3Reader', 'parse_line', 'read_sp3',
]
