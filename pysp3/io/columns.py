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

"""Fixed-column field decoding.

Fields are addressed by 0-based start column and width. A line that ends
before the end of a requested field is a format error, blank integer fields
decode to zero and Fortran ``D`` exponents are accepted in floats.
"""

from typing import Optional


class Sp3FormatError(ValueError):
    """A line could not be decoded at its expected column offsets"""

    def __init__(self, message: str, filename: Optional[str] = None,
                 line_number: Optional[int] = None, line: Optional[str] = None):
        self.filename = filename
        self.line_number = line_number
        self.line = line
        location = ""
        if filename is not None:
            location = f"{filename}"
            if line_number is not None:
                location += f":{line_number}"
            location += ": "
        super().__init__(f"{location}{message}")


def field(line: str, start: int, width: int) -> str:
    """Return the substring of ``line`` at [start, start+width)"""
    line = line.rstrip('\r\n')
    if len(line) < start + width:
        raise Sp3FormatError(
            f"line too short for field at columns {start}-{start + width - 1} "
            f"(length {len(line)})")
    return line[start:start + width]


def to_int(line: str, start: int, width: int) -> int:
    """Decode an integer field, blank fields are zero"""
    text = field(line, start, width).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise Sp3FormatError(f"invalid integer '{text}' at column {start}") from None


def to_float(line: str, start: int, width: int) -> float:
    """Decode a floating point field"""
    text = field(line, start, width).strip()
    try:
        return float(text.replace('D', 'E').replace('d', 'e'))
    except ValueError:
        raise Sp3FormatError(f"invalid number '{text}' at column {start}") from None


def to_str(line: str, start: int, width: int) -> str:
    """Slice a text field, shorter lines yield a shorter (possibly empty) string"""
    return line.rstrip('\r\n')[start:start + width]


__all__ = ['Sp3FormatError', 'field', 'to_int', 'to_float', 'to_str']
