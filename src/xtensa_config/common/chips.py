r"""
 Copyright 2023 GSI Technology, Inc.

 Permission is hereby granted, free of charge, to any person obtaining a copy of
 this software and associated documentation files (the “Software”), to deal in
 the Software without restriction, including without limitation the rights to
 use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of
 the Software, and to permit persons to whom the Software is furnished to do so,
 subject to the following conditions:

 The above copyright notice and this permission notice shall be included in all
 copies or substantial portions of the Software.

 THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
 IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS
 FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR
 COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER
 IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
 CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
"""

from typing import Sequence, Type

from xtensa_config.common.types import TokenEnum


class Chip(TokenEnum):
    """Supported Xtensa chip variants. Each value names the overlay directory
    holding the chip's core-isa.h.

    Since no RTOS is used, the ESP32 reads the `xtensa_esp108` overlay
    instead of `xtensa_esp32`. See:
    https://docs.espressif.com/projects/esp-idf/en/v3.3.5/api-guides/jtag-debugging/tips-and-quirks.html"""

    ESP32: str = "xtensa_esp108"
    ESP32S2: str = "xtensa_esp32s2"
    ESP32S3: str = "xtensa_esp32s3"
    ESP8266: str = "xtensa_lx106"

    @property
    def overlay(self: "Chip") -> str:
        return self.value

    @classmethod
    def parse_all(cls: Type["Chip"], names: Sequence[str]) -> Sequence["Chip"]:
        """Maps chip names (e.g. `ESP32S3`) to members, preserving the
        declaration order and dropping duplicates."""
        requested = {cls[name.upper()] for name in names}
        return [chip for chip in cls if chip in requested]
