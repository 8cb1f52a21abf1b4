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

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Mapping, NamedTuple, Union

from xtensa_config.common.chips import Chip
from xtensa_config.common.constants import DEFAULT_HEADER_PATH, DEFINE_TOKEN
from xtensa_config.common.types import HeaderSourceError

LOGGER = logging.getLogger()


class HeaderLine(NamedTuple):
    line_number: int
    text: str


def number_all_defines(lines: Iterable[str]) -> List[HeaderLine]:
    """Returns the `#define` lines together with their 1-based position in
    the header."""
    return [HeaderLine(line_number, line)
            for line_number, line in enumerate(lines, start=1)
            if line.startswith(DEFINE_TOKEN)]


def find_all_defines(lines: Iterable[str]) -> List[str]:
    return [line.text for line in number_all_defines(lines)]


class HeaderSource(ABC):
    """Provides the `#define` lines of each chip's core-isa.h."""

    @abstractmethod
    def read_text(self: "HeaderSource", chip: Chip) -> str:
        """Returns the full text of the chip's header, or raises
        HeaderSourceError."""
        raise NotImplementedError

    def get_lines(self: "HeaderSource", chip: Chip) -> List[str]:
        text = self.read_text(chip)
        return find_all_defines(text.splitlines())

    def get_numbered_lines(self: "HeaderSource", chip: Chip) -> List[HeaderLine]:
        text = self.read_text(chip)
        return number_all_defines(text.splitlines())


class OverlayHeaderSource(HeaderSource):
    """Reads headers out of a checkout of the Xtensa overlays, laid out as
    `<overlays_root>/<overlay>/<header_path>`."""

    def __init__(self: "OverlayHeaderSource",
                 overlays_root: Union[str, Path],
                 header_path: Union[str, Path] = DEFAULT_HEADER_PATH) -> None:
        self.overlays_root = Path(overlays_root)
        self.header_path = Path(header_path)

    def core_isa_path(self: "OverlayHeaderSource", chip: Chip) -> Path:
        path = self.overlays_root / chip.overlay / self.header_path
        try:
            return path.resolve(strict=True)
        except (OSError, RuntimeError) as error:
            raise HeaderSourceError(
                f"Unable to locate core-isa.h for {chip.name}: {path}") \
                from error

    def read_text(self: "OverlayHeaderSource", chip: Chip) -> str:
        path = self.core_isa_path(chip)
        LOGGER.info("Reading %s for %s", path, chip.name)
        try:
            with open(path, "rt") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as error:
            raise HeaderSourceError(
                f"Unable to read core-isa.h for {chip.name}: {path}") \
                from error


class MappingHeaderSource(HeaderSource):
    """Serves header text held in memory, keyed by chip."""

    def __init__(self: "MappingHeaderSource",
                 headers: Mapping[Chip, str]) -> None:
        self.headers = dict(headers)

    def read_text(self: "MappingHeaderSource", chip: Chip) -> str:
        if chip not in self.headers:
            raise HeaderSourceError(f"No header provided for {chip.name}")
        return self.headers[chip]
