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
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from xtensa_config.common.chips import Chip
from xtensa_config.common.types import XtensaConfigError
from xtensa_config.correctors import correct, derived_identifiers
from xtensa_config.header_sources import HeaderSource
from xtensa_config.symbol_tables import Diagnostics, SymbolTable, build

LOGGER = logging.getLogger()


@dataclass
class ChipResult:
    """Outcome of processing one chip. Exactly one of table and error is
    set."""

    chip: Chip
    table: Optional[SymbolTable] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    error: Optional[XtensaConfigError] = None

    @property
    def succeeded(self: "ChipResult") -> bool:
        return self.error is None


Consumer = Callable[[ChipResult], None]


def process_chip(chip: Chip, source: HeaderSource) -> ChipResult:
    """Runs the full pipeline for a single chip: read the header, build and
    resolve its symbol table, then apply the chip's derived values.

    Diagnostics for identifiers the chip derives are expected (the header
    does not express them in a parseable form) and are not reported.

    Raises:
        HeaderSourceError: if the header cannot be read.
        DerivedValueError: if a derived value cannot be computed."""

    header_lines = source.get_numbered_lines(chip)
    LOGGER.debug("Found %d definitions for %s", len(header_lines), chip.name)

    table, diagnostics = build(
        [header_line.text for header_line in header_lines],
        [header_line.line_number for header_line in header_lines])
    diagnostics = diagnostics.without(derived_identifiers(chip))
    for diagnostic in diagnostics:
        LOGGER.warning("%s: %s", chip.name, diagnostic)

    correct(chip, table)
    return ChipResult(chip=chip, table=table, diagnostics=diagnostics)


def get_config(chip: Chip, source: HeaderSource) -> SymbolTable:
    return process_chip(chip, source).table


def process_chips(chips: Iterable[Chip],
                  source: HeaderSource,
                  consumer: Optional[Consumer] = None) -> List[ChipResult]:
    """Processes each chip independently, in order. A chip that fails is
    recorded with its error and the remaining chips are still attempted."""

    results = []
    for chip in chips:
        try:
            result = process_chip(chip, source)
        except XtensaConfigError as error:
            LOGGER.error("Failed to process %s: %s", chip.name, error)
            result = ChipResult(chip=chip, error=error)
        else:
            if consumer is not None:
                consumer(result)
        results.append(result)
    return results
