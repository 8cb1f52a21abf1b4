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

import re
from typing import Dict

from xtensa_config.common.constants import INT64_MAX
from xtensa_config.common.types import (Classification, IdentifierRef,
                                        IntegerValue, InterruptType,
                                        InterruptValue, TextValue,
                                        Unrecognized)

DECIMAL_PATTERN = re.compile(r"[0-9]+")
HEXADECIMAL_PATTERN = re.compile(r"0[xX]([0-9a-fA-F]+)")
STRING_PATTERN = re.compile(r'"([^"]+)"')
IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

INTERRUPT_TYPES: Dict[str, InterruptType] = InterruptType.value_map()


def parse_integer(text: str, digits: str, base: int) -> Classification:
    value = int(digits, base)
    if value > INT64_MAX:
        return Unrecognized(text, "integer overflow")
    return IntegerValue(value)


def classify(text: str) -> Classification:
    """Determines the kind of a macro's value text and parses it.

    Rules are tried in order and the first match wins. Interrupt tokens are
    lexically identifiers, so they must be tried before the identifier rule
    or they would be treated as references to other macros.

    Parameters:
        text: the value token of a `#define` line.

    Returns:
        An IntegerValue, InterruptValue or TextValue for literals; an
        IdentifierRef for a bare identifier; otherwise Unrecognized. Never
        raises."""

    if DECIMAL_PATTERN.fullmatch(text):
        return parse_integer(text, text, 10)

    match = HEXADECIMAL_PATTERN.fullmatch(text)
    if match:
        return parse_integer(text, match.group(1), 16)

    if text in INTERRUPT_TYPES:
        return InterruptValue(INTERRUPT_TYPES[text])

    match = STRING_PATTERN.fullmatch(text)
    if match:
        return TextValue(match.group(1))

    if IDENTIFIER_PATTERN.fullmatch(text):
        return IdentifierRef(text)

    return Unrecognized(text)
