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
from collections import OrderedDict
from typing import Callable, Dict, Sequence

from xtensa_config.common.chips import Chip
from xtensa_config.common.constants import (XCHAL_DCACHE_IS_COHERENT,
                                            XCHAL_HAVE_DCACHE_DYN_WAYS,
                                            XCHAL_HAVE_ICACHE_DYN_WAYS,
                                            XCHAL_LOOP_BUFFER_SIZE,
                                            XCHAL_USE_MEMCTL)
from xtensa_config.common.types import DerivedValueError, IntegerValue, Value
from xtensa_config.symbol_tables import SymbolTable

LOGGER = logging.getLogger()

DerivedValueFn = Callable[[SymbolTable], Value]

DERIVED_VALUES: Dict[Chip, Dict[str, DerivedValueFn]] = OrderedDict()


def derived_value(chip: Chip, identifier: str) -> Callable:
    """Registers the decorated function as the source of identifier for the
    given chip. The function receives the resolved symbol table and returns
    the value to store."""

    def decorator(fn: DerivedValueFn) -> DerivedValueFn:
        DERIVED_VALUES.setdefault(chip, OrderedDict())[identifier] = fn
        return fn

    return decorator


def derived_identifiers(chip: Chip) -> Sequence[str]:
    return list(DERIVED_VALUES.get(chip, {}).keys())


def require_integer(table: SymbolTable, identifier: str) -> int:
    try:
        return table.integer(identifier)
    except KeyError as error:
        raise DerivedValueError(
            f"Missing required definition: {identifier}") from error
    except TypeError as error:
        raise DerivedValueError(str(error)) from error


@derived_value(Chip.ESP32, XCHAL_USE_MEMCTL)
def esp32_use_memctl(table: SymbolTable) -> Value:
    # The value should subsequently be AND'ed with
    # (XCHAL_HW_MIN_VERSION >= XTENSA_HWVERSION_RE_2012_0), but the latter
    # identifier is not defined anywhere.
    loop_buffer_size = require_integer(table, XCHAL_LOOP_BUFFER_SIZE)
    dcache_is_coherent = require_integer(table, XCHAL_DCACHE_IS_COHERENT)
    have_icache_dyn_ways = require_integer(table, XCHAL_HAVE_ICACHE_DYN_WAYS)
    have_dcache_dyn_ways = require_integer(table, XCHAL_HAVE_DCACHE_DYN_WAYS)

    use_memctl = loop_buffer_size > 0 \
        or dcache_is_coherent != 0 \
        or have_icache_dyn_ways != 0 \
        or have_dcache_dyn_ways != 0

    return IntegerValue(int(use_memctl))


def correct(chip: Chip, table: SymbolTable) -> SymbolTable:
    """Stores every value derived for the chip into table, overwriting prior
    entries. Must run after alias resolution.

    Raises:
        DerivedValueError: if an input of a derived value is missing or is
                           not an integer."""

    for identifier, fn in DERIVED_VALUES.get(chip, {}).items():
        try:
            value = fn(table)
        except DerivedValueError as error:
            raise DerivedValueError(
                f"Unable to derive {identifier} for {chip.name}: {error}") \
                from error
        LOGGER.debug("Derived %s for %s: %s", identifier, chip.name, value)
        table[identifier] = value
    return table
