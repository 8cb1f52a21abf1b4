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
import re
from collections import Counter
from collections.abc import MutableMapping
from itertools import count
from operator import attrgetter
from typing import (Any, Dict, Iterable, Iterator, List, Mapping, NamedTuple,
                    Optional, Tuple, Union)

from xtensa_config.classifiers import IDENTIFIER_PATTERN, classify
from xtensa_config.common.constants import DEFINE_TOKEN
from xtensa_config.common.types import (Diagnostic, DiagnosticKind,
                                        IdentifierRef, IntegerValue,
                                        Unrecognized, Value)

LOGGER = logging.getLogger()

DEFINE_PATTERN = re.compile(
    rf"^{DEFINE_TOKEN}\s+({IDENTIFIER_PATTERN.pattern})\s+(\S+)")


class RawDefinition(NamedTuple):
    line_number: int
    identifier: str
    value_text: str


class PendingAlias(NamedTuple):
    """An identifier defined as another identifier. previous is what the
    identifier was defined as before this line, if anything; it stands in
    when the target cannot be resolved."""

    line_number: int
    identifier: str
    target: str
    previous: Optional[Union[Value, "PendingAlias"]] = None

    def fallback(self: "PendingAlias",
                 direct: Mapping[str, Value]) -> Optional[Value]:
        previous = self.previous
        while isinstance(previous, PendingAlias):
            if previous.target in direct:
                return direct[previous.target]
            previous = previous.previous
        return previous


class SymbolTable(MutableMapping):
    """Mapping of macro identifiers to their resolved values for one chip.
    Unresolved or unrecognized definitions are absent rather than stored with
    a placeholder."""

    def __init__(self: "SymbolTable",
                 entries: Optional[Mapping[str, Value]] = None) -> None:
        self._entries: Dict[str, Value] = {}
        if entries is not None:
            self.update(entries)

    def __getitem__(self: "SymbolTable", identifier: str) -> Value:
        return self._entries[identifier]

    def __setitem__(self: "SymbolTable", identifier: str, value: Value) -> None:
        self._entries[identifier] = value

    def __delitem__(self: "SymbolTable", identifier: str) -> None:
        del self._entries[identifier]

    def __iter__(self: "SymbolTable") -> Iterator[str]:
        return iter(self._entries)

    def __len__(self: "SymbolTable") -> int:
        return len(self._entries)

    def __repr__(self: "SymbolTable") -> str:
        return f"{self.__class__.__name__}({self._entries!r})"

    def integer(self: "SymbolTable", identifier: str) -> int:
        """Returns the integer stored under identifier. Raises KeyError if it
        is absent and TypeError if it holds another kind of value."""
        value = self._entries[identifier]
        if not isinstance(value, IntegerValue):
            raise TypeError(
                f"Expected {identifier} to be an integer, but was: {value}")
        return value.value

    def plain(self: "SymbolTable") -> Dict[str, Any]:
        """Returns the entries sorted by identifier with plain Python
        values (ints and strs)."""
        return {identifier: self._entries[identifier].plain
                for identifier in sorted(self._entries)}


class Diagnostics:
    """Ordered record of the recoverable problems found while building one
    symbol table."""

    def __init__(self: "Diagnostics",
                 entries: Optional[Iterable[Diagnostic]] = None) -> None:
        self.entries: List[Diagnostic] = list(entries or [])

    def append(self: "Diagnostics", diagnostic: Diagnostic) -> None:
        LOGGER.debug("%s", diagnostic)
        self.entries.append(diagnostic)

    def extend(self: "Diagnostics", diagnostics: "Diagnostics") -> None:
        self.entries.extend(diagnostics)

    def sort(self: "Diagnostics") -> None:
        """Orders the entries by line number, keeping the order of entries
        for the same line."""
        self.entries.sort(key=attrgetter("line_number"))

    def counts(self: "Diagnostics") -> Counter:
        return Counter(diagnostic.kind for diagnostic in self.entries)

    def without(self: "Diagnostics", identifiers: Iterable[str]) -> "Diagnostics":
        identifiers = set(identifiers)
        return Diagnostics(diagnostic for diagnostic in self.entries
                           if diagnostic.identifier not in identifiers)

    def __iter__(self: "Diagnostics") -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self: "Diagnostics") -> int:
        return len(self.entries)

    def __repr__(self: "Diagnostics") -> str:
        return f"{self.__class__.__name__}({self.entries!r})"


def parse_definition(line: str, line_number: int) -> Optional[RawDefinition]:
    """Splits a `#define IDENTIFIER VALUE` line. Anything after the value
    token (e.g. a trailing comment) is ignored. Returns None for lines of any
    other shape, such as value-less guards and function-like macros."""
    match = DEFINE_PATTERN.match(line)
    if match is None:
        return None
    identifier, value_text = match.groups()
    return RawDefinition(line_number, identifier, value_text)


def collect_definitions(lines: Iterable[str],
                        line_numbers: Optional[Iterable[int]] = None) \
        -> Tuple[Dict[str, Value], Dict[str, PendingAlias], Diagnostics]:
    """First pass: classifies every definition. Literal values are returned
    in the direct map and identifier references in the pending map. A later
    definition of an identifier supersedes an earlier one of either kind, as
    the last #define wins. A later definition that cannot be used never
    discards the earlier one: an unrecognized value is skipped, and an alias
    keeps what it replaced in case its target is undefined.

    line_numbers gives the position of each line in its header; by default
    the lines are numbered from 1."""

    if line_numbers is None:
        line_numbers = count(1)

    direct: Dict[str, Value] = {}
    pending: Dict[str, PendingAlias] = {}
    diagnostics = Diagnostics()

    for line_number, line in zip(line_numbers, lines):
        line = line.rstrip("\r\n")
        definition = parse_definition(line, line_number)
        if definition is None:
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.UNMATCHED_LINE,
                line_number=line_number,
                text=line))
            continue

        identifier = definition.identifier
        classification = classify(definition.value_text)

        if isinstance(classification, Unrecognized):
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.UNRECOGNIZED_VALUE,
                line_number=line_number,
                identifier=identifier,
                text=definition.value_text,
                reason=classification.reason))
        elif isinstance(classification, IdentifierRef):
            previous = direct.pop(identifier, None)
            if previous is None:
                previous = pending.pop(identifier, None)
            pending[identifier] = PendingAlias(line_number, identifier,
                                               classification.identifier,
                                               previous)
        else:
            pending.pop(identifier, None)
            direct[identifier] = classification

    return direct, pending, diagnostics


def resolve_aliases(direct: Mapping[str, Value],
                    pending: Mapping[str, PendingAlias]) \
        -> Tuple[SymbolTable, Diagnostics]:
    """Second pass: resolves each pending alias against the direct values
    only, so an alias of an alias is not resolved. An unresolved alias is
    reported, and its identifier keeps the value it had before the alias or
    is left out if it had none. The direct map is left untouched, which makes
    this pass safe to repeat."""

    table = SymbolTable(direct)
    diagnostics = Diagnostics()

    for alias in sorted(pending.values(), key=lambda alias: alias.line_number):
        if alias.target in direct:
            table[alias.identifier] = direct[alias.target]
        else:
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.UNRESOLVED_ALIAS,
                line_number=alias.line_number,
                identifier=alias.identifier,
                target=alias.target))
            fallback = alias.fallback(direct)
            if fallback is not None:
                table[alias.identifier] = fallback

    return table, diagnostics


def build(lines: Iterable[str],
          line_numbers: Optional[Iterable[int]] = None) \
        -> Tuple[SymbolTable, Diagnostics]:
    """Builds the symbol table for the `#define` lines of one header.

    Parameters:
        lines: raw header lines, in file order.
        line_numbers: position of each line in the header. Defaults to
                      numbering the lines from 1.

    Returns:
        The resolved symbol table, and the diagnostics of both passes in line
        order."""

    direct, pending, diagnostics = collect_definitions(lines, line_numbers)
    table, alias_diagnostics = resolve_aliases(direct, pending)
    diagnostics.extend(alias_diagnostics)
    diagnostics.sort()
    return table, diagnostics
