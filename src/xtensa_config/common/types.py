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

from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Type, Union

from xtensa_config.common.constants import INT64_MAX, INT64_MIN


class XtensaConfigError(RuntimeError):
    """Top-level error class for failures that abort processing a chip (or
    the whole run)."""


class HeaderSourceError(XtensaConfigError):
    """Raised when the core-isa.h header for a chip cannot be located or
    read."""


class DerivedValueError(XtensaConfigError):
    """Raised when a derived value cannot be computed because one of its
    inputs is missing from the symbol table or has the wrong type."""


class ConfigError(XtensaConfigError):
    """Raised when a YAML configuration file is missing or fails
    validation."""


class TokenEnum(Enum):

    @classmethod
    def names(cls: Type["TokenEnum"]) -> Sequence[str]:
        return [enumerated.name for enumerated in cls]

    @classmethod
    def value_map(cls: Type["TokenEnum"]) -> Dict[str, "TokenEnum"]:
        """Returns a mapping of token values to their enumerated members."""
        return OrderedDict((enumerated.value, enumerated)
                           for enumerated in cls)


class InterruptType(TokenEnum):
    """Electrical/triggering behavior of an interrupt line, as spelled by the
    XTHAL_* tokens of core-isa.h."""

    EXTERN_EDGE: str = "XTHAL_INTTYPE_EXTERN_EDGE"
    EXTERN_LEVEL: str = "XTHAL_INTTYPE_EXTERN_LEVEL"
    NMI: str = "XTHAL_INTTYPE_NMI"
    PROFILING: str = "XTHAL_INTTYPE_PROFILING"
    SOFTWARE: str = "XTHAL_INTTYPE_SOFTWARE"
    TIMER: str = "XTHAL_INTTYPE_TIMER"
    TIMER_UNCONFIGURED: str = "XTHAL_TIMER_UNCONFIGURED"


@dataclass(frozen=True)
class IntegerValue:
    """A decimal or hexadecimal integer literal, within the signed 64-bit
    range."""

    value: int

    def __post_init__(self: "IntegerValue") -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(
                f"Integer out of signed 64-bit range: {self.value}")

    @property
    def plain(self: "IntegerValue") -> int:
        return self.value


@dataclass(frozen=True)
class InterruptValue:
    kind: InterruptType

    @property
    def plain(self: "InterruptValue") -> str:
        return self.kind.value


@dataclass(frozen=True)
class TextValue:
    """A double-quoted string literal with its quotes removed."""

    text: str

    @property
    def plain(self: "TextValue") -> str:
        return self.text


Value = Union[IntegerValue, InterruptValue, TextValue]


@dataclass(frozen=True)
class IdentifierRef:
    """The right-hand side names another macro. Never stored in a symbol
    table; it is either resolved to the target's value or dropped."""

    identifier: str


@dataclass(frozen=True)
class Unrecognized:
    text: str
    reason: str = "unrecognized literal"


Classification = Union[IntegerValue, InterruptValue, TextValue,
                       IdentifierRef, Unrecognized]


class DiagnosticKind(TokenEnum):
    UNMATCHED_LINE: str = "unmatched line"
    UNRECOGNIZED_VALUE: str = "unrecognized value"
    UNRESOLVED_ALIAS: str = "unresolved alias"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem found while building a symbol table.

    Parameters:
        kind: which class of problem this is.
        line_number: 1-based position of the offending line in its header
                     (or among the lines handed to the builder when no
                     positions are given).
        identifier: the macro being defined, if the line could be split.
        text: the raw line (UNMATCHED_LINE) or raw value text (otherwise).
        target: the identifier an unresolved alias refers to.
        reason: classifier detail for UNRECOGNIZED_VALUE."""

    kind: DiagnosticKind
    line_number: int
    identifier: Optional[str] = None
    text: Optional[str] = None
    target: Optional[str] = None
    reason: Optional[str] = None

    def __str__(self: "Diagnostic") -> str:
        if self.kind is DiagnosticKind.UNMATCHED_LINE:
            return f"Define not matched (line {self.line_number}): {self.text}"
        if self.kind is DiagnosticKind.UNRESOLVED_ALIAS:
            return (f"Unable to resolve alias (line {self.line_number}): "
                    f"{self.identifier} = {self.target}")
        return (f"Unable to process definition (line {self.line_number}, "
                f"{self.reason}): {self.identifier} = {self.text}")
