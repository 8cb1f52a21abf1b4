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

from pathlib import Path
from typing import Any, Dict, Sequence

import yaml

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from xtensa_config.common.types import (IntegerValue, InterruptValue,
                                        TextValue, Value)
from xtensa_config.pipeline import ChipResult
from xtensa_config.utils.path_utils import path_wrt_root


def describe_value(value: Value) -> str:
    if isinstance(value, IntegerValue):
        return f"Integer({value.value})"
    if isinstance(value, InterruptValue):
        return f"Interrupt({value.kind.name})"
    if isinstance(value, TextValue):
        return f"String({value.text!r})"
    raise TypeError(f"Unsupported value: {value!r}")


def python_literal(value: Value) -> str:
    if isinstance(value, IntegerValue):
        return str(value.value)
    if isinstance(value, InterruptValue):
        return f"InterruptType.{value.kind.name}"
    if isinstance(value, TextValue):
        return repr(value.text)
    raise TypeError(f"Unsupported value: {value!r}")


class TemplateAccessor(Environment):

    def __init__(self: "TemplateAccessor",
                 templates_path: Path,
                 *args: Sequence[Any],
                 **kwargs: Dict[str, Any]) -> None:
        opts = {
            "loader": FileSystemLoader(templates_path),
            "keep_trailing_newline": True,
            "trim_blocks": True,
            "lstrip_blocks": True,
            "undefined": StrictUndefined,
        }
        opts.update(kwargs)
        super().__init__(*args, **opts)
        self.filters["describe_value"] = describe_value
        self.filters["python_literal"] = python_literal

    def emit(self: "TemplateAccessor", template_path: str, **kwargs) -> str:
        template = self.get_template(template_path)
        return template.render(**kwargs)


class ConfigTemplateAccessor(TemplateAccessor):

    def __init__(self: "ConfigTemplateAccessor",
                 *args: Sequence[Any],
                 templates_path: Path = path_wrt_root("templates/xtensa_config"),
                 **kwargs: Dict[str, Any]) -> None:
        super().__init__(templates_path, *args, **kwargs)

    def emit_text(self: "ConfigTemplateAccessor", result: ChipResult) -> str:
        return self.emit("text.jinja",
                         chip=result.chip,
                         entries=sorted(result.table.items()),
                         diagnostics=result.diagnostics)

    def emit_python_module(self: "ConfigTemplateAccessor",
                           result: ChipResult) -> str:
        entries = sorted(result.table.items())
        uses_interrupts = any(isinstance(value, InterruptValue)
                              for _, value in entries)
        return self.emit("python_module.jinja",
                         chip=result.chip,
                         entries=entries,
                         uses_interrupts=uses_interrupts)


def emit_yaml(result: ChipResult) -> str:
    document = {
        "chip": result.chip.name,
        "overlay": result.chip.overlay,
        "config": result.table.plain(),
    }
    return yaml.safe_dump(document, sort_keys=False)


FILE_EXTENSIONS = {
    "text": ".txt",
    "yaml": ".yaml",
    "python": ".py",
}


def render(result: ChipResult, fmt: str = "text") -> str:
    """Renders the symbol table of a successfully processed chip.

    Parameters:
        result: a ChipResult whose table is set.
        fmt: one of `text` (human-readable dump), `yaml` (plain values) or
             `python` (a module of constants).

    Returns:
        The rendered document."""

    if not result.succeeded:
        raise ValueError(f"Cannot render failed chip: {result.chip.name}")

    if fmt == "yaml":
        return emit_yaml(result)

    template_accessor = ConfigTemplateAccessor()
    if fmt == "text":
        return template_accessor.emit_text(result)
    if fmt == "python":
        return template_accessor.emit_python_module(result)

    raise ValueError(f"Unsupported format: {fmt}")
