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
import sys
from pathlib import Path

import click

from xtensa_config.common.chips import Chip
from xtensa_config.common.constants import DEFAULT_HEADER_PATH
from xtensa_config.header_sources import OverlayHeaderSource
from xtensa_config.pipeline import ChipResult, process_chips
from xtensa_config.renderers import FILE_EXTENSIONS, render
from xtensa_config.utils.config_utils import FORMATS
from xtensa_config.utils.log_utils import LogLevel, init_logger
from xtensa_config.utils.script_utils import (DefaultHelp, collect_chips,
                                              collect_config,
                                              collect_log_level)

SCRIPT_NAME = "xtensa-config"

LOGGER = logging.getLogger()


@click.command(cls=DefaultHelp)
@click.option("-o", "--overlays-dir", "overlays_dir",
              help="Path to the checkout of the Xtensa overlays, containing "
                   "one directory per chip overlay.",
              type=click.Path(exists=True, file_okay=False),
              required=False)
@click.option("--header-path", "header_path",
              help="Path of core-isa.h relative to each overlay directory. "
                   f"[Default: {DEFAULT_HEADER_PATH}]",
              required=False)
@click.option("-c", "--config", "config",
              help="Path to a YAML config providing defaults for the other "
                   "options.",
              type=click.Path(dir_okay=False),
              callback=collect_config,
              required=False)
@click.option("--chip", "chips",
              help="Chip to process. May be repeated. [Default: all chips]",
              type=click.Choice(Chip.names(), case_sensitive=False),
              multiple=True,
              callback=collect_chips)
@click.option("-f", "--format", "fmt",
              help="Output format. [Default: text]",
              type=click.Choice(FORMATS),
              required=False)
@click.option("-d", "--output-dir", "output_dir",
              help="Write one file per chip into this folder instead of "
                   "printing to stdout.",
              type=click.Path(file_okay=False),
              required=False)
@click.option("--log-level", "log_level",
              help="Specifies the verbosity of the diagnostics.",
              type=click.Choice(LogLevel.names()),
              default=LogLevel.DEFAULT.name,
              callback=collect_log_level,
              required=False)
def main(**kwargs):

    """Extracts the typed configuration of each Xtensa chip from its
    core-isa.h header.

    Example Usage:

        xtensa-config -o path/to/xtensa-overlays

        xtensa-config -o path/to/xtensa-overlays --chip ESP32S3 -f yaml

        xtensa-config -c xtensa-config.yaml -d generated/"""

    global LOGGER, SCRIPT_NAME
    log_file = init_logger(LOGGER, SCRIPT_NAME,
                           log_level=kwargs["log_level"])
    LOGGER.debug("Logging to %s", log_file)

    for arg, val in kwargs.items():
        LOGGER.debug("%s = %s", arg, val)

    config = kwargs["config"]

    overlays_dir = kwargs["overlays_dir"] or config.get("overlays_root")
    if overlays_dir is None:
        raise click.UsageError(
            "Either --overlays-dir or overlays_root in --config is required")

    header_path = kwargs["header_path"] \
        or config.get("header_path", DEFAULT_HEADER_PATH)
    fmt = kwargs["fmt"] or config.get("format", "text")

    chips = kwargs["chips"]
    if len(chips) == 0:
        chips = Chip.parse_all(config.get("chips", Chip.names()))

    output_dir = kwargs["output_dir"]
    if output_dir is not None:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    def consumer(result: ChipResult) -> None:
        nonlocal fmt, output_dir
        document = render(result, fmt)
        if output_dir is None:
            click.echo(document)
            return
        output_file = output_dir / \
            f"{result.chip.name.lower()}{FILE_EXTENSIONS[fmt]}"
        LOGGER.info("Writing %s ...", output_file)
        with open(output_file, "wt") as f:
            f.write(document)

    source = OverlayHeaderSource(overlays_dir, header_path)
    results = process_chips(chips, source, consumer)

    failures = [result for result in results if not result.succeeded]
    for result in failures:
        click.echo(f"{result.chip.name}: {result.error}", err=True)

    LOGGER.info("Done.")

    if len(failures) > 0:
        sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except Exception:
        LOGGER.exception("Failed to extract the Xtensa configuration")
        sys.exit(1)
