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
from typing import Any, Dict, Optional, Sequence

import click

from xtensa_config.common.chips import Chip
from xtensa_config.common.types import ConfigError
from xtensa_config.utils.config_utils import load_config
from xtensa_config.utils.log_utils import LogLevel

LOGGER = logging.getLogger()


def collect_log_level(ctx: click.Context,
                      option: click.Option,
                      log_level: str) -> int:
    log_level = LogLevel[log_level]
    return log_level.value


def collect_config(ctx: click.Context,
                   option: click.Option,
                   config_path: Optional[str]) -> Dict[str, Any]:
    try:
        return load_config(config_path)
    except ConfigError as error:
        raise click.BadParameter(str(error), ctx=ctx, param=option) from error


def collect_chips(ctx: click.Context,
                  option: click.Option,
                  chip_names: Sequence[str]) -> Sequence[Chip]:
    return Chip.parse_all(chip_names)


class DefaultHelp(click.Command):

    def __init__(self, *args, **kwargs):
        context_settings = kwargs.setdefault('context_settings', {})
        if 'help_option_names' not in context_settings:
            context_settings['help_option_names'] = ['-h', '--help']
        self.help_flag = context_settings['help_option_names'][0]
        super().__init__(*args, **kwargs)

    def parse_args(self, ctx, args):
        if not args:
            args = [self.help_flag]
        return super().parse_args(ctx, args)
