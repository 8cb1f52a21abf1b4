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
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from cerberus import Validator

from xtensa_config.common.chips import Chip
from xtensa_config.common.types import ConfigError

LOGGER = logging.getLogger()

FORMATS = ("text", "yaml", "python")

CONFIG_SCHEMA = {
    "overlays_root": {
        "type": "string",
        "empty": False,
    },
    "header_path": {
        "type": "string",
        "empty": False,
    },
    "chips": {
        "type": "list",
        "schema": {
            "type": "string",
            "allowed": Chip.names(),
        },
    },
    "format": {
        "type": "string",
        "allowed": FORMATS,
    },
}


def validate_config(config: Dict[str, Any]) -> None:
    config_validator = Validator(CONFIG_SCHEMA)
    if not config_validator.validate(config):
        error_message = \
            f"Validation failed for config: {config_validator.errors}"
        raise ConfigError(error_message)


def load_config(config_path: Optional[Union[str, Path]]) -> Dict[str, Any]:
    if config_path is None:
        return {}

    if not isinstance(config_path, Path):
        config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"File not found: {config_path}")

    with open(config_path, "rt") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ConfigError(f"Expected a mapping at the top of {config_path}")

    try:
        validate_config(config)
    except ConfigError as error:
        error_message = \
            f"Validation failed for {config_path}"
        raise ConfigError(error_message) from error

    overlays_root = config.get("overlays_root")
    if overlays_root is not None and not Path(overlays_root).is_absolute():
        config["overlays_root"] = str(config_path.parent / overlays_root)

    LOGGER.debug("Loaded config from %s: %s", config_path, config)
    return config
