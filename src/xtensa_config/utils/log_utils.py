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
import os
from enum import IntEnum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Sequence, Type

from xtensa_config.utils.path_utils import user_tmp

APP_NAME = "xtensa-config"

LOG_DIR_VARIABLE = "XTENSA_CONFIG_LOG_DIR"

FILE_LOG_FORMAT = \
    "%(asctime)s [%(levelname)s] %(module)s:%(lineno)d: %(message)s"

CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"

KEPT_LOG_FILES = 10


class LogLevel(IntEnum):
    DEFAULT = logging.WARNING
    VERBOSE = logging.INFO
    DEBUG = logging.DEBUG

    @classmethod
    def names(cls: Type["LogLevel"]) -> Sequence[str]:
        return [log_level.name for log_level in cls]


class XtensaConfigHandler:
    """Marks the handlers installed by init_logger so a later call can
    replace them."""


class XtensaConfigFileHandler(XtensaConfigHandler, RotatingFileHandler):
    pass


class XtensaConfigStreamHandler(XtensaConfigHandler, logging.StreamHandler):
    pass


def log_dir_for(script_name: str) -> Path:
    """Directory holding the logs of script_name. The XTENSA_CONFIG_LOG_DIR
    environment variable, when set, replaces the per-user data directory."""
    if LOG_DIR_VARIABLE in os.environ:
        return Path(os.environ[LOG_DIR_VARIABLE]) / script_name
    return user_tmp() / APP_NAME / script_name


def remove_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if isinstance(handler, XtensaConfigHandler):
            logger.removeHandler(handler)
            handler.close()


def init_logger(logger: logging.Logger,
                script_name: str,
                log_level: int = LogLevel.DEFAULT.value,
                log_to_console: bool = True) -> Path:
    """Logs everything to a fresh file under log_dir_for(script_name), keeping
    the previous KEPT_LOG_FILES runs, and records at log_level or above to
    the console. Returns the path of the log file."""

    logging.captureWarnings(True)
    remove_handlers(logger)

    log_dir = log_dir_for(script_name)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"{script_name}.log"
    log_file_exists = log_file.exists()

    logger.setLevel(logging.DEBUG)

    file_handler = XtensaConfigFileHandler(log_file,
                                           backupCount=KEPT_LOG_FILES)
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)

    if log_file_exists:
        file_handler.doRollover()

    if log_to_console:
        console_handler = XtensaConfigStreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
        console_handler.setLevel(log_level)
        logger.addHandler(console_handler)

    return log_file
