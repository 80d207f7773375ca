# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Logging configuration and utilities for logdash.

Configures file and TTY logging, log levels, the debug log file and custom handlers.
"""

from __future__ import annotations

import logging
import pathlib
import re
import sys

from typing import TYPE_CHECKING, Any, ClassVar, Self
from typing import cast as typing_cast

from ..helpers import script_info
from .config import LoggingConfig
from .handlers import FILE_FORMAT, TTY_FORMAT, ConditionalFormatter, DebugFileHandler, HandlerFilter


if TYPE_CHECKING:
    from types import TracebackType

    from .levels import LoggingLevel


######
# MARK: Constants

# Log file name
LOG_FILE_NAME: str = f"{script_info.get_script_name()}.log"


######
# MARK: Uncaught exceptions
def log_uncaught_exception(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_traceback: TracebackType | None,
) -> None:
    """``sys.excepthook`` that sends uncaught exceptions through logging, so they also reach the log files."""
    if issubclass(exc_type, (KeyboardInterrupt, SystemExit)):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logging.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))  # noqa: LOG015 the root logger is the only one guaranteed to exist


######
# MARK: Logging Manager
class LoggingManager:
    _instance: ClassVar[LoggingManager | None] = None

    initialized: bool
    fh: logging.Handler | None
    ch: logging.Handler | None
    dh: DebugFileHandler | None

    def __new__(cls, *args, **kwargs) -> Self:
        if (instance := cls._instance) is None:
            instance = cls._instance = super().__new__(cls, *args, **kwargs)
            instance.initialized = False
            instance.fh = None
            instance.ch = None
            instance.dh = None
        return typing_cast("Self", instance)

    def __init__(self) -> None:
        pass

    def initialize(self, config: LoggingConfig | dict[str, Any] | None = None) -> None:
        if config is None:
            config = LoggingConfig()
        elif not isinstance(config, LoggingConfig):
            config = LoggingConfig.model_validate(config)

        if self.initialized:
            msg = f"Must not initialise {type(self).__name__} twice"
            raise RuntimeError(msg)
        self.initialized = True

        self.config = config
        self.log_file_path = config.dir / LOG_FILE_NAME

        self._configure_root_logger()
        self._configure_file_handler()
        self._configure_tty_handler()
        self._configure_exception_handler()
        self._configure_custom_logger_levels()

    def _configure_root_logger(self) -> None:
        logging.captureWarnings(capture=True)
        logging.root.setLevel(self.config.levels.root.value)

    def _configure_file_handler(self) -> None:
        self.fh = None
        if not self.config.levels.file.enabled:
            return

        log_dir_path = pathlib.Path(self.log_file_path).parent
        if not log_dir_path.exists():
            log_dir_path.mkdir(parents=True)

        self.fh = logging.FileHandler(self.log_file_path, mode="w")
        self.fh.setLevel(self.config.levels.file.value)
        self.fh.setFormatter(ConditionalFormatter(FILE_FORMAT))
        self.fh.addFilter(HandlerFilter("file"))
        logging.root.addHandler(self.fh)

    def _configure_tty_handler(self) -> None:
        self.ch = None
        if not self.config.levels.tty.enabled:
            return

        if self.config.rich:
            from .rich_handler import CustomRichHandler

            self.ch = CustomRichHandler()
        else:
            self.ch = logging.StreamHandler(sys.stderr)
            self.ch.setFormatter(ConditionalFormatter(TTY_FORMAT))

        self.ch.setLevel(self.config.levels.tty.value)
        self.ch.addFilter(HandlerFilter("tty"))

        # pytest captures log records by itself
        if not script_info.is_unit_test():
            logging.root.addHandler(self.ch)

    def _configure_exception_handler(self) -> None:
        if self.config.rich and not script_info.is_unit_test():
            from rich.traceback import install

            install(extra_lines=1, code_width=160, width=200, word_wrap=False)
        else:
            sys.excepthook = log_uncaught_exception

    def open_debug_file(self, path: pathlib.Path | str) -> DebugFileHandler:
        """Send every debug message to ``path``, replacing a previously opened debug file."""
        self.close_debug_file()

        self.dh = DebugFileHandler(path)
        logging.root.addHandler(self.dh)

        # Handlers keep their own levels, so loggers can let everything through
        if logging.root.level > logging.DEBUG:
            logging.root.setLevel(logging.DEBUG)
        for logger_name in list(logging.root.manager.loggerDict):
            logger = logging.getLogger(logger_name)
            if logger.level > logging.DEBUG:
                logger.setLevel(logging.DEBUG)
        return self.dh

    def close_debug_file(self) -> None:
        if self.dh is None:
            return
        logging.root.removeHandler(self.dh)
        self.dh.close()
        self.dh = None

    def apply_logging_level(self, logger: logging.Logger) -> None:
        # Do nothing if logger already has an explicit level set
        if logger.level != logging.NOTSET:
            return

        if self.dh is not None:
            logger.setLevel(logging.DEBUG)
            return

        # Apply the most specific matching custom level, or default if none match
        level: LoggingLevel = self.config.levels.default
        pattern_len = 0

        for _pattern, _level in self.config.levels.custom.items():
            assert isinstance(_pattern, re.Pattern), f"Custom logging levels keys must be compiled regex patterns, got {type(_pattern)}"
            if (match := _pattern.match(logger.name)) is not None:
                _pattern_len = len(match.group(0))
                if pattern_len < _pattern_len:
                    level = _level
                    pattern_len = _pattern_len

        if level == logging.NOTSET:
            return

        logger.setLevel(level.value if level.enabled else logging.CRITICAL + 1)

    def _configure_custom_logger_levels(self) -> None:
        for logger_name in list(logging.root.manager.loggerDict):
            logger = logging.getLogger(logger_name)
            self.apply_logging_level(logger)
