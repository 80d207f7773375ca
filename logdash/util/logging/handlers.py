# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

import logging

from pathlib import Path
from typing import override


class HandlerFilter(logging.Filter):
    """Drop records addressed to a different handler through ``extra={'handler': ...}``."""

    def __init__(self, handler_name: str) -> None:
        super().__init__()
        self.handler_name = handler_name

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        record_handler = getattr(record, "handler", None)
        return record_handler is None or record_handler == self.handler_name


class ConditionalFormatter(logging.Formatter):
    """Format normally, unless the record asks to be printed verbatim with ``extra={'simple': True}``."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "simple", False):
            return record.getMessage()
        return super().format(record)


FILE_FORMAT = "%(asctime)s [%(levelname)s:%(name)s] %(message)s"
TTY_FORMAT = "[%(levelname).1s:%(name)s] %(message)s"


class DebugFileHandler(logging.FileHandler):
    """Append every record, down to DEBUG, to a user supplied file."""

    def __init__(self, path: Path | str) -> None:
        path = Path(path).expanduser()
        if not path.parent.exists():
            path.parent.mkdir(parents=True)

        super().__init__(path, mode="a", encoding="UTF-8")
        self.setLevel(logging.DEBUG)
        self.setFormatter(ConditionalFormatter(FILE_FORMAT))
        self.addFilter(HandlerFilter("file"))
