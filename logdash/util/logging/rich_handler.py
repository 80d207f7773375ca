# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from __future__ import annotations

from typing import TYPE_CHECKING, override

from rich.console import Console, ConsoleRenderable
from rich.logging import RichHandler
from rich.text import Text


if TYPE_CHECKING:
    import logging

    from rich.traceback import Traceback


class CustomRichHandler(RichHandler):
    """Compact rich handler printing ``[L:logger] message`` lines to stderr."""

    def __init__(
        self,
        *args,
        level_width: int = 1,
        level_color_everything: bool = True,
        level_prefix: str = "[",
        level_suffix: str = "] ",
        show_name: bool = True,
        **kwargs,
    ) -> None:
        kwargs.setdefault("console", Console(stderr=True))
        kwargs.setdefault("rich_tracebacks", True)
        kwargs.setdefault("show_time", False)
        kwargs.setdefault("show_path", False)
        kwargs.setdefault("enable_link_path", False)
        super().__init__(*args, **kwargs)

        self.level_width = level_width
        self.level_color_everything = level_color_everything
        self.show_name = show_name
        self.level_prefix = level_prefix
        self.level_suffix = level_suffix

    def should_format(self, record: logging.LogRecord) -> bool:
        return not getattr(record, "simple", False)

    def get_level_style(self, record: logging.LogRecord) -> str:
        return f"logging.level.{record.levelname.lower()}"

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        text = Text()

        if self.should_format(record):
            text.append(self.level_prefix, style="dim")
            text.append(record.levelname[0].ljust(self.level_width), style=self.get_level_style(record))
            if self.show_name:
                text.append(f":{record.name}", style="dim")
            text.append(self.level_suffix, style="dim")

        style = self.get_level_style(record) if self.level_color_everything else "log.message"
        text.append(message, style=style)
        return text

    @override
    def render(self, *, record: logging.LogRecord, traceback: Traceback | None, message_renderable: ConsoleRenderable) -> ConsoleRenderable:
        if not self.should_format(record) or traceback is None:
            return message_renderable
        return super().render(record=record, traceback=traceback, message_renderable=message_renderable)
