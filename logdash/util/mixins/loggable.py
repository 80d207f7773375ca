# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from ..logging import Logger, getLogger


class LoggableMixin:
    """Mixin that adds a logger to a class.

    Provides a ``.log`` property named after the class, or after ``instance_name`` when the object has one.
    """

    __log: Logger | None = None

    @property
    def log(self) -> Logger:
        """Return a logger for the current object, creating it on first use."""
        log = self.__log
        if log is None:
            log = self.__log = getLogger(self.__log_name__)
        return log

    @property
    def __log_name__(self) -> str:
        name = getattr(self, "instance_name", None)
        if isinstance(name, str) and name:
            return name
        return type(self).__name__
