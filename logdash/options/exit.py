# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from typing import override


EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class OptionsExit(SystemExit):
    """Terminates option parsing, and the process unless caught, with ``status``."""

    def __init__(self, status: int, reason: str | None = None) -> None:
        super().__init__(status)
        self.status = status
        self.reason = reason

    @property
    def success(self) -> bool:
        return self.status == EXIT_SUCCESS

    @override
    def __str__(self) -> str:
        if self.reason:
            return f"exit status {self.status}: {self.reason}"
        return f"exit status {self.status}"
