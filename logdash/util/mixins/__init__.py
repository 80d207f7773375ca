# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from .loggable import LoggableMixin


__all__ = [
    "LoggableMixin",
]
