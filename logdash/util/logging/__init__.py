# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

# Logger / getLogger
from .logger import Logger, getLogger


__all__ = [
    "Logger",
    "getLogger",
]
