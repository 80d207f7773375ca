# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from . import script_info, script_version
from .frozendict import FrozenDict
from .strings import atoi, unescape


__all__ = [
    "FrozenDict",
    "atoi",
    "script_info",
    "script_version",
    "unescape",
]
