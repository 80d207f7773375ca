# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from .base_model import BaseConfigModel
from .yaml_loader import IncludeLoader


__all__ = [
    "BaseConfigModel",
    "IncludeLoader",
]
