# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from .loader import ConfigFileData, ConfigFileError, ConfigFileLoader
from .models import Compression, Configuration, GeoIPMode
from .store import BoundedList, CapacityError, ConfigurationStore


__all__ = [
    "BoundedList",
    "CapacityError",
    "Compression",
    "ConfigFileData",
    "ConfigFileError",
    "ConfigFileLoader",
    "Configuration",
    "ConfigurationStore",
    "GeoIPMode",
]
