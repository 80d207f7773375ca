# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Optional capabilities that decide which option groups a catalog carries."""

from __future__ import annotations

import os

from collections.abc import Iterable
from enum import Flag, auto
from typing import Self

from .util.helpers.script_info import get_env_prefix


class Feature(Flag):
    NONE = 0
    GEOIP = auto()
    ON_DISK_DB = auto()
    ZLIB = auto()
    BZ2 = auto()
    DEBUG = auto()

    @classmethod
    def default(cls) -> Feature:
        return cls.GEOIP | cls.ON_DISK_DB | cls.ZLIB | cls.BZ2

    @classmethod
    def every(cls) -> Feature:
        result = cls.NONE
        for member in cls:
            result |= member
        return result

    @classmethod
    def from_names(cls, names: Iterable[str] | str) -> Self:
        """Build a feature set from names such as ``"geoip,on-disk-db"``, ``"all"`` or ``"none"``."""
        if isinstance(names, str):
            names = names.split(",")

        result = cls.NONE
        for name in names:
            key = name.strip().upper().replace("-", "_")
            if not key:
                continue
            if key == "ALL":
                result |= cls.every()
            elif key in cls.__members__:
                result |= cls.__members__[key]
            else:
                msg = f"Unknown feature '{name.strip()}', expected one of: {', '.join(m.name.lower() for m in cls if m.name)}"
                raise ValueError(msg)
        return result

    @classmethod
    def from_env(cls) -> Self:
        value = os.environ.get(f"{get_env_prefix()}_FEATURES")
        if value is None:
            return cls.default()
        return cls.from_names(value)

    @property
    def has_compression(self) -> bool:
        return bool(self & (Feature.ZLIB | Feature.BZ2))
