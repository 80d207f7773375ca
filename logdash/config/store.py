# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Mutable configuration record filled in while options are parsed, then frozen."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, override

from ..features import Feature
from .models import LIST_CAPACITIES, Configuration, GeoIPMode


class CapacityError(OverflowError):
    pass


class BoundedList(Sequence[str]):
    """Ordered, append-only list with a fixed capacity.

    ``count`` is the next free index; appending past ``capacity`` raises :class:`CapacityError`.
    """

    def __init__(self, name: str, capacity: int) -> None:
        if capacity <= 0:
            msg = f"Capacity of '{name}' must be positive, got {capacity}"
            raise ValueError(msg)
        self.name = name
        self.capacity = capacity
        self._items: list[str] = []

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def full(self) -> bool:
        return self.count >= self.capacity

    def append(self, value: str) -> None:
        if self.full:
            msg = f"Too many values for '{self.name}': at most {self.capacity} are allowed"
            raise CapacityError(msg)
        self._items.append(value)

    @override
    def __getitem__(self, index: Any) -> Any:
        return self._items[index]

    @override
    def __len__(self) -> int:
        return len(self._items)

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoundedList):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # pyright: ignore[reportAssignmentType]

    @override
    def __repr__(self) -> str:
        return f"BoundedList({self.name}, {self._items!r}, capacity={self.capacity})"


class ConfigurationStore:
    """Settings accumulated during option parsing.

    Every field of :class:`Configuration` is an attribute, starting at its default value. The list fields are
    :class:`BoundedList` instances. :meth:`freeze` returns the immutable :class:`Configuration` and locks the store.
    """

    def __init__(self, features: Feature | None = None, capacities: dict[str, int] | None = None) -> None:
        self.__dict__["_frozen"] = False
        self.features = Feature.default() if features is None else features

        capacities = {**LIST_CAPACITIES, **(capacities or {})}
        for name, info in Configuration.model_fields.items():
            if name in capacities:
                setattr(self, name, BoundedList(name, capacities[name]))
            else:
                setattr(self, name, info.get_default(call_default_factory=True))

        if self.features & Feature.GEOIP:
            self.geo_db = GeoIPMode.MEMORY_CACHE

    @property
    def frozen(self) -> bool:
        return self._frozen

    def append(self, name: str, value: str) -> None:
        if self._frozen:
            msg = f"Configuration store is frozen, cannot append to '{name}'"
            raise AttributeError(msg)
        values = getattr(self, name)
        if not isinstance(values, BoundedList):
            msg = f"'{name}' is not a list setting"
            raise TypeError(msg)
        values.append(value)

    def add_static_file(self, extension: str) -> None:
        self.append("static_files", extension)
        self.static_file_max_len = max(self.static_file_max_len, len(extension))

    def as_dict(self) -> dict[str, Any]:
        result = {}
        for name in Configuration.model_fields:
            value = getattr(self, name)
            result[name] = tuple(value) if isinstance(value, BoundedList) else value
        return result

    def freeze(self) -> Configuration:
        config = Configuration.model_validate(self.as_dict())
        self.__dict__["_frozen"] = True
        return config

    @override
    def __setattr__(self, name: str, value: Any) -> None:
        if self._frozen:
            msg = f"Configuration store is frozen, cannot set '{name}'"
            raise AttributeError(msg)
        super().__setattr__(name, value)
