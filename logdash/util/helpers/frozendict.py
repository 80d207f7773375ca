# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Pydantic and rich support for :class:`frozendict.frozendict`.

``FrozenDict[K, V]`` validates like ``Mapping[K, V]``, stores the result as a ``frozendict`` and serializes back to a
plain ``dict``:

>>> from pydantic import TypeAdapter
>>> adapter = TypeAdapter(FrozenDict[str, int])
>>> value = adapter.validate_python({"lcnum": "1024"})
>>> isinstance(value, frozendict)
True
>>> dict(value)
{'lcnum': 1024}
>>> adapter.dump_python(value)
{'lcnum': 1024}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Annotated, Any, TypeVar

from frozendict import frozendict
from pydantic import AfterValidator, PlainSerializer


if TYPE_CHECKING:
    import rich.repr


def _freeze(value: Mapping[Any, Any]) -> frozendict:
    return frozendict(value)


def _thaw(value: Mapping[Any, Any]) -> dict[Any, Any]:
    return dict(value)


_K = TypeVar("_K")
_V = TypeVar("_V")

FrozenDict = Annotated[Mapping[_K, _V], AfterValidator(_freeze), PlainSerializer(_thaw)]


def _rich_repr(self: frozendict) -> rich.repr.Result:
    for key, value in self.items():
        yield getattr(key, "pattern", str(key)), value


frozendict.__rich_repr__ = _rich_repr  # pyright: ignore[reportAttributeAccessIssue]
