# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict


if TYPE_CHECKING:
    import rich.repr


class Defaulted:
    def __init__(self, attrs: list[str]) -> None:
        self.attrs = attrs

    def __repr__(self) -> str:
        return f"Defaulted({', '.join(self.attrs)})"


class BaseConfigModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    def non_default_fields(self) -> dict[str, Any]:
        """Return the fields whose value differs from the field default."""
        result = {}
        for attr, info in type(self).model_fields.items():
            value = getattr(self, attr)
            if info.default_factory is not None:
                default = info.default_factory()  # pyright: ignore[reportCallIssue]
            else:
                default = info.default
            if value != default:
                result[attr] = value
        return result

    def __rich_repr__(self) -> rich.repr.Result:
        changed = self.non_default_fields()
        defaulted = []
        for attr, info in type(self).model_fields.items():
            if info.repr is False:
                continue
            if attr not in changed:
                defaulted.append(attr)
                continue
            yield attr, changed[attr]
        if defaulted:
            yield Defaulted(defaulted)
