# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from __future__ import annotations

import os
import pathlib

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import yaml


if TYPE_CHECKING:
    from io import IOBase


@runtime_checkable
class NamedYamlLoaderPathProtocol(Protocol):
    @property
    def name(self) -> str: ...


class IncludeLoader(yaml.SafeLoader):
    """SafeLoader understanding ``!include <file>`` and ``!env <VARIABLE>`` tags.

    Included paths are relative to the including file (or the working directory when reading a string).
    """

    def __init__(self, stream: IOBase | str, root: pathlib.Path | None = None) -> None:
        if root is None:
            if isinstance(stream, NamedYamlLoaderPathProtocol) and not isinstance(stream, str):
                root = pathlib.Path(stream.name).resolve().parent
            else:
                root = pathlib.Path.cwd()

        self._root: pathlib.Path = root

        super().__init__(stream)

    def include(self, node: yaml.Node) -> Any:
        filename = self._root / str(self.construct_scalar(node))  # pyright: ignore[reportArgumentType]
        filename = pathlib.Path(os.path.expandvars(filename)).expanduser()

        with filename.open(encoding="UTF-8") as f:
            return yaml.load(f, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader

    def env(self, node: yaml.Node) -> Any:
        name = str(self.construct_scalar(node))  # pyright: ignore[reportArgumentType]
        value = os.environ.get(name)
        if value is None:
            return None
        return yaml.load(value, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader


IncludeLoader.add_constructor("!include", IncludeLoader.include)
IncludeLoader.add_constructor("!env", IncludeLoader.env)
