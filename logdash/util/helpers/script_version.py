# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Version string shown by ``--version`` and in the help header.

The attributes of the :class:`ScriptVersion` singleton are also readable as module attributes, e.g.
``script_version.version_string``.
"""

from __future__ import annotations

import importlib.metadata
import os
import subprocess
import tomllib

from functools import cached_property
from typing import ClassVar, Self, override

from .script_info import get_script_home, get_script_name


GIT_ABBREV = 9
UNKNOWN_VERSION = "unknown"


class ScriptVersion:
    _instance: ClassVar[ScriptVersion | None] = None

    def __new__(cls) -> Self:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance  # pyright: ignore[reportReturnType]

    @staticmethod
    def _git(*args: str) -> str | None:
        # Run with a fixed locale and nothing else from the environment
        env = {key: os.environ[key] for key in ("PATH", "SYSTEMROOT") if key in os.environ}
        env.update(LANG="C", LANGUAGE="C", LC_ALL="C")

        try:
            result = subprocess.run(["git", *args], capture_output=True, env=env, cwd=get_script_home(), check=False)  # noqa: S603, S607
        except OSError:
            return None
        if result.returncode != 0 or result.stderr:
            return None
        return result.stdout.decode("ascii", errors="replace").strip() or None

    @cached_property
    def git_revision(self) -> str | None:
        """Abbreviated commit hash of the source checkout, or ``None`` outside of one."""
        return self._git("describe", "--exclude", "*", "--always", "--broken", "--dirty", f"--abbrev={GIT_ABBREV}")

    @cached_property
    def version(self) -> str:
        """Installed distribution version, falling back to ``pyproject.toml`` for a source checkout."""
        try:
            return importlib.metadata.version(get_script_name())
        except importlib.metadata.PackageNotFoundError:
            pass

        try:
            with (get_script_home() / "pyproject.toml").open("rb") as f:
                return str(tomllib.load(f)["project"]["version"])
        except (OSError, KeyError, tomllib.TOMLDecodeError):
            return UNKNOWN_VERSION

    @cached_property
    def version_string(self) -> str:
        revision = self.git_revision
        return f"{self.version}-{revision}" if revision else self.version

    @override
    def __str__(self) -> str:
        return self.version_string

    @override
    def __repr__(self) -> str:
        return f"<ScriptVersion: {self!s}>"


def __getattr__(key: str) -> str:
    value = getattr(ScriptVersion(), key, None)
    if not isinstance(value, str):
        msg = f"module {__name__!r} has no attribute {key!r}"
        raise AttributeError(msg)
    return value
