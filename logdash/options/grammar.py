# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""GNU style short/long option scanner.

The engine decodes one option occurrence per :meth:`GrammarEngine.next` call and never interprets it:

- ``--name`` matches a long option by its exact name. ``--name=value`` supplies the value inline, otherwise a
  required value is taken from the following token.
- ``-abc`` is a cluster of short codes. When a code requires a value, the rest of the cluster is the value, or
  the following token if the cluster ends there.
- ``--`` ends option scanning. Every later token is positional.
- Any other token (including a lone ``-``) is positional. Scanning carries on past positionals, which are
  collected in :attr:`GrammarEngine.positionals`.
"""

from __future__ import annotations

import dataclasses
import sys

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, TextIO

from ..util.helpers.script_info import get_script_name
from ..util.mixins import LoggableMixin


if TYPE_CHECKING:
    from .catalog import OptionCatalogBase
    from .descriptor import OptionDescriptor, OptionTag


# MARK: Scan results
@dataclasses.dataclass(frozen=True, slots=True)
class OptionMatch:
    descriptor: OptionDescriptor
    value: str | None
    token: str

    @property
    def tag(self) -> OptionTag:
        return self.descriptor.tag


@dataclasses.dataclass(frozen=True, slots=True)
class BadToken:
    token: str
    reason: str


@dataclasses.dataclass(frozen=True, slots=True)
class Exhausted:
    positionals: tuple[str, ...]


type ScanResult = OptionMatch | BadToken | Exhausted


# MARK: Cursor
@dataclasses.dataclass(slots=True)
class ParseCursor:
    """Position of the scan within the argument list."""

    index: int = 0
    cluster: str = ""
    cluster_token: str = ""
    positionals: list[str] = dataclasses.field(default_factory=list)
    exhausted: bool = False


# MARK: Engine
class GrammarEngine(LoggableMixin):
    def __init__(
        self,
        catalog: OptionCatalogBase,
        argv: Sequence[str],
        *,
        prog: str | None = None,
        report_errors: bool = True,
        stderr: TextIO | None = None,
    ) -> None:
        self.catalog = catalog
        self.argv: tuple[str, ...] = tuple(argv)
        self.prog = prog or get_script_name()
        self.report_errors = report_errors
        self._stderr = stderr
        self.cursor = ParseCursor()

    def reset(self) -> None:
        """Move the cursor back to the first token, forgetting any collected positionals."""
        self.cursor = ParseCursor()

    @property
    def positionals(self) -> tuple[str, ...]:
        return tuple(self.cursor.positionals)

    @property
    def exhausted(self) -> bool:
        return self.cursor.exhausted

    def next(self) -> ScanResult:
        cursor = self.cursor

        if cursor.exhausted:
            return Exhausted(self.positionals)

        if cursor.cluster:
            return self._next_short()

        argv = self.argv
        while cursor.index < len(argv):
            token = argv[cursor.index]
            cursor.index += 1

            if token == "--":
                cursor.positionals.extend(argv[cursor.index :])
                cursor.index = len(argv)
                break

            if token.startswith("--"):
                return self._next_long(token)

            if token.startswith("-") and token != "-":
                cursor.cluster = token[1:]
                cursor.cluster_token = token
                return self._next_short()

            cursor.positionals.append(token)

        cursor.exhausted = True
        return Exhausted(self.positionals)

    def __iter__(self) -> Iterator[OptionMatch | BadToken]:
        while not isinstance(result := self.next(), Exhausted):
            yield result

    # MARK: Decoding
    def _take_next_token(self) -> str | None:
        cursor = self.cursor
        if cursor.index >= len(self.argv):
            return None
        value = self.argv[cursor.index]
        cursor.index += 1
        return value

    def _next_long(self, token: str) -> OptionMatch | BadToken:
        name, has_value, value = token[2:].partition("=")

        descriptor = self.catalog.by_name(name)
        if descriptor is None:
            return self._bad(token, f"unrecognized option '--{name}'")

        if not descriptor.takes_value:
            if has_value:
                return self._bad(token, f"option '--{name}' doesn't allow an argument")
            return OptionMatch(descriptor, None, token)

        if not has_value:
            next_value = self._take_next_token()
            if next_value is None:
                return self._bad(token, f"option '--{name}' requires an argument")
            value = next_value
        return OptionMatch(descriptor, value, token)

    def _next_short(self) -> OptionMatch | BadToken:
        cursor = self.cursor
        token = cursor.cluster_token
        char, rest = cursor.cluster[0], cursor.cluster[1:]
        cursor.cluster = ""

        descriptor = self.catalog.by_short(char)
        if descriptor is None:
            cursor.cluster = rest
            return self._bad(token, f"invalid option -- '{char}'")

        if not descriptor.takes_value:
            cursor.cluster = rest
            return OptionMatch(descriptor, None, token)

        value = rest or self._take_next_token()
        if value is None:
            return self._bad(token, f"option requires an argument -- '{char}'")
        return OptionMatch(descriptor, value, token)

    def _bad(self, token: str, reason: str) -> BadToken:
        self.log.debug("Rejected token %r: %s", token, reason)
        if self.report_errors:
            print(f"{self.prog}: {reason}", file=self._stderr or sys.stderr)  # noqa: T201 matches getopt diagnostics
        return BadToken(token, reason)
