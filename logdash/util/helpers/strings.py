# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

r"""String conversion helpers used while interpreting command-line values.

Both helpers are lenient and never raise on malformed input.

>>> atoi("42")
42
>>> atoi("  -7 apples")
-7
>>> atoi("many")
0
>>> unescape(r"%d\/%b\/%Y")
'%d/%b/%Y'
>>> unescape(r"a\tb\n")
'a\tb\n'
"""

import re


ESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "f": "\f",
    "v": "\v",
    "a": "\a",
    "b": "\b",
}

_ATOI_PATTERN = re.compile(r"\s*([+-]?[0-9]+)", re.ASCII)


def atoi(value: str | None) -> int:
    """Convert the leading integer of ``value``, or return 0 if there is none."""
    if not value:
        return 0

    match = _ATOI_PATTERN.match(value)
    if match is None:
        return 0
    return int(match.group(1))


def unescape(value: str) -> str:
    """Replace backslash escape sequences with the characters they stand for.

    Known escapes are listed in :data:`ESCAPES`. Any other escaped character is
    kept without its backslash (so ``\\\\`` becomes a single backslash), and a
    trailing lone backslash is kept as is.
    """
    out: list[str] = []
    chars = iter(value)

    for char in chars:
        if char != "\\":
            out.append(char)
            continue

        escaped = next(chars, None)
        if escaped is None:
            out.append("\\")
            break
        out.append(ESCAPES.get(escaped, escaped))

    return "".join(out)
