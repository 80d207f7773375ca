# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Text shown by ``--help``, ``--version`` and ``--storage``."""

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, TextIO

from ..features import Feature
from ..util.helpers import script_version
from ..util.helpers.script_info import get_script_name
from .descriptor import OptionGroup


if TYPE_CHECKING:
    from .catalog import OptionCatalogBase
    from .descriptor import OptionDescriptor


OPTION_COLUMN_WIDTH = 28
COPYRIGHT = "Copyright (C) 2025 GNU GPL'd, by Rui Pinheiro"

USAGE_HEADER = """\
Usage: {prog} [ options ... ] -f log_file [-c][-M][-H][-q][-d][...]
The following options can also be supplied to the command:
"""

USAGE_FOOTER = """\
Examples can be found by running `man {prog}`.

{prog} {copyright}
"""


def _option_column(descriptor: OptionDescriptor) -> str:
    text = f"--{descriptor.name}"
    if descriptor.takes_value:
        text += f"={descriptor.metavar or '<value>'}"
    if descriptor.short is not None:
        text = f"-{descriptor.short} {text}"
    return text


def format_option(descriptor: OptionDescriptor) -> str:
    """Format one option as an aligned help entry, wrapping continuation lines under the description."""
    column = _option_column(descriptor)
    lines = descriptor.help.splitlines() or [""]

    if len(column) >= OPTION_COLUMN_WIDTH:
        first = f"  {column} - {lines[0]}"
    else:
        first = f"  {column.ljust(OPTION_COLUMN_WIDTH)}- {lines[0]}"

    indent = " " * (OPTION_COLUMN_WIDTH + 4)
    return "\n".join([first, *(f"{indent}{line}" for line in lines[1:])])


def format_usage(catalog: OptionCatalogBase, prog: str | None = None) -> str:
    prog = prog or get_script_name()

    sections = [f"\n{prog} - {script_version.version_string}\n", USAGE_HEADER.format(prog=prog)]
    for group in OptionGroup:
        descriptors = [d for d in catalog if d.group is group]
        if not descriptors:
            continue
        entries = "\n".join(format_option(d) for d in descriptors)
        sections.append(f"{group.value}\n\n{entries}\n")
    sections.append(USAGE_FOOTER.format(prog=prog, copyright=COPYRIGHT))

    return "\n".join(sections)


def format_version(prog: str | None = None) -> str:
    prog = prog or get_script_name()
    return f"{prog} - {script_version.version_string}\n{prog} {COPYRIGHT}\n"


def format_storage(features: Feature) -> str:
    if features & Feature.ON_DISK_DB:
        return "Built using Tokyo Cabinet On-Disk B+ Tree.\n"
    return "Built using the default in-memory hash database.\n"


def render_usage(catalog: OptionCatalogBase, *, file: TextIO | None = None, prog: str | None = None) -> None:
    print(format_usage(catalog, prog=prog), file=file or sys.stdout)  # noqa: T201 user requested output


def render_version(*, file: TextIO | None = None, prog: str | None = None) -> None:
    print(format_version(prog=prog), end="", file=file or sys.stdout)  # noqa: T201 user requested output


def render_storage(features: Feature, *, file: TextIO | None = None) -> None:
    print(format_storage(features), end="", file=file or sys.stdout)  # noqa: T201 user requested output
