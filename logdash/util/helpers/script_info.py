# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Facts about the running program: its name, install location and whether it runs under a test harness."""

import functools
import os
import pathlib


SCRIPT_NAME = "logdash"

# Values of UNIT_TEST that do not enable unit test mode
_FALSY = frozenset(("", "0", "false", "no", "off"))


@functools.cache
def is_unit_test() -> bool:
    """Whether the process runs under pytest, or with ``UNIT_TEST`` set to a true value."""
    if "PYTEST_VERSION" in os.environ:
        return True
    return os.environ.get("UNIT_TEST", "").strip().lower() not in _FALSY


def get_script_name() -> str:
    """Name used for the help text, diagnostics, log file and configuration file names.

    It does not follow ``argv[0]``, so diagnostics read the same however the program was started.
    """
    return SCRIPT_NAME


def get_env_prefix() -> str:
    """Prefix of the environment variables read by the program, e.g. ``LOGDASH_FEATURES``."""
    return get_script_name().upper().replace("-", "_")


def get_script_home() -> pathlib.Path:
    """Root of the source tree (or of the installed distribution)."""
    return pathlib.Path(__file__).resolve().parents[3]
