# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Main entry point for the logdash CLI application.

Parses the command line and configuration files, and reports the resulting configuration.
"""

import sys

from collections.abc import Sequence

from .runtime import Runtime


def main(argv: Sequence[str] | None = None) -> int:
    runtime = Runtime(argv)
    config = runtime.run()

    runtime.log.info("Log file: %s", config.log_file or "<stdin>")
    for name, value in config.non_default_fields().items():
        runtime.log.info("  %s = %r", name, value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
