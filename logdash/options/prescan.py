# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""First pass over the arguments, deciding which configuration file should be loaded."""

from __future__ import annotations

import dataclasses

from typing import TYPE_CHECKING, TextIO

from ..util.mixins import LoggableMixin
from .descriptor import OptionTag
from .exit import EXIT_FAILURE, OptionsExit
from .grammar import BadToken, Exhausted, OptionMatch
from .render import render_usage


if TYPE_CHECKING:
    from .grammar import GrammarEngine


@dataclasses.dataclass(frozen=True, slots=True)
class PreScanResult:
    load_global_config: bool = True
    config_file_path: str | None = None


class PreScanPhase(LoggableMixin):
    """Scan every argument, only looking at ``--config-file`` and ``--no-global-config``.

    Any other option is skipped. A bad token or a leftover positional argument ends the process with a failure
    status. On success the engine cursor is reset, so the primary parse can scan the same arguments again.
    """

    def __init__(self, engine: GrammarEngine, *, stdout: TextIO | None = None) -> None:
        self.engine = engine
        self.stdout = stdout

    def run(self) -> PreScanResult:
        load_global_config = True
        config_file_path = None

        while True:
            match self.engine.next():
                case OptionMatch(descriptor=descriptor, value=value) if descriptor.tag is OptionTag.CONFIG_FILE:
                    config_file_path = value
                case OptionMatch(descriptor=descriptor) if descriptor.tag is OptionTag.NO_GLOBAL_CONFIG:
                    load_global_config = False
                case OptionMatch():
                    pass
                case BadToken(token=token, reason=reason):
                    self.log.debug("Pre-scan stopped at %r", token)
                    raise OptionsExit(EXIT_FAILURE, reason)
                case Exhausted(positionals=positionals):
                    if positionals:
                        self.log.debug("Unexpected positional arguments: %s", positionals)
                        render_usage(self.engine.catalog, file=self.stdout)
                        raise OptionsExit(EXIT_FAILURE, f"unexpected argument '{positionals[0]}'")
                    break

        self.engine.reset()

        result = PreScanResult(load_global_config=load_global_config, config_file_path=config_file_path)
        self.log.debug("Pre-scan result: %s", result)
        return result
