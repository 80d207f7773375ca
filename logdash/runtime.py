# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Startup sequence: turns the command line and configuration files into a frozen :class:`Configuration`."""

from __future__ import annotations

import sys

from collections.abc import Sequence
from typing import TYPE_CHECKING, TextIO

from .config import ConfigFileData, ConfigFileError, ConfigFileLoader, ConfigurationStore
from .features import Feature
from .options import EXIT_FAILURE, DefaultOptionCatalog, GrammarEngine, OptionsExit, PreScanPhase, PrimaryParsePhase
from .util.helpers import script_info
from .util.logging.manager import LoggingManager
from .util.mixins import LoggableMixin


if TYPE_CHECKING:
    from .config import Configuration
    from .options import OptionCatalogBase, PreScanResult


class Runtime(LoggableMixin):
    def __init__(
        self,
        argv: Sequence[str] | None = None,
        *,
        features: Feature | None = None,
        loader: ConfigFileLoader | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.argv = tuple(sys.argv[1:] if argv is None else argv)
        self.features = Feature.from_env() if features is None else features
        self.loader = ConfigFileLoader() if loader is None else loader
        self.stdout = stdout

        self.catalog: OptionCatalogBase = DefaultOptionCatalog(self.features)
        self.store = ConfigurationStore(self.features)
        self.config: Configuration | None = None

    # MARK: Phases
    def prescan(self, engine: GrammarEngine) -> PreScanResult:
        return PreScanPhase(engine, stdout=self.stdout).run()

    def load_config_file(self, prescan: PreScanResult) -> ConfigFileData:
        try:
            path = self.loader.locate(prescan)
            if path is None:
                return ConfigFileData(None)
            return self.loader.open(path)
        except ConfigFileError as err:
            self.log.error("%s", err)  # noqa: TRY400 the message is the whole story
            raise OptionsExit(EXIT_FAILURE, str(err)) from err

    def initialize_logging(self, data: ConfigFileData) -> None:
        # The test session owns the logging manager
        if script_info.is_unit_test():
            return

        manager = LoggingManager()
        if not manager.initialized:
            manager.initialize(data.logging)

    def parse(self, engine: GrammarEngine) -> ConfigurationStore:
        return PrimaryParsePhase(engine, self.store, features=self.features, stdout=self.stdout).run()

    # MARK: Run
    def run(self) -> Configuration:
        """Run both parse phases and return the frozen configuration.

        Raises:
            OptionsExit: When the process must end (help, version, storage display, or any parse error).

        """
        if self.config is not None:
            return self.config

        engine = GrammarEngine(self.catalog, self.argv)
        prescan = self.prescan(engine)

        data = self.load_config_file(prescan)
        self.initialize_logging(data)

        # Configuration file options come first, so the command line overrides them
        if data.tokens:
            self.log.debug("Applying %d option(s) from %s", len(data.tokens), data.path)
            self.parse(GrammarEngine(self.catalog, data.tokens, prog=str(data.path)))
        self.parse(engine)

        self.store.load_global_config = prescan.load_global_config
        self.store.config_file = prescan.config_file_path

        self.config = self.store.freeze()
        self.log.debug("Configuration: %s", self.config.non_default_fields())
        return self.config
