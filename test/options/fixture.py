# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from collections.abc import Iterator

import pytest

from logdash.config import ConfigurationStore
from logdash.features import Feature
from logdash.options import DefaultOptionCatalog, GrammarEngine, OptionsExit, PreScanPhase, PreScanResult, PrimaryParsePhase


class OptionsFixture:
    def __init__(self, features: Feature | None = None) -> None:
        self.features = Feature.every() if features is None else features
        self.catalog = DefaultOptionCatalog(self.features)

    def engine(self, *argv: str) -> GrammarEngine:
        return GrammarEngine(self.catalog, argv)

    def store(self) -> ConfigurationStore:
        return ConfigurationStore(self.features)

    def prescan(self, *argv: str) -> PreScanResult:
        return PreScanPhase(self.engine(*argv)).run()

    def parse(self, *argv: str, store: ConfigurationStore | None = None) -> ConfigurationStore:
        """Run the pre-scan and the primary parse over the same engine, like the runtime does."""
        engine = self.engine(*argv)
        PreScanPhase(engine).run()
        return PrimaryParsePhase(engine, store if store is not None else self.store()).run()

    def exit_status(self, *argv: str, store: ConfigurationStore | None = None) -> int:
        """Parse ``argv``, which must end the process, and return the exit status."""
        with pytest.raises(OptionsExit) as info:
            self.parse(*argv, store=store)
        return info.value.status


@pytest.fixture
def options() -> Iterator[OptionsFixture]:
    yield OptionsFixture()


@pytest.fixture
def minimal_options() -> Iterator[OptionsFixture]:
    yield OptionsFixture(Feature.NONE)
