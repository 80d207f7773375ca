# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from .catalog import DefaultOptionCatalog, OptionCatalogBase, OptionCatalogError
from .descriptor import Arity, OptionDescriptor, OptionGroup, OptionTag
from .exit import EXIT_FAILURE, EXIT_SUCCESS, OptionsExit
from .grammar import BadToken, Exhausted, GrammarEngine, OptionMatch, ParseCursor
from .prescan import PreScanPhase, PreScanResult
from .primary import PrimaryParsePhase


__all__ = [
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "Arity",
    "BadToken",
    "DefaultOptionCatalog",
    "Exhausted",
    "GrammarEngine",
    "OptionCatalogBase",
    "OptionCatalogError",
    "OptionDescriptor",
    "OptionGroup",
    "OptionMatch",
    "OptionTag",
    "OptionsExit",
    "ParseCursor",
    "PreScanPhase",
    "PreScanResult",
    "PrimaryParsePhase",
]
