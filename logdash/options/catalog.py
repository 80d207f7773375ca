# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Option catalog: the registry of every option a build recognises.

Subclasses register their options in :meth:`OptionCatalogBase.initialize`; the catalog is sealed as soon as
that returns, and can only be read afterwards.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import TYPE_CHECKING, override

from frozendict import frozendict

from ..config.models import TC_BNUM, TC_DBPATH, TC_LCNUM, TC_LMEMB, TC_MMAP, TC_NCNUM, TC_NMEMB
from ..features import Feature
from .descriptor import Arity, OptionDescriptor, OptionGroup, OptionTag


if TYPE_CHECKING:
    from collections.abc import Iterator


class OptionCatalogError(ValueError):
    pass


class OptionCatalogBase(metaclass=ABCMeta):
    def __init__(self, features: Feature | None = None) -> None:
        self.features = Feature.default() if features is None else features

        self._sealed = False
        self._descriptors: list[OptionDescriptor] = []
        self._by_name: dict[str, OptionDescriptor] = {}
        self._by_short: dict[str, OptionDescriptor] = {}
        self._by_tag: dict[OptionTag, OptionDescriptor] = {}

        self.initialize()
        self.seal()

    @abstractmethod
    def initialize(self) -> None:
        raise NotImplementedError("Subclasses must implement the 'initialize' method.")

    def add(
        self,
        tag: OptionTag,
        short: str | None = None,
        *,
        arity: Arity = Arity.NONE,
        group: OptionGroup = OptionGroup.OTHER,
        metavar: str | None = None,
        help: str = "",  # noqa: A002 matches argparse
    ) -> OptionDescriptor:
        """Register an option.

        Args:
            tag: The option tag, whose value is the long option name.
            short: Optional single character short code.
            arity: Whether the option requires a value.
            group: Help text section the option is listed under.
            metavar: Value placeholder for the help text.
            help: Help text.

        Raises:
            OptionCatalogError: If the catalog is sealed, or the tag, long name or short code is already taken.

        """
        if self._sealed:
            msg = f"Cannot add option '--{tag.value}': the catalog is sealed"
            raise OptionCatalogError(msg)

        descriptor = OptionDescriptor(tag=tag, short=short, arity=arity, group=group, metavar=metavar, help=help)

        if descriptor.tag in self._by_tag or descriptor.name in self._by_name:
            msg = f"Option '--{descriptor.name}' is already registered"
            raise OptionCatalogError(msg)
        if descriptor.short is not None and descriptor.short in self._by_short:
            msg = f"Short option '-{descriptor.short}' is already used by '--{self._by_short[descriptor.short].name}'"
            raise OptionCatalogError(msg)

        self._descriptors.append(descriptor)
        self._by_tag[descriptor.tag] = descriptor
        self._by_name[descriptor.name] = descriptor
        if descriptor.short is not None:
            self._by_short[descriptor.short] = descriptor
        return descriptor

    def seal(self) -> None:
        if self._sealed:
            return
        self._sealed = True
        self._by_tag = frozendict(self._by_tag)
        self._by_name = frozendict(self._by_name)
        self._by_short = frozendict(self._by_short)

    @property
    def sealed(self) -> bool:
        return self._sealed

    # MARK: Lookup
    def by_name(self, name: str) -> OptionDescriptor | None:
        return self._by_name.get(name)

    def by_short(self, short: str) -> OptionDescriptor | None:
        return self._by_short.get(short)

    def get(self, tag: OptionTag) -> OptionDescriptor | None:
        return self._by_tag.get(tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._by_tag

    def __iter__(self) -> Iterator[OptionDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    @property
    def short_options(self) -> str:
        """The getopt style short option string, e.g. ``"f:e:p:o:acrmMhHqdsV"``."""
        return "".join(f"{d.short}{':' if d.takes_value else ''}" for d in self._descriptors if d.short is not None)

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}(features={self.features!r}, options={len(self)})"


class DefaultOptionCatalog(OptionCatalogBase):
    @override
    def initialize(self) -> None:
        self._add_format_options()
        self._add_ui_options()
        self._add_file_options()
        self._add_parse_options()
        if self.features & Feature.GEOIP:
            self._add_geoip_options()
        if self.features & Feature.ON_DISK_DB:
            self._add_on_disk_options()
        self._add_other_options()

    def _add_format_options(self) -> None:
        group = OptionGroup.FORMAT
        self.add(OptionTag.DATE_FORMAT, arity=Arity.REQUIRED, group=group, metavar="<dateformat>", help="Specify log date format.")
        self.add(OptionTag.LOG_FORMAT, arity=Arity.REQUIRED, group=group, metavar="<logformat>", help="Specify log format. Inner quotes need to\nbe escaped.")

    def _add_ui_options(self) -> None:
        group = OptionGroup.UI
        self.add(OptionTag.CONFIG_DIALOG, "c", group=group, help="Prompt log/date configuration window.")
        self.add(OptionTag.COLOR_SCHEME, arity=Arity.REQUIRED, group=group, metavar="<1|2>", help="Color schemes: 1 => Grey, 2 => Green.")
        self.add(OptionTag.NO_COLOR, group=group, help="Disable colored output.")

    def _add_file_options(self) -> None:
        group = OptionGroup.FILE
        self.add(OptionTag.LOG_FILE, "f", arity=Arity.REQUIRED, group=group, metavar="<filename>", help="Path to input log file.")
        self.add(OptionTag.CONFIG_FILE, "p", arity=Arity.REQUIRED, group=group, metavar="<filename>", help="Custom configuration file.")
        if self.features & Feature.DEBUG:
            self.add(
                OptionTag.DEBUG_FILE, "l", arity=Arity.REQUIRED, group=group, metavar="<filename>", help="Send all debug messages to the\nspecified file."
            )
        self.add(OptionTag.NO_GLOBAL_CONFIG, group=group, help="Don't load global configuration file.")

    def _add_parse_options(self) -> None:
        group = OptionGroup.PARSE
        self.add(OptionTag.AGENT_LIST, "a", group=group, help="Enable a list of user-agents by host.")
        self.add(OptionTag.WITH_OUTPUT_RESOLVER, "d", group=group, help="Enable IP resolver on HTML|JSON output.")
        self.add(
            OptionTag.EXCLUDE_IP,
            "e",
            arity=Arity.REQUIRED,
            group=group,
            metavar="<IP>",
            help="Exclude one or multiple IPv4/6, includes\nIP ranges. e.g., 192.168.0.1-192.168.0.10",
        )
        self.add(OptionTag.HTTP_PROTOCOL, "H", group=group, help="Include HTTP request protocol if found.")
        self.add(OptionTag.HTTP_METHOD, "M", group=group, help="Include HTTP request method if found.")
        self.add(OptionTag.WITH_MOUSE, "m", group=group, help="Enable mouse support on main dashboard.")
        self.add(OptionTag.OUTPUT_FORMAT, "o", arity=Arity.REQUIRED, group=group, metavar="csv|json", help="Output either a JSON or a CSV file.")
        self.add(OptionTag.NO_QUERY_STRING, "q", group=group, help="Ignore request's query string.")
        self.add(OptionTag.NO_TERM_RESOLVER, "r", group=group, help="Disable IP resolver on terminal output.")
        self.add(OptionTag.CODE_444_AS_404, group=group, help="Treat non-standard status code 444 as 404.")
        self.add(OptionTag.CLIENT_ERR_TO_UNIQUE_COUNT, group=group, help="Add 4xx client errors to the unique\nvisitors count.")
        self.add(OptionTag.IGNORE_CRAWLERS, group=group, help="Ignore crawlers.")
        self.add(
            OptionTag.IGNORE_REFERER,
            arity=Arity.REQUIRED,
            group=group,
            metavar="<needle>",
            help="Ignore a referer from being counted.\nWild cards are allowed. i.e., *.bing.com",
        )
        self.add(OptionTag.NO_PROGRESS, group=group, help="Disable progress metrics.")
        self.add(OptionTag.REAL_OS, group=group, help="Display real OS names. e.g, Windows XP,\nSnow Leopard.")
        self.add(
            OptionTag.SORT_VIEW,
            arity=Arity.REQUIRED,
            group=group,
            metavar="MOD,FIELD,ORDER",
            help="Sort panel on initial load. For example:\n--sort-view=VISITORS,BY_HITS,ASC\nSee manpage for a list of panels and fields.",
        )
        self.add(
            OptionTag.STATIC_FILE,
            arity=Arity.REQUIRED,
            group=group,
            metavar="<extension>",
            help="Add static file extension. e.g.: .mp3\nExtensions are case sensitive.",
        )

    def _add_geoip_options(self) -> None:
        group = OptionGroup.GEOIP
        self.add(OptionTag.STD_GEOIP, "g", group=group, help="Standard GeoIP database for less memory\nusage.")
        self.add(
            OptionTag.GEOIP_CITY_DATA,
            arity=Arity.REQUIRED,
            group=group,
            metavar="<path>",
            help="Specify path to GeoIP City database file.\ni.e., GeoLiteCity.dat",
        )

    def _add_on_disk_options(self) -> None:
        group = OptionGroup.ON_DISK
        number = "<number>"
        self.add(OptionTag.KEEP_DB_FILES, group=group, help="Persist parsed data into disk.")
        self.add(OptionTag.LOAD_FROM_DISK, group=group, help="Load previously stored data from disk.")
        self.add(OptionTag.DB_PATH, arity=Arity.REQUIRED, group=group, metavar="<path>", help=f"Path of the database file. Default [{TC_DBPATH}]")
        self.add(OptionTag.XMMAP, arity=Arity.REQUIRED, group=group, metavar=number, help=f"Set the size in bytes of the extra\nmapped memory. Default [{TC_MMAP}]")
        self.add(OptionTag.CACHE_LCNUM, arity=Arity.REQUIRED, group=group, metavar=number, help=f"Max number of leaf nodes to be cached.\nDefault [{TC_LCNUM}]")
        self.add(OptionTag.CACHE_NCNUM, arity=Arity.REQUIRED, group=group, metavar=number, help=f"Max number of non-leaf nodes to be cached.\nDefault [{TC_NCNUM}]")
        self.add(OptionTag.TUNE_LMEMB, arity=Arity.REQUIRED, group=group, metavar=number, help=f"Number of members in each leaf page.\nDefault [{TC_LMEMB}]")
        self.add(OptionTag.TUNE_NMEMB, arity=Arity.REQUIRED, group=group, metavar=number, help=f"Number of members in each non-leaf page.\nDefault [{TC_NMEMB}]")
        self.add(OptionTag.TUNE_BNUM, arity=Arity.REQUIRED, group=group, metavar=number, help=f"Number of elements of the bucket array.\nDefault [{TC_BNUM}]")
        if self.features.has_compression:
            codecs = [name for name, feature in (("zlib", Feature.ZLIB), ("bz2", Feature.BZ2)) if self.features & feature]
            self.add(
                OptionTag.COMPRESSION,
                arity=Arity.REQUIRED,
                group=group,
                metavar=f"<{'|'.join(codecs)}>",
                help=f"Specifies that each page is compressed\nwith {'|'.join(c.upper() for c in codecs)} encoding.",
            )

    def _add_other_options(self) -> None:
        group = OptionGroup.OTHER
        self.add(OptionTag.HELP, "h", group=group, help="This help.")
        self.add(OptionTag.VERSION, "V", group=group, help="Display version information and exit.")
        self.add(OptionTag.STORAGE, "s", group=group, help="Display current storage method.\ne.g., B+ Tree, Hash.")
