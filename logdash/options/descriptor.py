# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Static description of the recognised command-line options."""

from enum import Enum, StrEnum

from pydantic import Field, field_validator

from ..util.config import BaseConfigModel


class Arity(Enum):
    NONE = "none"
    REQUIRED = "required"


class OptionGroup(Enum):
    """Help text sections, in display order."""

    FORMAT = "Log & Date Format Options"
    UI = "User Interface Options"
    FILE = "File Options"
    PARSE = "Parse Options"
    GEOIP = "GeoIP Options"
    ON_DISK = "On-Disk Database Options"
    OTHER = "Other Options"


class OptionTag(StrEnum):
    """One member per option; the value is the option's long name."""

    # Base options with a short code
    AGENT_LIST = "agent-list"
    CONFIG_DIALOG = "config-dialog"
    CONFIG_FILE = "config-file"
    EXCLUDE_IP = "exclude-ip"
    HELP = "help"
    HTTP_METHOD = "http-method"
    HTTP_PROTOCOL = "http-protocol"
    LOG_FILE = "log-file"
    VERSION = "version"
    NO_QUERY_STRING = "no-query-string"
    NO_TERM_RESOLVER = "no-term-resolver"
    OUTPUT_FORMAT = "output-format"
    STORAGE = "storage"
    WITH_MOUSE = "with-mouse"
    WITH_OUTPUT_RESOLVER = "with-output-resolver"

    # Base long-only options
    CODE_444_AS_404 = "444-as-404"
    CLIENT_ERR_TO_UNIQUE_COUNT = "4xx-to-unique-count"
    COLOR_SCHEME = "color-scheme"
    DATE_FORMAT = "date-format"
    IGNORE_CRAWLERS = "ignore-crawlers"
    IGNORE_REFERER = "ignore-referer"
    LOG_FORMAT = "log-format"
    SORT_VIEW = "sort-view"
    NO_COLOR = "no-color"
    NO_GLOBAL_CONFIG = "no-global-config"
    NO_PROGRESS = "no-progress"
    REAL_OS = "real-os"
    STATIC_FILE = "static-file"

    # Debug builds
    DEBUG_FILE = "debug-file"

    # GeoIP
    STD_GEOIP = "std-geoip"
    GEOIP_CITY_DATA = "geoip-city-data"

    # On-disk database
    CACHE_LCNUM = "cache-lcnum"
    CACHE_NCNUM = "cache-ncnum"
    COMPRESSION = "compression"
    DB_PATH = "db-path"
    KEEP_DB_FILES = "keep-db-files"
    LOAD_FROM_DISK = "load-from-disk"
    TUNE_BNUM = "tune-bnum"
    TUNE_LMEMB = "tune-lmemb"
    TUNE_NMEMB = "tune-nmemb"
    XMMAP = "xmmap"


class OptionDescriptor(BaseConfigModel):
    tag: OptionTag = Field(description="Variant tag used to dispatch matches of this option")
    short: str | None = Field(default=None, description="Single character short code, if any")
    arity: Arity = Field(default=Arity.NONE, description="Whether the option takes a value")
    group: OptionGroup = Field(default=OptionGroup.OTHER, description="Help text section")
    metavar: str | None = Field(default=None, description="Value placeholder shown in the help text")
    help: str = Field(default="", description="Help text, may span several lines")

    @field_validator("short")
    @classmethod
    def _validate_short(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if len(value) != 1 or value in ("-", ":", "?") or value.isspace():
            msg = f"Short option code must be a single option character, got {value!r}"
            raise ValueError(msg)
        return value

    @property
    def name(self) -> str:
        return self.tag.value

    @property
    def takes_value(self) -> bool:
        return self.arity is Arity.REQUIRED

    def __str__(self) -> str:
        if self.short is not None:
            return f"-{self.short}/--{self.name}"
        return f"--{self.name}"
