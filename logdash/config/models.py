# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""The frozen configuration handed to the rest of the application once option parsing completes."""

from enum import StrEnum

from pydantic import Field

from ..util.config import BaseConfigModel


# MARK: On-disk database defaults
TC_DBPATH = "/tmp/"  # noqa: S108 default location of the on-disk database
TC_MMAP = 0
TC_LCNUM = 1024
TC_NCNUM = 512
TC_LMEMB = 128
TC_NMEMB = 256
TC_BNUM = 32749

# MARK: List capacities
MAX_IGNORE_IPS = 64
MAX_EXTENSIONS = 64
MAX_IGNORE_REFERERS = 64
MAX_SORT_VIEWS = 12

LIST_CAPACITIES: dict[str, int] = {
    "ignore_ips": MAX_IGNORE_IPS,
    "static_files": MAX_EXTENSIONS,
    "ignore_referers": MAX_IGNORE_REFERERS,
    "sort_views": MAX_SORT_VIEWS,
}


class GeoIPMode(StrEnum):
    MEMORY_CACHE = "memory-cache"
    STANDARD = "standard"


class Compression(StrEnum):
    NONE = "none"
    ZLIB = "zlib"
    BZ2 = "bz2"


# MARK: Configuration
class Configuration(BaseConfigModel):
    # Files
    log_file: str | None = Field(default=None, description="Path to the input log file")
    config_file: str | None = Field(default=None, description="Custom configuration file")
    load_global_config: bool = Field(default=True, description="Whether the global configuration file may be loaded")
    debug_log: str | None = Field(default=None, description="File receiving all debug messages")

    # Log & date format
    date_format: str | None = Field(default=None, description="Log date format, escape sequences already expanded")
    log_format: str | None = Field(default=None, description="Log format, escape sequences already expanded")

    # User interface
    load_conf_dialog: bool = Field(default=False, description="Prompt the log/date configuration window")
    color_scheme: int = Field(default=1, description="Color scheme, 1 for grey and 2 for green")
    no_color: bool = Field(default=False, description="Disable colored output")
    no_progress: bool = Field(default=False, description="Disable progress metrics")
    mouse_support: bool = Field(default=False, description="Enable mouse support on the main dashboard")

    # Parsing
    list_agents: bool = Field(default=False, description="Enable a list of user agents by host")
    enable_html_resolver: bool = Field(default=False, description="Enable the IP resolver on HTML/JSON output")
    skip_term_resolver: bool = Field(default=False, description="Disable the IP resolver on terminal output")
    append_method: bool = Field(default=False, description="Include the HTTP request method if found")
    append_protocol: bool = Field(default=False, description="Include the HTTP request protocol if found")
    ignore_query_string: bool = Field(default=False, description="Ignore the request's query string")
    output_format: str | None = Field(default=None, description="Output format, csv or json")
    code444_as_404: bool = Field(default=False, description="Treat the non-standard status code 444 as 404")
    client_err_to_unique_count: bool = Field(default=False, description="Add 4xx client errors to the unique visitors count")
    ignore_crawlers: bool = Field(default=False, description="Ignore crawlers")
    real_os: bool = Field(default=False, description="Display real OS names")

    ignore_ips: tuple[str, ...] = Field(default=(), description="Excluded IPv4/IPv6 addresses and ranges")
    static_files: tuple[str, ...] = Field(default=(), description="Static file extensions")
    static_file_max_len: int = Field(default=0, description="Length of the longest static file extension")
    ignore_referers: tuple[str, ...] = Field(default=(), description="Referers excluded from counting, wildcards allowed")
    sort_views: tuple[str, ...] = Field(default=(), description="Initial panel sort specifications, e.g. VISITORS,BY_HITS,ASC")

    # GeoIP
    geo_db: GeoIPMode | None = Field(default=None, description="GeoIP database access mode, unset when GeoIP is unavailable")
    geoip_city_data: str | None = Field(default=None, description="Path to the GeoIP City database file")

    # On-disk database
    load_from_disk: bool = Field(default=False, description="Load previously stored data from disk")
    keep_db_files: bool = Field(default=False, description="Persist parsed data into disk")
    db_path: str = Field(default=TC_DBPATH, description="Path of the database file")
    xmmap: int = Field(default=TC_MMAP, description="Size in bytes of the extra mapped memory")
    cache_lcnum: int = Field(default=TC_LCNUM, description="Max number of leaf nodes to be cached")
    cache_ncnum: int = Field(default=TC_NCNUM, description="Max number of non-leaf nodes to be cached")
    tune_lmemb: int = Field(default=TC_LMEMB, description="Number of members in each leaf page")
    tune_nmemb: int = Field(default=TC_NMEMB, description="Number of members in each non-leaf page")
    tune_bnum: int = Field(default=TC_BNUM, description="Number of elements of the bucket array")
    compression: Compression = Field(default=Compression.NONE, description="Page compression codec")
