# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Full pass over the arguments, filling in the configuration store.

Every decoded option is dispatched on its :class:`OptionTag`. Help, version and storage requests end the process
straight away, as do bad tokens, leftover positional arguments and list overflows.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar, TextIO

from ..config.models import Compression, GeoIPMode
from ..config.store import CapacityError
from ..features import Feature
from ..util.helpers.strings import atoi, unescape
from ..util.logging.manager import LoggingManager
from ..util.mixins import LoggableMixin
from .descriptor import OptionTag
from .exit import EXIT_FAILURE, EXIT_SUCCESS, OptionsExit
from .grammar import BadToken, Exhausted, OptionMatch
from .render import render_storage, render_usage, render_version


if TYPE_CHECKING:
    from ..config.store import ConfigurationStore
    from .grammar import GrammarEngine


type Handler = Callable[[PrimaryParsePhase, str | None], None]


# Options whose value is stored as given
SCALARS: dict[OptionTag, str] = {
    OptionTag.LOG_FILE: "log_file",
    OptionTag.OUTPUT_FORMAT: "output_format",
    OptionTag.GEOIP_CITY_DATA: "geoip_city_data",
    OptionTag.DB_PATH: "db_path",
}

# Options whose value is converted with atoi
INTEGERS: dict[OptionTag, str] = {
    OptionTag.COLOR_SCHEME: "color_scheme",
    OptionTag.XMMAP: "xmmap",
    OptionTag.CACHE_LCNUM: "cache_lcnum",
    OptionTag.CACHE_NCNUM: "cache_ncnum",
    OptionTag.TUNE_LMEMB: "tune_lmemb",
    OptionTag.TUNE_NMEMB: "tune_nmemb",
    OptionTag.TUNE_BNUM: "tune_bnum",
}

# Options whose value has its escape sequences expanded
UNESCAPED: dict[OptionTag, str] = {
    OptionTag.DATE_FORMAT: "date_format",
    OptionTag.LOG_FORMAT: "log_format",
}

# Flags setting a field to True
FLAGS: dict[OptionTag, str] = {
    OptionTag.AGENT_LIST: "list_agents",
    OptionTag.CONFIG_DIALOG: "load_conf_dialog",
    OptionTag.NO_QUERY_STRING: "ignore_query_string",
    OptionTag.NO_TERM_RESOLVER: "skip_term_resolver",
    OptionTag.WITH_OUTPUT_RESOLVER: "enable_html_resolver",
    OptionTag.WITH_MOUSE: "mouse_support",
    OptionTag.HTTP_METHOD: "append_method",
    OptionTag.HTTP_PROTOCOL: "append_protocol",
    OptionTag.CODE_444_AS_404: "code444_as_404",
    OptionTag.CLIENT_ERR_TO_UNIQUE_COUNT: "client_err_to_unique_count",
    OptionTag.IGNORE_CRAWLERS: "ignore_crawlers",
    OptionTag.REAL_OS: "real_os",
    OptionTag.NO_COLOR: "no_color",
    OptionTag.NO_PROGRESS: "no_progress",
    OptionTag.LOAD_FROM_DISK: "load_from_disk",
    OptionTag.KEEP_DB_FILES: "keep_db_files",
}

# Repeatable options appended to a bounded list
LISTS: dict[OptionTag, str] = {
    OptionTag.EXCLUDE_IP: "ignore_ips",
    OptionTag.IGNORE_REFERER: "ignore_referers",
    OptionTag.SORT_VIEW: "sort_views",
}

# Compression codecs, and the feature each one needs
CODECS: dict[str, tuple[Compression, Feature]] = {
    "zlib": (Compression.ZLIB, Feature.ZLIB),
    "bz2": (Compression.BZ2, Feature.BZ2),
}


class PrimaryParsePhase(LoggableMixin):
    HANDLERS: ClassVar[dict[OptionTag, Handler]] = {}

    def __init__(
        self,
        engine: GrammarEngine,
        store: ConfigurationStore,
        *,
        features: Feature | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.engine = engine
        self.store = store
        self.features = engine.catalog.features if features is None else features
        self.stdout = stdout

    def run(self) -> ConfigurationStore:
        """Dispatch every option to the store, then check that no positional argument is left."""
        while True:
            match self.engine.next():
                case OptionMatch(descriptor=descriptor, value=value):
                    self.dispatch(descriptor.tag, value)
                case BadToken(reason=reason):
                    raise OptionsExit(EXIT_FAILURE, reason)
                case Exhausted(positionals=positionals):
                    if positionals:
                        self.log.debug("Unexpected positional arguments: %s", positionals)
                        render_usage(self.engine.catalog, file=self.stdout)
                        raise OptionsExit(EXIT_FAILURE, f"unexpected argument '{positionals[0]}'")
                    return self.store

    def dispatch(self, tag: OptionTag, value: str | None) -> None:
        handler = self.HANDLERS.get(tag)
        if handler is None:
            msg = f"No handler for option '--{tag.value}'"
            raise KeyError(msg)

        try:
            handler(self, value)
        except CapacityError as err:
            self.log.error("%s", err)  # noqa: TRY400 the message is the whole story
            raise OptionsExit(EXIT_FAILURE, str(err)) from err

    # MARK: Generic handlers
    @staticmethod
    def _require(value: str | None) -> str:
        if value is None:
            msg = "Option requires a value"
            raise ValueError(msg)
        return value

    def _set_scalar(self, field: str, value: str | None) -> None:
        setattr(self.store, field, self._require(value))

    def _set_integer(self, field: str, value: str | None) -> None:
        setattr(self.store, field, atoi(value))

    def _set_unescaped(self, field: str, value: str | None) -> None:
        # An empty format string leaves the format unset
        setattr(self.store, field, unescape(value) if value else None)

    def _set_flag(self, field: str, _value: str | None) -> None:
        setattr(self.store, field, True)

    def _append(self, field: str, value: str | None) -> None:
        self.store.append(field, self._require(value))

    # MARK: Specific handlers
    def _static_file(self, value: str | None) -> None:
        self.store.add_static_file(self._require(value))

    def _std_geoip(self, _value: str | None) -> None:
        self.store.geo_db = GeoIPMode.STANDARD

    def _compression(self, value: str | None) -> None:
        codec = CODECS.get(self._require(value))
        if codec is None or not (self.features & codec[1]):
            self.log.debug("Ignoring unsupported compression codec %r", value)
            return
        self.store.compression = codec[0]

    def _debug_file(self, value: str | None) -> None:
        self.store.debug_log = path = self._require(value)
        LoggingManager().open_debug_file(path)
        self.log.debug("Debug messages are sent to %s", path)

    def _ignore(self, _value: str | None) -> None:
        pass

    def _help(self, _value: str | None) -> None:
        render_usage(self.engine.catalog, file=self.stdout)
        raise OptionsExit(EXIT_FAILURE, "help requested")

    def _version(self, _value: str | None) -> None:
        render_version(file=self.stdout)
        raise OptionsExit(EXIT_SUCCESS)

    def _storage(self, _value: str | None) -> None:
        render_storage(self.features, file=self.stdout)
        raise OptionsExit(EXIT_SUCCESS)


def _bind(method: Callable[[PrimaryParsePhase, str, str | None], None], field: str) -> Handler:
    def handler(phase: PrimaryParsePhase, value: str | None) -> None:
        method(phase, field, value)

    return handler


def _build_handlers() -> dict[OptionTag, Handler]:
    cls = PrimaryParsePhase
    handlers: dict[OptionTag, Handler] = {}

    for table, method in (
        (SCALARS, cls._set_scalar),
        (INTEGERS, cls._set_integer),
        (UNESCAPED, cls._set_unescaped),
        (FLAGS, cls._set_flag),
        (LISTS, cls._append),
    ):
        for tag, field in table.items():
            handlers[tag] = _bind(method, field)

    handlers.update(
        {
            OptionTag.STATIC_FILE: cls._static_file,
            OptionTag.STD_GEOIP: cls._std_geoip,
            OptionTag.COMPRESSION: cls._compression,
            OptionTag.DEBUG_FILE: cls._debug_file,
            OptionTag.CONFIG_FILE: cls._ignore,
            OptionTag.NO_GLOBAL_CONFIG: cls._ignore,
            OptionTag.HELP: cls._help,
            OptionTag.VERSION: cls._version,
            OptionTag.STORAGE: cls._storage,
        }
    )

    missing = set(OptionTag) - handlers.keys()
    if missing:
        msg = f"Options without a handler: {', '.join(sorted(t.value for t in missing))}"
        raise RuntimeError(msg)
    return handlers


PrimaryParsePhase.HANDLERS = _build_handlers()
