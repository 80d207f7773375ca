# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

import pytest

from logdash.config import Compression, ConfigurationStore, GeoIPMode
from logdash.config.models import MAX_IGNORE_IPS, MAX_SORT_VIEWS, TC_BNUM, TC_DBPATH
from logdash.features import Feature
from logdash.options import EXIT_FAILURE, EXIT_SUCCESS, OptionTag, PrimaryParsePhase
from logdash.util.logging.manager import LoggingManager


@pytest.mark.options
@pytest.mark.primary
class TestPrimaryParse:
    def test_no_arguments(self, options):
        store = options.parse()
        assert store.as_dict() == options.store().as_dict()

    def test_flags(self, options):
        store = options.parse("-acdHMmqr", "--no-color", "--no-progress", "--real-os", "--ignore-crawlers", "--444-as-404", "--4xx-to-unique-count")
        for field in (
            "list_agents",
            "load_conf_dialog",
            "enable_html_resolver",
            "append_protocol",
            "append_method",
            "mouse_support",
            "ignore_query_string",
            "skip_term_resolver",
            "no_color",
            "no_progress",
            "real_os",
            "ignore_crawlers",
            "code444_as_404",
            "client_err_to_unique_count",
        ):
            assert getattr(store, field) is True, field

    def test_scalars(self, options):
        store = options.parse("-f", "access.log", "-o", "json", "--geoip-city-data=GeoLiteCity.dat", "--db-path", "/var/db/")
        assert store.log_file == "access.log"
        assert store.output_format == "json"
        assert store.geoip_city_data == "GeoLiteCity.dat"
        assert store.db_path == "/var/db/"

    def test_last_value_wins(self, options):
        assert options.parse("-f", "a.log", "--log-file=b.log").log_file == "b.log"

    def test_integers(self, options):
        store = options.parse("--color-scheme=2", "--xmmap", "1048576", "--cache-lcnum=2048", "--tune-bnum=abc", "--tune-lmemb", "64 members")
        assert store.color_scheme == 2
        assert store.xmmap == 1048576
        assert store.cache_lcnum == 2048
        assert store.tune_bnum == 0
        assert store.tune_lmemb == 64

    def test_on_disk_defaults(self, options):
        store = options.parse("-q")
        assert store.db_path == TC_DBPATH
        assert store.tune_bnum == TC_BNUM

    def test_date_format_unescaped(self, options):
        store = options.parse(r"--date-format=%d\/%b\/%Y", r"--log-format=%h\t%r\n")
        assert store.date_format == "%d/%b/%Y"
        assert store.log_format == "%h\t%r\n"

    def test_empty_format_is_unset(self, options):
        store = options.parse("--date-format=", "--log-format", "")
        assert store.date_format is None
        assert store.log_format is None

    def test_exclude_ip(self, options):
        store = options.parse("-e", "10.0.0.1", "-e", "10.0.0.2-10.0.0.5")
        assert store.ignore_ips == ["10.0.0.1", "10.0.0.2-10.0.0.5"]
        assert store.ignore_ips.count == 2

    def test_lists_keep_order(self, options):
        store = options.parse("--ignore-referer=*.bing.com", "--sort-view=VISITORS,BY_HITS,ASC", "--ignore-referer", "*.google.com")
        assert store.ignore_referers == ["*.bing.com", "*.google.com"]
        assert store.sort_views == ["VISITORS,BY_HITS,ASC"]

    def test_static_files(self, options):
        store = options.parse("--static-file=.mp3", "--static-file", ".woff2", "--static-file=.js")
        assert store.static_files == [".mp3", ".woff2", ".js"]
        assert store.static_file_max_len == 6

    @pytest.mark.parametrize(
        "argv",
        [
            ("-f", "access.log", "-q", "--no-color"),
            ("--no-color", "-q", "-f", "access.log"),
            ("-q", "--no-color", "--log-file=access.log"),
        ],
    )
    def test_order_independent(self, options, argv):
        store = options.parse(*argv)
        assert store.log_file == "access.log"
        assert store.ignore_query_string
        assert store.no_color

    def test_prescan_options_are_ignored(self, options):
        store = options.parse("--no-global-config", "-p", "custom.yaml")
        assert store.as_dict() == options.store().as_dict()

    def test_existing_store(self, options):
        store = options.store()
        store.append("ignore_ips", "127.0.0.1")
        assert options.parse("-e", "::1", store=store) is store
        assert store.ignore_ips == ["127.0.0.1", "::1"]


@pytest.mark.options
@pytest.mark.primary
class TestGeoIP:
    def test_memory_cache_by_default(self, options):
        assert options.parse().geo_db is GeoIPMode.MEMORY_CACHE

    def test_standard(self, options):
        assert options.parse("-g").geo_db is GeoIPMode.STANDARD

    def test_without_geoip(self, minimal_options):
        assert minimal_options.parse().geo_db is None


@pytest.mark.options
@pytest.mark.primary
class TestCompression:
    @pytest.mark.parametrize(("value", "expected"), [("zlib", Compression.ZLIB), ("bz2", Compression.BZ2), ("lzma", Compression.NONE)])
    def test_codecs(self, options, value, expected):
        assert options.parse(f"--compression={value}").compression is expected

    def test_codec_not_built(self, options):
        features = Feature.ON_DISK_DB | Feature.ZLIB
        engine = options.engine("--compression=bz2")
        phase = PrimaryParsePhase(engine, ConfigurationStore(features), features=features)
        assert phase.run().compression is Compression.NONE

    def test_option_absent_without_codecs(self, minimal_options):
        assert minimal_options.exit_status("--compression=zlib") == EXIT_FAILURE


@pytest.mark.options
@pytest.mark.primary
class TestExits:
    def test_help(self, options, capsys):
        assert options.exit_status("-q", "-h") == EXIT_FAILURE
        out = capsys.readouterr().out
        assert "Usage: logdash" in out
        assert "--log-file=<filename>" in out

    def test_version(self, options, capsys):
        store = options.store()
        assert options.exit_status("-V", store=store) == EXIT_SUCCESS
        assert store.as_dict() == options.store().as_dict()
        assert capsys.readouterr().out.startswith("logdash - ")

    def test_version_stops_parsing(self, options):
        store = options.store()
        assert options.exit_status("-q", "--version", "--no-color", store=store) == EXIT_SUCCESS
        assert store.ignore_query_string
        assert not store.no_color

    def test_storage(self, options, capsys):
        assert options.exit_status("-s") == EXIT_SUCCESS
        assert capsys.readouterr().out == "Built using Tokyo Cabinet On-Disk B+ Tree.\n"

    def test_storage_in_memory(self, minimal_options, capsys):
        assert minimal_options.exit_status("--storage") == EXIT_SUCCESS
        assert capsys.readouterr().out == "Built using the default in-memory hash database.\n"

    def test_unknown_option(self, options, capsys):
        store = options.store()
        assert options.exit_status("-q", "--not-a-real-option", store=store) == EXIT_FAILURE
        assert store.as_dict() == options.store().as_dict()
        assert "unrecognized option '--not-a-real-option'" in capsys.readouterr().err

    def test_trailing_positional(self, options, capsys):
        assert options.exit_status("-f", "access.log", "extra.log") == EXIT_FAILURE
        assert "Usage: logdash" in capsys.readouterr().out

    def test_ip_capacity(self, options):
        store = options.store()
        argv = [arg for i in range(MAX_IGNORE_IPS) for arg in ("-e", f"10.0.0.{i}")]
        options.parse(*argv, store=store)
        assert store.ignore_ips.full

        assert options.exit_status("-e", "10.0.1.1", store=store) == EXIT_FAILURE
        assert store.ignore_ips.count == MAX_IGNORE_IPS

    def test_sort_view_capacity(self, options):
        argv = [f"--sort-view=VIEW{i},BY_HITS,ASC" for i in range(MAX_SORT_VIEWS + 1)]
        assert options.exit_status(*argv) == EXIT_FAILURE


@pytest.mark.options
@pytest.mark.primary
@pytest.mark.logging
class TestDebugFile:
    def test_debug_file(self, options, tmp_path):
        path = tmp_path / "debug.log"
        try:
            store = options.parse("-l", str(path))
            assert store.debug_log == str(path)
            assert LoggingManager().dh is not None
        finally:
            LoggingManager().close_debug_file()
        assert path.exists()

    def test_debug_file_needs_feature(self, minimal_options, tmp_path):
        assert minimal_options.exit_status("-l", str(tmp_path / "debug.log")) == EXIT_FAILURE


@pytest.mark.options
@pytest.mark.primary
class TestDispatch:
    def test_every_tag_has_a_handler(self):
        assert set(PrimaryParsePhase.HANDLERS) == set(OptionTag)

    def test_dispatch_directly(self, options):
        store = options.store()
        phase = PrimaryParsePhase(options.engine(), store)
        phase.dispatch(OptionTag.EXCLUDE_IP, "192.168.0.1")
        phase.dispatch(OptionTag.NO_COLOR, None)
        assert store.ignore_ips == ["192.168.0.1"]
        assert store.no_color
