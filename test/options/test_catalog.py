# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from typing import override

import pytest

from logdash.features import Feature
from logdash.options import Arity, DefaultOptionCatalog, OptionCatalogBase, OptionCatalogError, OptionGroup, OptionTag


class TwoOptionCatalog(OptionCatalogBase):
    @override
    def initialize(self) -> None:
        self.add(OptionTag.LOG_FILE, "f", arity=Arity.REQUIRED)
        self.add(OptionTag.NO_COLOR)


@pytest.mark.options
class TestOptionCatalogBase:
    def test_lookups(self):
        catalog = TwoOptionCatalog()
        assert len(catalog) == 2
        assert catalog.by_name("log-file") is catalog.by_short("f")
        assert catalog.get(OptionTag.NO_COLOR).name == "no-color"
        assert OptionTag.LOG_FILE in catalog
        assert OptionTag.HELP not in catalog
        assert catalog.by_name("log") is None
        assert catalog.by_short("x") is None

    def test_sealed_after_initialize(self):
        catalog = TwoOptionCatalog()
        assert catalog.sealed
        with pytest.raises(OptionCatalogError, match="sealed"):
            catalog.add(OptionTag.HELP, "h")

    def test_duplicate_tag(self):
        class Duplicate(OptionCatalogBase):
            @override
            def initialize(self) -> None:
                self.add(OptionTag.NO_COLOR)
                self.add(OptionTag.NO_COLOR)

        with pytest.raises(OptionCatalogError, match="already registered"):
            Duplicate()

    def test_duplicate_short(self):
        class Duplicate(OptionCatalogBase):
            @override
            def initialize(self) -> None:
                self.add(OptionTag.HELP, "h")
                self.add(OptionTag.HTTP_PROTOCOL, "h")

        with pytest.raises(OptionCatalogError, match="already used by '--help'"):
            Duplicate()

    @pytest.mark.parametrize("short", ["", "ab", "-", ":", " "])
    def test_invalid_short(self, short):
        class Invalid(OptionCatalogBase):
            @override
            def initialize(self) -> None:
                self.add(OptionTag.HELP, short)

        with pytest.raises(ValueError, match="single option character"):
            Invalid()

    def test_abstract(self):
        with pytest.raises(TypeError):
            OptionCatalogBase()  # pyright: ignore[reportAbstractUsage]


@pytest.mark.options
class TestDefaultOptionCatalog:
    def test_every_feature(self, options):
        catalog = options.catalog
        assert len(catalog) == len(OptionTag)
        assert {d.tag for d in catalog} == set(OptionTag)
        assert catalog.short_options == "cf:p:l:ade:HMmo:qrghVs"

    def test_no_features(self, minimal_options):
        catalog = minimal_options.catalog
        for tag in (OptionTag.STD_GEOIP, OptionTag.GEOIP_CITY_DATA, OptionTag.DB_PATH, OptionTag.COMPRESSION, OptionTag.DEBUG_FILE):
            assert tag not in catalog
        assert catalog.by_short("g") is None
        assert catalog.by_short("l") is None
        assert catalog.short_options == "cf:p:ade:HMmo:qrhVs"

    def test_default_features(self):
        catalog = DefaultOptionCatalog()
        assert catalog.features == Feature.default()
        assert OptionTag.COMPRESSION in catalog
        assert OptionTag.DEBUG_FILE not in catalog

    def test_compression_lists_enabled_codecs(self):
        catalog = DefaultOptionCatalog(Feature.ON_DISK_DB | Feature.BZ2)
        descriptor = catalog.get(OptionTag.COMPRESSION)
        assert descriptor is not None
        assert descriptor.metavar == "<bz2>"

    def test_compression_needs_a_codec(self):
        catalog = DefaultOptionCatalog(Feature.ON_DISK_DB)
        assert OptionTag.DB_PATH in catalog
        assert OptionTag.COMPRESSION not in catalog

    @pytest.mark.parametrize(
        ("tag", "short", "arity"),
        [
            (OptionTag.LOG_FILE, "f", Arity.REQUIRED),
            (OptionTag.EXCLUDE_IP, "e", Arity.REQUIRED),
            (OptionTag.CONFIG_FILE, "p", Arity.REQUIRED),
            (OptionTag.OUTPUT_FORMAT, "o", Arity.REQUIRED),
            (OptionTag.HTTP_PROTOCOL, "H", Arity.NONE),
            (OptionTag.HTTP_METHOD, "M", Arity.NONE),
            (OptionTag.VERSION, "V", Arity.NONE),
            (OptionTag.DATE_FORMAT, None, Arity.REQUIRED),
            (OptionTag.NO_GLOBAL_CONFIG, None, Arity.NONE),
        ],
    )
    def test_descriptors(self, options, tag, short, arity):
        descriptor = options.catalog.get(tag)
        assert descriptor.short == short
        assert descriptor.arity is arity

    def test_group_order(self, options):
        groups = [d.group for d in options.catalog]
        order = list(OptionGroup)
        assert groups == sorted(groups, key=order.index)

    def test_descriptor_str(self, options):
        assert str(options.catalog.get(OptionTag.LOG_FILE)) == "-f/--log-file"
        assert str(options.catalog.get(OptionTag.REAL_OS)) == "--real-os"
