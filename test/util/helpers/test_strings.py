# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

import pytest

from logdash.util.helpers.strings import atoi, unescape


@pytest.mark.helpers
class TestAtoi:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("0", 0),
            ("128", 128),
            ("+5", 5),
            ("-12", -12),
            ("  33", 33),
            ("64k", 64),
            ("1.5", 1),
            ("", 0),
            (None, 0),
            ("abc", 0),
            ("- 3", 0),
            ("\uff11\uff12", 0),
            ("\u00a012", 0),
        ],
    )
    def test_leading_integer(self, value, expected):
        assert atoi(value) == expected


@pytest.mark.helpers
class TestUnescape:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("%d/%b/%Y", "%d/%b/%Y"),
            (r"%h %^[%d:%t %^] \"%r\" %s", '%h %^[%d:%t %^] "%r" %s'),
            (r"line\none", "line\none"),
            (r"a\rb", "a\rb"),
            (r"tab\there", "tab\there"),
            ("\\\\", "\\"),
            (r"\q", "q"),
            ("trailing\\", "trailing\\"),
            ("", ""),
        ],
    )
    def test_escapes(self, value, expected):
        assert unescape(value) == expected

    def test_plain_text_unchanged(self):
        text = "%v:%^ %h %^[%d:%t %^]"
        assert unescape(text) == text
