"""Tests for droidstrings.services.escaping"""

from xml.etree import ElementTree as ET

import pytest

from droidstrings.services.escaping import escape_content, escape_fragment, escape_xml


def _parse_back(content: str) -> str:
    """Text an XML parser sees for content written into a <string> element."""
    return ET.fromstring(f"<string>{content}</string>").text or ""


class TestEscapeContent:
    """Tests for escape_content()"""

    @pytest.mark.unit
    def test_quotes_and_at_sign(self):
        assert escape_content('It\'s "ok" @user') == "It\\'s \"ok\" &#064;user"

    @pytest.mark.unit
    def test_ampersand_and_angle_brackets(self):
        assert escape_content("Tom & Jerry") == "Tom &amp; Jerry"
        assert escape_content("a < b > c") == "a &lt; b &gt; c"

    @pytest.mark.unit
    def test_escaped_quote_is_not_escaped_twice(self):
        assert escape_content("It\\'s") == "It\\'s"
        assert "\\\\'" not in escape_content("It\\'s")

    @pytest.mark.unit
    def test_escaped_at_sign_is_normalized(self):
        assert escape_content("\\@string/name") == "&#064;string/name"

    @pytest.mark.unit
    def test_only_trailing_whitespace_is_trimmed(self):
        assert escape_content("  indented  \n") == "  indented"

    @pytest.mark.unit
    def test_double_quotes_stay_literal(self):
        assert escape_content('say "hi"') == 'say "hi"'
        assert "&quot;" not in escape_content('"')

    @pytest.mark.unit
    def test_empty_and_none(self):
        assert escape_content("") == ""
        assert escape_content("   ") == ""
        assert escape_content(None) == ""

    @pytest.mark.unit
    def test_placeholders_untouched(self):
        assert escape_content("%1$s of %2$d") == "%1$s of %2$d"

    @pytest.mark.unit
    def test_invalid_xml_characters_removed(self):
        assert escape_content("a\x01b\x0bc") == "abc"
        assert escape_content("line\nbreak\ttab") == "line\nbreak\ttab"

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", [
        'It\'s "ok" @user',
        "Tom & Jerry <3",
        "It\\'s \\@home",
        "  leading kept",
        "&#064; literal entity text",
        "100% > 99%",
    ])
    def test_escaping_is_stable_when_read_back(self, raw):
        once = escape_content(raw)
        twice = escape_content(_parse_back(once))
        assert twice == once

    @pytest.mark.unit
    def test_carriage_returns_become_newlines(self):
        assert escape_content("one\r\ntwo\rthree") == "one\ntwo\nthree"
        assert "\r" not in escape_content("a\r\r\nb")


class TestEscapeFragment:
    """Tests for escape_fragment()"""

    @pytest.mark.unit
    def test_surrounding_whitespace_is_kept(self):
        assert escape_fragment("\n  Hello @you  ") == "\n  Hello &#064;you  "

    @pytest.mark.unit
    def test_same_rules_as_content(self):
        assert escape_fragment("It's <b>") == escape_content("It's <b>")


class TestEscapeXml:
    """Tests for escape_xml()"""

    @pytest.mark.unit
    def test_entities(self):
        assert escape_xml("&<>\"'") == "&amp;&lt;&gt;&quot;&apos;"

    @pytest.mark.unit
    def test_at_sign_not_escaped(self):
        assert escape_xml("@") == "@"
