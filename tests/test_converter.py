"""Tests for droidstrings.services.converter"""

from __future__ import annotations

from pathlib import Path
from xml.etree import ElementTree as ET

import pytest

from conftest import build_workbook
from droidstrings.config.settings import ConverterSettings
from droidstrings.models.types import LocaleReport
from droidstrings.services.converter import Converter, convert
from droidstrings.services.exceptions import SpreadsheetNotFoundError


def _strings(path: Path) -> dict[str, str]:
    root = ET.parse(path).getroot()
    return {element.get("name"): element.text or "" for element in root}


def _raw_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


def test_convert_writes_one_file_per_locale(sample_workbook: Path, tmp_path: Path):
    res = tmp_path / "res"
    report = convert(sample_workbook, res)

    assert sorted(p.parent.name for p in report.written_files) == ["values", "values-fr", "values-in"]
    assert report.skipped_columns == 1

    lines = _raw_lines(res / "values" / "strings.xml")
    assert lines == [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<resources>',
        '    <string name="app_name">My App</string>',
        '    <string name="greeting">It\\\'s "ok" &#064;user</string>',
        '    <string name="cart_total">Tom &amp; Jerry &lt;3</string>',
        '</resources>',
    ]
    assert _strings(res / "values-fr" / "strings.xml") == {
        "app_name": "Mon App",
        "greeting": "C\\'est ok",
    }
    assert _strings(res / "values-in" / "strings.xml") == {
        "app_name": "Aplikasi",
        "cart_total": "Total",
    }


def test_blank_header_column_writes_nothing(tmp_path: Path):
    path = build_workbook(tmp_path / "blank.xlsx", {"s": [["key", "", None], ["k", "", "v"]]})
    res = tmp_path / "res"

    report = convert(path, res)

    assert report.locales == []
    assert report.skipped_columns == 1
    assert not res.exists()


def test_second_run_is_byte_identical(sample_workbook: Path, tmp_path: Path):
    res = tmp_path / "res"
    convert(sample_workbook, res)
    first = {p: p.read_bytes() for p in res.rglob("strings.xml")}

    report = convert(sample_workbook, res)
    second = {p: p.read_bytes() for p in res.rglob("strings.xml")}

    assert first == second
    en = report.find("en")
    assert en is not None
    assert (en.added, en.updated, en.preserved) == (0, 3, 0)


def test_existing_entries_are_updated_and_preserved(sample_workbook: Path, tmp_path: Path):
    res = tmp_path / "res"
    target = res / "values" / "strings.xml"
    target.parent.mkdir(parents=True)
    target.write_text(
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<resources>\n'
        '  <string name="legacy">Rock &amp; roll @home</string>\n'
        '  <string name="app_name" translatable="false">Old name</string>\n'
        '</resources>\n',
        encoding="utf-8",
    )

    report = convert(sample_workbook, res)

    lines = _raw_lines(target)
    assert lines[2:6] == [
        '    <string name="legacy">Rock &amp; roll &#064;home</string>',
        '    <string name="app_name" translatable="false">My App</string>',
        '    <string name="greeting">It\\\'s "ok" &#064;user</string>',
        '    <string name="cart_total">Tom &amp; Jerry &lt;3</string>',
    ]
    en = report.find("en")
    assert (en.added, en.updated, en.preserved) == (2, 1, 1)


def test_malformed_existing_file_is_replaced(sample_workbook: Path, tmp_path: Path):
    res = tmp_path / "res"
    target = res / "values-fr" / "strings.xml"
    target.parent.mkdir(parents=True)
    target.write_text("<resources><string name='x'>broken", encoding="utf-8")

    report = convert(sample_workbook, res)

    assert _strings(target) == {"app_name": "Mon App", "greeting": "C\\'est ok"}
    fr = report.find("fr")
    assert fr.recovered is True
    assert fr.added == 2
    # Other locales are still produced
    assert (res / "values" / "strings.xml").is_file()


def test_missing_workbook_touches_nothing(tmp_path: Path):
    res = tmp_path / "res"
    with pytest.raises(SpreadsheetNotFoundError) as exc_info:
        convert(tmp_path / "missing.xlsx", res)
    assert isinstance(exc_info.value, FileNotFoundError)
    assert not res.exists()


def test_only_configured_sheets_are_converted(tmp_path: Path):
    path = build_workbook(tmp_path / "multi.xlsx", {
        "main": [["key", "", "en"], ["a", "", "A"]],
        "extra": [["key", "", "en"], ["b", "", "B"]],
    })
    res = tmp_path / "res"

    convert(path, res)
    assert _strings(res / "values" / "strings.xml") == {"a": "A"}

    Converter(path, res, ConverterSettings(sheet_count=2)).convert()
    assert _strings(res / "values" / "strings.xml") == {"a": "A", "b": "B"}


def test_custom_first_column(tmp_path: Path):
    path = build_workbook(tmp_path / "narrow.xlsx", {"s": [["key", "de"], ["hello", "Hallo"]]})
    res = tmp_path / "res"

    Converter(path, res, ConverterSettings(first_column=1)).convert()

    assert _strings(res / "values-de" / "strings.xml") == {"hello": "Hallo"}


def test_write_failure_is_fatal(sample_workbook: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    import droidstrings.services.converter as converter_module

    def fail(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(converter_module, "write_resources", fail)
    with pytest.raises(OSError, match="disk full"):
        convert(sample_workbook, tmp_path / "res")


def test_csv_workbook(tmp_path: Path):
    path = tmp_path / "strings.csv"
    path.write_text('key,desc,en,id\nok,"greeting",OK,Oke\n', encoding="utf-8")
    res = tmp_path / "res"

    convert(path, res)

    assert _strings(res / "values" / "strings.xml") == {"ok": "OK"}
    assert _strings(res / "values-in" / "strings.xml") == {"ok": "Oke"}


def test_arrays_plurals_and_markup_survive(sample_workbook: Path, tmp_path: Path):
    res = tmp_path / "res"
    target = res / "values" / "strings.xml"
    target.parent.mkdir(parents=True)
    target.write_text(
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<resources xmlns:xliff="urn:oasis:names:tc:xliff:document:1.2">\n'
        '    <string-array name="days"><item>Mon</item><item>Tue</item></string-array>\n'
        '    <plurals name="songs">\n'
        '        <item quantity="one"><xliff:g id="n">%d</xliff:g> song</item>\n'
        '        <item quantity="other">%d songs</item>\n'
        '    </plurals>\n'
        '    <string name="styled">Hello <b>you</b>!</string>\n'
        '</resources>\n',
        encoding="utf-8",
    )

    report = convert(sample_workbook, res)
    first = target.read_bytes()

    root = ET.parse(target).getroot()
    assert [item.text for item in root.find("string-array")] == ["Mon", "Tue"]
    plurals = root.find("plurals")
    assert [item.get("quantity") for item in plurals] == ["one", "other"]
    assert "".join(plurals[0].itertext()) == "%d song"
    styled = root.find("string[@name='styled']")
    assert styled.find("b").text == "you"
    assert "".join(styled.itertext()) == "Hello you!"
    en = report.find("en")
    assert (en.preserved, en.added, en.total) == (3, 3, 6)

    convert(sample_workbook, res)
    assert target.read_bytes() == first


def test_locale_summary_counts_every_string(tmp_path: Path):
    report = LocaleReport(
        sheet_name="s", language_code="fr", output_path=tmp_path / "strings.xml",
        added=2, updated=1, preserved=4, recovered=True,
    )
    assert report.total == 7
    assert report.summary().startswith("fr: 7 strings (2 added, 1 updated, 4 preserved) -> ")
    assert report.summary().endswith("(malformed file replaced)")


def test_key_with_control_character_does_not_break_next_run(tmp_path: Path):
    path = tmp_path / "strings.csv"
    path.write_text("key,desc,en\nbad\x01key,,Bad\nok,,Fine\n", encoding="utf-8")
    res = tmp_path / "res"

    convert(path, res)
    report = convert(path, res)

    en = report.find("en")
    assert en.recovered is False
    assert _strings(res / "values" / "strings.xml") == {"ok": "Fine"}
