# droidstrings/models/types.py
"""
Core data types for the spreadsheet to strings.xml conversion.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET


class MergeStatus(Enum):
    """How a merged entry relates to the previous output file"""
    PRESERVED = "preserved"  # Only in the existing file, re-escaped
    UPDATED = "updated"      # In both, spreadsheet value wins
    ADDED = "added"          # Only in the spreadsheet


@dataclass(frozen=True)
class LocaleColumn:
    """
    A spreadsheet column holding one target language.
    """
    index: int                       # 0-based column index
    language_code: str               # Header cell, "" means skip

    @property
    def is_empty(self) -> bool:
        return not self.language_code


@dataclass(frozen=True)
class TranslationEntry:
    """A (key, value) pair read from one spreadsheet row."""
    key: str
    value: str


@dataclass(frozen=True)
class ExistingEntry:
    """
    Snapshot of one element parsed from a previous strings.xml.

    ``text`` is the parsed text, i.e. XML entities are already resolved.
    For an element with child elements (<item>, <b>, <xliff:g>) it is only
    the text before the first child, the children are kept in ``children``.
    """
    key: str
    text: str
    tag: str = "string"
    attributes: tuple[tuple[str, str], ...] = ()  # Attributes besides "name"
    children: tuple[ET.Element, ...] = ()


@dataclass(frozen=True)
class MergedEntry:
    """
    One element of the merged output.

    ``content`` has been through the escaping pass and is written as-is.
    So have the text and tail of every element in ``children``.
    """
    key: str
    content: str
    status: MergeStatus
    tag: str = "string"
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple[ET.Element, ...] = ()


@dataclass
class SheetGrid:
    """
    One worksheet as a 2-D grid of cell strings.

    Rows may be ragged; ``cell()`` returns "" outside the populated range.
    """
    name: str
    rows: list[list[str]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def cell(self, row: int, column: int) -> str:
        if row < 0 or column < 0 or row >= len(self.rows):
            return ""
        cells = self.rows[row]
        if column >= len(cells):
            return ""
        return cells[column]


@dataclass
class LocaleReport:
    """
    Result of merging one locale column into its output file.
    """
    sheet_name: str
    language_code: str
    output_path: Path
    added: int = 0
    updated: int = 0
    preserved: int = 0
    recovered: bool = False          # Existing file was malformed and replaced

    @property
    def total(self) -> int:
        return self.added + self.updated + self.preserved

    def summary(self) -> str:
        """One-line description for logs"""
        text = (
            f"{self.language_code}: {self.total} strings ({self.added} added, "
            f"{self.updated} updated, {self.preserved} preserved) -> {self.output_path}"
        )
        if self.recovered:
            text += " (malformed file replaced)"
        return text


@dataclass
class ConversionReport:
    """
    Result of a whole run.
    """
    workbook_path: Path
    locales: list[LocaleReport] = field(default_factory=list)
    skipped_columns: int = 0

    @property
    def written_files(self) -> list[Path]:
        return [report.output_path for report in self.locales]

    def find(self, language_code: str) -> Optional[LocaleReport]:
        """Get the last report for a language code"""
        for report in reversed(self.locales):
            if report.language_code == language_code:
                return report
        return None
