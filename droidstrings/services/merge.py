# droidstrings/services/merge.py
"""
Merge spreadsheet translations into the entries of an existing strings.xml.
"""

from __future__ import annotations

import copy
import logging
from collections import Counter
from typing import Iterable, Mapping, Sequence
from xml.etree import ElementTree as ET

from droidstrings.models.types import (
    ExistingEntry,
    LocaleColumn,
    MergedEntry,
    MergeStatus,
    SheetGrid,
    TranslationEntry,
)
from droidstrings.services.escaping import escape_content, escape_fragment, has_invalid_xml_chars

logger = logging.getLogger(__name__)


def read_translation_entries(
    grid: SheetGrid,
    column: int,
    key_column: int = 0,
    first_row: int = 1,
) -> list[TranslationEntry]:
    """Read the rows of one locale column, in sheet order.

    Keys and values are trimmed. Rows with an empty key or an empty value are
    skipped, they never delete an existing entry. A key holding characters
    that XML cannot carry is skipped with a warning, it could not be written
    as a name attribute.
    """
    entries = []
    for row in range(first_row, grid.row_count):
        key = grid.cell(row, key_column).strip()
        value = grid.cell(row, column).strip()
        if not key or not value:
            continue
        if has_invalid_xml_chars(key):
            logger.warning("Skipping row %d of %s: key %r contains invalid XML characters",
                           row + 1, grid.name, key)
            continue
        entries.append(TranslationEntry(key=key, value=value))
    return entries


def collect_translations(
    grid: SheetGrid,
    column: int,
    key_column: int = 0,
    first_row: int = 1,
) -> dict[str, str]:
    """Read key -> value pairs for one locale column.

    A key repeated further down the sheet overwrites the value but keeps its
    first position.
    """
    translations: dict[str, str] = {}
    for entry in read_translation_entries(grid, column, key_column, first_row):
        translations[entry.key] = entry.value
    return translations


def locale_columns(grid: SheetGrid, first_column: int = 2, header_row: int = 0) -> list[LocaleColumn]:
    """List the locale columns of a sheet, including those with a blank header."""
    return [
        LocaleColumn(index=column, language_code=grid.cell(header_row, column).strip())
        for column in range(first_column, grid.column_count)
    ]


def collapse_duplicates(entries: Iterable[ExistingEntry]) -> list[ExistingEntry]:
    """Keep one entry per key.

    The last entry with a key wins but takes the position of the first one.
    """
    collapsed: dict[str, ExistingEntry] = {}
    counts: Counter[str] = Counter()
    for entry in entries:
        counts[entry.key] += 1
        collapsed[entry.key] = entry

    duplicates = [key for key, count in counts.items() if count > 1]
    if duplicates:
        logger.warning(
            "Duplicate keys in existing resources, keeping the last one: %s",
            ", ".join(duplicates),
        )
    return list(collapsed.values())


def _escape_children(children: Sequence[ET.Element]) -> tuple[ET.Element, ...]:
    """Copy child elements with every text node escaped. The input is not touched."""
    escaped = tuple(copy.deepcopy(child) for child in children)
    for child in escaped:
        for node in child.iter():
            if node.text:
                node.text = escape_fragment(node.text)
            if node.tail:
                node.tail = escape_fragment(node.tail)
    return escaped


def _preserve(entry: ExistingEntry) -> MergedEntry:
    if entry.children:
        # Leading text of mixed content, its whitespace belongs to the layout
        content = escape_fragment(entry.text)
    else:
        content = escape_content(entry.text)
    return MergedEntry(
        key=entry.key,
        content=content,
        status=MergeStatus.PRESERVED,
        tag=entry.tag,
        attributes=entry.attributes,
        children=_escape_children(entry.children),
    )


def merge_entries(
    incoming: Mapping[str, str],
    existing: Sequence[ExistingEntry],
) -> list[MergedEntry]:
    """
    Merge spreadsheet translations with the entries of an existing file.

    Existing entries keep their document order. An entry whose key is in
    ``incoming`` takes the spreadsheet value, every other existing entry has
    its current text escaped again and keeps its child elements (array items,
    plural items, inline markup). Keys only present in ``incoming`` are
    appended as new <string> elements in spreadsheet order.

    Args:
        incoming: key -> raw spreadsheet value
        existing: entries parsed from the previous output, unique keys

    Returns:
        Merged entries with escaped content
    """
    pending = dict(incoming)
    merged: list[MergedEntry] = []

    for entry in collapse_duplicates(existing):
        if entry.key not in pending:
            merged.append(_preserve(entry))
            continue
        # The spreadsheet value replaces the whole body, child elements included
        merged.append(MergedEntry(
            key=entry.key,
            content=escape_content(pending.pop(entry.key)),
            status=MergeStatus.UPDATED,
            tag=entry.tag,
            attributes=entry.attributes,
        ))

    for key, value in pending.items():
        merged.append(MergedEntry(
            key=key,
            content=escape_content(value.strip()),
            status=MergeStatus.ADDED,
        ))

    return merged
