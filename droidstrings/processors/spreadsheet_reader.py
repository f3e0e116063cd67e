# droidstrings/processors/spreadsheet_reader.py
"""
Readers turning a localization workbook into string grids.

XLSX/XLSM workbooks are read with openpyxl (read-only, cached values).
CSV files are treated as a single-sheet workbook.
"""

from __future__ import annotations

import codecs
import csv
import io
import logging
import zipfile
from pathlib import Path
from typing import Optional

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from droidstrings.models.types import SheetGrid
from droidstrings.processors.base import WorkbookReader
from droidstrings.services.exceptions import UnsupportedWorkbookError

logger = logging.getLogger(__name__)

_SNIFF_SAMPLE_SIZE = 8192
_SNIFF_DELIMITERS = [",", ";", "\t", "|"]


class ExcelWorkbookReader(WorkbookReader):
    """
    Reader for Excel workbooks (.xlsx, .xlsm).
    """

    @property
    def supported_extensions(self) -> list[str]:
        return [".xlsx", ".xlsm", ".xls"]

    def read_sheets(self, file_path: Path, sheet_count: Optional[int] = None) -> list[SheetGrid]:
        """Read sheets with openpyxl. Formulas are read as their cached values."""
        self._ensure_xls_supported(file_path)

        try:
            wb = openpyxl.load_workbook(file_path, read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError) as e:
            raise UnsupportedWorkbookError(f"Cannot read workbook {file_path}: {e}") from e

        try:
            sheet_names = wb.sheetnames
            if sheet_count is not None:
                if sheet_count > len(sheet_names):
                    logger.warning(
                        "Workbook has %d sheet(s), %d requested: %s",
                        len(sheet_names), sheet_count, file_path,
                    )
                sheet_names = sheet_names[:sheet_count]

            grids = []
            for sheet_name in sheet_names:
                sheet = wb[sheet_name]
                rows = [
                    [self.cell_text(value) for value in row_values]
                    for row_values in sheet.iter_rows(values_only=True)
                ]
                grids.append(SheetGrid(name=sheet_name, rows=rows))
                logger.debug("Read sheet %s: %d rows", sheet_name, len(rows))
            return grids
        finally:
            wb.close()

    def _ensure_xls_supported(self, file_path: Path) -> None:
        """Reject legacy .xls workbooks.

        openpyxl cannot open the binary .xls format. Surface a clear error
        instead of failing with a confusing ZIP parsing exception.
        """
        if file_path.suffix.lower() == '.xls':
            raise UnsupportedWorkbookError(
                "XLS files are not supported. "
                "Save the workbook as XLSX and run again."
            )


def _decode_csv_bytes(raw: bytes) -> tuple[str, str]:
    if raw.startswith(codecs.BOM_UTF8):
        return raw.decode("utf-8-sig"), "utf-8-sig"
    for encoding in ("utf-8", "cp1252"):
        try:
            return raw.decode(encoding), encoding
        except UnicodeDecodeError:
            continue
    logger.warning(
        "CSV decode fallback used; values may contain replacement characters"
    )
    return raw.decode("utf-8", errors="replace"), "utf-8"


def _sniff_dialect(text: str) -> type[csv.Dialect] | csv.Dialect:
    if not text:
        return csv.excel
    sample = text[:_SNIFF_SAMPLE_SIZE]
    sniffer = csv.Sniffer()
    try:
        return sniffer.sniff(sample, delimiters=_SNIFF_DELIMITERS)
    except csv.Error:
        if (
            "\t" in sample
            and "," not in sample
            and ";" not in sample
            and "|" not in sample
        ):
            return csv.excel_tab
        return csv.excel


class CsvWorkbookReader(WorkbookReader):
    """
    Reader for CSV exports (.csv), read as one sheet named after the file.
    """

    @property
    def supported_extensions(self) -> list[str]:
        return [".csv"]

    def read_sheets(self, file_path: Path, sheet_count: Optional[int] = None) -> list[SheetGrid]:
        raw = file_path.read_bytes()
        text, encoding = _decode_csv_bytes(raw)
        dialect = _sniff_dialect(text)
        rows = list(csv.reader(io.StringIO(text), dialect=dialect))
        logger.debug("Read CSV %s (%s): %d rows", file_path, encoding, len(rows))
        return [SheetGrid(name=file_path.stem, rows=rows)]


_READERS: list[WorkbookReader] = [ExcelWorkbookReader(), CsvWorkbookReader()]


def get_reader(file_path: Path) -> WorkbookReader:
    """Get the reader for a workbook path based on its extension."""
    extension = file_path.suffix
    for reader in _READERS:
        if reader.supports_extension(extension):
            return reader
    raise UnsupportedWorkbookError(
        f"Unsupported workbook format: {extension or file_path.name}"
    )


def read_workbook(file_path: Path, sheet_count: Optional[int] = None) -> list[SheetGrid]:
    """Read the leading sheets of a workbook in any supported format."""
    return get_reader(file_path).read_sheets(file_path, sheet_count)
