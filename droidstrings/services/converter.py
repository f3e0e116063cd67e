# droidstrings/services/converter.py
"""
Converter: merges a localization workbook into Android string resources.

For each converted sheet, every locale column is processed in turn:

1. resolve values[-xx]/strings.xml (created when missing)
2. read the existing entries (a malformed file counts as empty)
3. merge the column's translations into them
4. rewrite the file

A column is finished before the next one starts.
"""

import logging
from pathlib import Path
from typing import Optional

from droidstrings.config.settings import ConverterSettings
from droidstrings.models.types import (
    ConversionReport,
    LocaleColumn,
    LocaleReport,
    MergeStatus,
    SheetGrid,
)
from droidstrings.processors.spreadsheet_reader import read_workbook
from droidstrings.processors.strings_xml import read_existing_entries, write_resources
from droidstrings.services.exceptions import SpreadsheetNotFoundError
from droidstrings.services.locale_resolver import resolve_output_file
from droidstrings.services.merge import collect_translations, locale_columns, merge_entries

logger = logging.getLogger(__name__)


class Converter:
    """
    Merge a workbook into the resource directory of an Android module.

    Usage:
        converter = Converter(Path("strings.xlsx"), Path("app/src/main/res"))
        report = converter.convert()
    """

    def __init__(
        self,
        workbook_path: Path,
        output_dir: Path,
        settings: Optional[ConverterSettings] = None,
    ):
        self.workbook_path = Path(workbook_path)
        self.output_dir = Path(output_dir)
        self.settings = settings or ConverterSettings()

    def convert(self) -> ConversionReport:
        """
        Run the conversion.

        Raises:
            SpreadsheetNotFoundError: the workbook does not exist (nothing is written)
            UnsupportedWorkbookError: the workbook format cannot be read
            OSError: an output directory or file cannot be created or written
        """
        if not self.workbook_path.is_file():
            raise SpreadsheetNotFoundError(self.workbook_path)

        logger.info("============= start convert =============")
        logger.info("Workbook: %s", self.workbook_path)
        logger.info("Output: %s", self.output_dir)

        report = ConversionReport(workbook_path=self.workbook_path)
        sheets = read_workbook(self.workbook_path, self.settings.sheet_count)
        for grid in sheets:
            self.convert_sheet(grid, report)

        logger.info("============= convert complete =============")
        return report

    def convert_sheet(self, grid: SheetGrid, report: Optional[ConversionReport] = None) -> list[LocaleReport]:
        """Convert every locale column of one sheet."""
        settings = self.settings
        reports = []
        for column in locale_columns(grid, settings.first_column, settings.header_row):
            if column.is_empty:
                logger.debug("Skipping column %d of %s: no language code", column.index, grid.name)
                if report is not None:
                    report.skipped_columns += 1
                continue
            locale_report = self.convert_column(grid, column)
            reports.append(locale_report)
            if report is not None:
                report.locales.append(locale_report)
        return reports

    def convert_column(self, grid: SheetGrid, column: LocaleColumn) -> LocaleReport:
        """Merge one locale column into its strings.xml."""
        settings = self.settings
        output_file = resolve_output_file(self.output_dir, column.language_code, settings)

        existing, recovered = read_existing_entries(output_file)
        incoming = collect_translations(
            grid,
            column.index,
            key_column=settings.key_column,
            first_row=settings.first_row,
        )
        merged = merge_entries(incoming, existing)
        write_resources(output_file, merged, indent=settings.indent)

        locale_report = LocaleReport(
            sheet_name=grid.name,
            language_code=column.language_code,
            output_path=output_file,
            added=sum(1 for entry in merged if entry.status is MergeStatus.ADDED),
            updated=sum(1 for entry in merged if entry.status is MergeStatus.UPDATED),
            preserved=sum(1 for entry in merged if entry.status is MergeStatus.PRESERVED),
            recovered=recovered,
        )
        logger.info("%s", locale_report.summary())
        return locale_report


def convert(
    workbook_path: Path,
    output_dir: Path,
    settings: Optional[ConverterSettings] = None,
) -> ConversionReport:
    """Convenience wrapper around Converter(...).convert()."""
    return Converter(workbook_path, output_dir, settings).convert()
