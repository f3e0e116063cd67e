# droidstrings/processors/base.py
"""
Abstract base class for workbook readers.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from droidstrings.models.types import SheetGrid


class WorkbookReader(ABC):
    """
    Abstract base class for workbook readers.
    Each input format (XLSX, CSV) implements this interface.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """Return list of supported file extensions"""
        pass

    @abstractmethod
    def read_sheets(self, file_path: Path, sheet_count: Optional[int] = None) -> list[SheetGrid]:
        """
        Read the leading sheets of a workbook as string grids.

        Args:
            file_path: Path to the workbook
            sheet_count: Number of sheets to read from the start, None for all

        Returns:
            SheetGrid for each sheet read, in workbook order
        """
        pass

    def supports_extension(self, extension: str) -> bool:
        """Check if this reader supports the given file extension"""
        return extension.lower() in self.supported_extensions

    @staticmethod
    def cell_text(value) -> str:
        """
        Convert a cell value to the text shown in the sheet.

        None becomes "", whole floats lose their ".0" (12.0 -> "12").
        """
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
