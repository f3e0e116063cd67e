# droidstrings/services/exceptions.py
"""
Exception types raised by the conversion pipeline.

Malformed resource files are not an error here: they are recovered per locale
by the XML store reader.
"""


class DroidStringsError(Exception):
    """Base class for fatal conversion errors."""

    pass


class SpreadsheetNotFoundError(DroidStringsError, FileNotFoundError):
    """Raised when the input workbook does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Workbook not found, check the path argument: {path}")


class UnsupportedWorkbookError(DroidStringsError, ValueError):
    """Raised when the workbook format cannot be read."""

    pass
