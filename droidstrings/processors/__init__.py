# droidstrings/processors/__init__.py
"""
Workbook readers and the strings.xml store for droidstrings.

Use explicit imports like:
    from droidstrings.processors.spreadsheet_reader import read_workbook
"""

from .base import WorkbookReader

__all__ = [
    'WorkbookReader',
]
