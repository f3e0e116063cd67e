# droidstrings/services/__init__.py
"""
Service layer for droidstrings: escaping, merging, locale resolution and the
converter driving them.
"""

from .escaping import escape_content
from .exceptions import DroidStringsError, SpreadsheetNotFoundError, UnsupportedWorkbookError
from .merge import merge_entries

__all__ = [
    'escape_content',
    'merge_entries',
    'DroidStringsError',
    'SpreadsheetNotFoundError',
    'UnsupportedWorkbookError',
]
