# droidstrings/models/__init__.py
"""
Data models for droidstrings.
"""

from .types import (
    MergeStatus,
    LocaleColumn,
    TranslationEntry,
    ExistingEntry,
    MergedEntry,
    SheetGrid,
    LocaleReport,
    ConversionReport,
)

__all__ = [
    'MergeStatus',
    'LocaleColumn',
    'TranslationEntry',
    'ExistingEntry',
    'MergedEntry',
    'SheetGrid',
    'LocaleReport',
    'ConversionReport',
]
