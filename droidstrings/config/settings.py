# droidstrings/config/settings.py
"""
Converter settings for droidstrings.

Settings are read from an optional JSON file and passed explicitly to the
converter and the locale resolver. Defaults describe the usual sheet layout:

- column 0: resource keys
- row 0: language codes (header)
- column 2 onwards: one column per locale
"""

import json
import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional

# Module logger
logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE_NAME = "droidstrings.json"


@dataclass
class ConverterSettings:
    """Settings for one conversion run"""

    # Sheet layout
    key_column: int = 0             # Column holding the resource keys
    header_row: int = 0             # Row holding the language codes
    first_column: int = 2           # First locale column
    sheet_count: int = 1            # Number of leading sheets to convert

    # Locale directories
    default_language: str = "en"    # Written to values/ without a suffix
    # Android still uses the legacy qualifier for some languages (id -> in)
    locale_aliases: dict[str, str] = field(default_factory=lambda: {"id": "in"})

    # Output
    resource_file_name: str = "strings.xml"
    indent: int = 4

    @property
    def first_row(self) -> int:
        """First row holding translations"""
        return self.header_row + 1

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "ConverterSettings":
        """Load settings from a JSON file.

        A missing file or a file that cannot be decoded yields the defaults.
        Unknown keys are ignored.

        Args:
            path: JSON settings file, or None for the defaults
        """
        data = {}

        if path is not None and path.exists():
            try:
                with open(path, 'r', encoding='utf-8-sig') as f:
                    data = json.load(f)
                    logger.debug("Loaded settings from: %s", path)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning("Failed to load settings %s: %s", path, e)
                data = {}
        elif path is not None:
            logger.debug("Settings file not found, using defaults: %s", path)

        if not isinstance(data, dict):
            logger.warning("Settings file must contain a JSON object: %s", path)
            data = {}

        # Filter to only known fields
        known_fields = {f.name for f in fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}
        ignored = sorted(set(data) - known_fields)
        if ignored:
            logger.debug("Ignoring unknown settings: %s", ", ".join(ignored))

        settings = cls(**filtered_data)
        settings._validate()
        return settings

    def _validate(self) -> None:
        """Validate and normalize setting values.

        Invalid values are reset to defaults with warnings.
        """
        for name, default in (("key_column", 0), ("header_row", 0), ("first_column", 2)):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                logger.warning("%s must be a non-negative integer (%r), resetting to %d", name, value, default)
                setattr(self, name, default)

        if self.first_column == self.key_column:
            logger.warning("first_column overlaps key_column (%d), resetting to %d",
                           self.first_column, self.key_column + 1)
            self.first_column = self.key_column + 1

        if not isinstance(self.sheet_count, int) or self.sheet_count < 1:
            logger.warning("sheet_count too small (%r), resetting to 1", self.sheet_count)
            self.sheet_count = 1

        if not isinstance(self.indent, int) or self.indent < 0 or self.indent > 16:
            logger.warning("indent out of range (%r), resetting to 4", self.indent)
            self.indent = 4

        if not isinstance(self.default_language, str) or not self.default_language.strip():
            logger.warning("default_language is empty, resetting to 'en'")
            self.default_language = "en"
        self.default_language = self.default_language.strip()

        if not isinstance(self.locale_aliases, dict):
            logger.warning("locale_aliases must be an object, resetting to defaults")
            self.locale_aliases = {"id": "in"}
        self.locale_aliases = {
            str(code).strip(): str(alias).strip()
            for code, alias in self.locale_aliases.items()
            if str(code).strip() and str(alias).strip()
        }

        name = self.resource_file_name
        if not isinstance(name, str) or not name.strip() or Path(name).name != name:
            logger.warning("resource_file_name must be a plain file name (%r), resetting to strings.xml", name)
            self.resource_file_name = "strings.xml"

    def with_overrides(self, **overrides) -> "ConverterSettings":
        """Return a validated copy with the non-None overrides applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        settings = replace(self, **values)
        settings._validate()
        return settings


def get_default_settings_path() -> Path:
    """Get default settings file path (current directory)"""
    return Path.cwd() / DEFAULT_SETTINGS_FILE_NAME
