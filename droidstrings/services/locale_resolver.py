# droidstrings/services/locale_resolver.py
"""
Map language codes to Android resource directories.
"""

import logging
from pathlib import Path
from typing import Optional

from droidstrings.config.settings import ConverterSettings

logger = logging.getLogger(__name__)


def locale_directory_name(language_code: str, settings: Optional[ConverterSettings] = None) -> str:
    """
    Get the values directory name for a language code.

    The default language goes to ``values``. Codes with a legacy Android
    qualifier are mapped through ``locale_aliases`` (``id`` -> ``values-in``).
    Any other code becomes ``values-<code>``.
    """
    settings = settings or ConverterSettings()
    code = language_code.strip()
    if not code:
        raise ValueError("Language code is empty")
    if code == settings.default_language:
        return "values"
    return f"values-{settings.locale_aliases.get(code, code)}"


def resolve_output_file(
    base_dir: Path,
    language_code: str,
    settings: Optional[ConverterSettings] = None,
) -> Path:
    """
    Get the strings.xml path for a language, creating it if missing.

    The directory is created with its parents and the file is created empty.
    An empty file is read back as an empty resource document.

    Raises:
        ValueError: language_code is empty
        OSError: the directory or the file cannot be created
    """
    settings = settings or ConverterSettings()
    directory = Path(base_dir) / locale_directory_name(language_code, settings)
    directory.mkdir(parents=True, exist_ok=True)

    output_file = directory / settings.resource_file_name
    if not output_file.is_file():
        output_file.touch()
        logger.debug("Created empty resource file: %s", output_file)

    logger.info("Output directory: %s", directory)
    return output_file
