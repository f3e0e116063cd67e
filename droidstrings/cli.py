# droidstrings/cli.py
"""
Command line entry point.

    droidstrings strings.xlsx app/src/main/res
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from droidstrings import __version__
from droidstrings.config.settings import ConverterSettings, get_default_settings_path
from droidstrings.services.converter import Converter
from droidstrings.services.exceptions import DroidStringsError

logger = logging.getLogger(__name__)

_LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None):
    """Configure logging to console and, optionally, a file.

    Returns:
        tuple: (console_handler, file_handler) to keep references alive
    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt='%H:%M:%S'))

    file_handler = None
    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        except OSError as e:
            # Fall back to console-only logging
            print(f"[WARNING] Failed to create log file {log_file}: {e}", file=sys.stderr)
            file_handler = None

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Remove existing handlers that might interfere
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(console_handler)
    if file_handler:
        root_logger.addHandler(file_handler)

    # openpyxl warns about unsupported workbook extensions on every load
    logging.getLogger('openpyxl').setLevel(logging.WARNING)

    return console_handler, file_handler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="droidstrings",
        description="Merge a localization workbook into Android values[-xx]/strings.xml files",
    )
    parser.add_argument("workbook", type=Path, help="Localization workbook (.xlsx, .xlsm or .csv)")
    parser.add_argument("res_dir", type=Path, help="Android res directory receiving values[-xx]/")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON settings file (default: ./droidstrings.json when present)",
    )
    parser.add_argument("--sheets", type=int, default=None, help="Number of leading sheets to convert")
    parser.add_argument("--first-column", type=int, default=None, help="Index of the first locale column")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug messages")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    settings_path = args.config or get_default_settings_path()
    if args.config is not None and not args.config.exists():
        logger.error("Settings file not found: %s", args.config)
        return 1
    settings = ConverterSettings.load(settings_path).with_overrides(
        sheet_count=args.sheets,
        first_column=args.first_column,
    )

    try:
        report = Converter(args.workbook, args.res_dir, settings).convert()
    except DroidStringsError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("Conversion aborted, output may be incomplete: %s", e)
        return 1

    logger.info(
        "%d locale file(s) written, %d column(s) skipped",
        len(report.locales), report.skipped_columns,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
