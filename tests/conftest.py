from __future__ import annotations

import sys
from pathlib import Path

import openpyxl
import pytest


# Ensure the project root is importable when running `pytest` via its entrypoint,
# where `sys.path[0]` may not be the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


def build_workbook(path: Path, sheets: dict[str, list[list]]) -> Path:
    """Write an .xlsx with one sheet per entry, rows given top to bottom."""
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title)
        for row in rows:
            ws.append(row)
    wb.save(path)
    wb.close()
    return path


@pytest.fixture
def sample_workbook(tmp_path: Path) -> Path:
    """Key column, a description column, then en / fr / id / blank-header columns."""
    return build_workbook(tmp_path / "strings.xlsx", {
        "Sheet1": [
            ["key", "description", "en", "fr", "id", None],
            ["app_name", "Title", "My App", "Mon App", "Aplikasi", "ignored"],
            ["greeting", "", "It's \"ok\" @user", "C'est ok", None, "ignored"],
            ["", "orphan value", "No key", "Pas de clé", "Tanpa kunci", None],
            ["cart_total", "", "Tom & Jerry <3", "  ", "Total", None],
        ],
    })
