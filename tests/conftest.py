import sys
from io import BytesIO
from pathlib import Path

import pytest
from openpyxl import Workbook

# Ensure project root is on sys.path
sys.path.append(str(Path(__file__).resolve().parents[1]))


def build_workbook_bytes(rows, *, title="People", extra_sheets=None) -> bytes:
    """In-memory .xlsx whose first sheet holds ``rows`` (row 0 = header)."""
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(list(row))
    for name, sheet_rows in (extra_sheets or {}).items():
        other = wb.create_sheet(name)
        for row in sheet_rows:
            other.append(list(row))

    stream = BytesIO()
    wb.save(stream)
    return stream.getvalue()


@pytest.fixture
def make_workbook():
    return build_workbook_bytes


@pytest.fixture
def basic_name_bytes():
    return build_workbook_bytes([
        ["firstName", "lastName"],
        ["Dana", "Levi"],
        ["Avi", "Cohen"],
    ])
