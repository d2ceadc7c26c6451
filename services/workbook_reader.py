# services/workbook_reader.py
"""Read the first sheet of an uploaded spreadsheet into a grid of strings.

The reader works on bytes only (no paths, no URLs). The container is sniffed
from its magic bytes: ZIP means ``.xlsx`` (openpyxl engine), OLE2 means
``.xls`` (xlrd engine). Row 0 of the returned grid is the header row.
"""

from __future__ import annotations

import io
import logging
import zipfile
from datetime import date, datetime, time
from typing import Any, BinaryIO, List, Union
from xml.etree.ElementTree import ParseError

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd import XLRDError
from xlrd.compdoc import CompDocError

from middleware.errors import EmptyFileError, UnreadableFormatError

logger = logging.getLogger(__name__)

ZIP_MAGIC = b"PK\x03\x04"
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

ENGINE_XLSX = "openpyxl"
ENGINE_XLS = "xlrd"

# What pandas and its engines raise for a broken or foreign container.
_PARSE_ERRORS = (
    zipfile.BadZipFile,
    InvalidFileException,
    XLRDError,
    CompDocError,
    ParseError,
    KeyError,
    ValueError,
    EOFError,
    OSError,
)

SpreadsheetSource = Union[bytes, bytearray, memoryview, BinaryIO]


def _read_bytes(source: SpreadsheetSource) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    read = getattr(source, "read", None)
    if read is None:
        raise TypeError("expected bytes or a binary file-like object")
    data = read()
    if isinstance(data, str):
        raise TypeError("file-like source must be opened in binary mode")
    return bytes(data or b"")


def detect_engine(data: bytes) -> str:
    """Return the pandas engine for ``data`` based on its container signature."""
    if data.startswith(ZIP_MAGIC):
        return ENGINE_XLSX
    if data.startswith(OLE2_MAGIC):
        return ENGINE_XLS
    raise UnreadableFormatError("not a .xlsx (zip) or .xls (OLE2) container")


def cell_to_str(value: Any) -> str:
    """Display representation of a cell so callers never branch on cell type."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (datetime, pd.Timestamp)):
        if pd.isna(value):
            return ""
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ", timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.isoformat(timespec="seconds")
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    # Rich-text objects from openpyxl expose .plain or .text
    plain_attr = getattr(value, "plain", None)
    if isinstance(plain_attr, str):
        return plain_attr
    text_attr = getattr(value, "text", None)
    if isinstance(text_attr, str):
        return text_attr
    return str(value)


def read_first_sheet(source: SpreadsheetSource) -> List[List[str]]:
    """Return the first sheet as a rectangular list of string rows.

    Raises:
        EmptyFileError: zero-length input, no sheets, or a sheet without rows.
        UnreadableFormatError: bytes that do not parse as .xls/.xlsx.
    """
    data = _read_bytes(source)
    if not data:
        raise EmptyFileError("Uploaded file is empty", {"reason": "zero_bytes"})

    engine = detect_engine(data)
    try:
        with pd.ExcelFile(io.BytesIO(data), engine=engine) as xls:
            sheet_names = list(xls.sheet_names)
            if not sheet_names:
                raise EmptyFileError("Workbook has no sheets", {"reason": "no_sheets"})
            # No header inference, no NA conversion: "NA" or "null" are names too.
            df = xls.parse(sheet_names[0], header=None, dtype=object, na_filter=False)
    except _PARSE_ERRORS as exc:
        logger.debug("Workbook parse failed (engine=%s): %s", engine, exc)
        raise UnreadableFormatError(f"{type(exc).__name__}: {exc}") from exc

    if df.empty:
        raise EmptyFileError(
            "First sheet has no rows",
            {"reason": "no_rows", "sheet": str(sheet_names[0])},
        )

    grid = [[cell_to_str(value) for value in row] for row in df.itertuples(index=False, name=None)]
    logger.debug(
        "Read sheet '%s' with engine=%s: %d rows x %d columns",
        sheet_names[0], engine, len(grid), df.shape[1],
    )
    return grid


__all__ = [
    "read_first_sheet",
    "detect_engine",
    "cell_to_str",
    "ENGINE_XLS",
    "ENGINE_XLSX",
]
