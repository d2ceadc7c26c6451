# services/record_normalizer.py
"""Turn data rows into canonical person records for a detected shape.

Rows missing any required field are dropped with a warning rather than
filled in; blank rows are spreadsheet padding and are dropped silently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from domain.models.import_result import DetectionResult, ImportOptions, RowValidationWarning
from domain.models.person_record import build_record
from domain.models.record_shape import required_fields
from middleware.errors import StrictModeViolationError

logger = logging.getLogger(__name__)


@dataclass
class NormalizedRows:
    records: list = field(default_factory=list)
    warnings: List[RowValidationWarning] = field(default_factory=list)
    total_rows: int = 0
    valid_rows: int = 0


def is_blank_row(row: Sequence[object]) -> bool:
    return all(not str(cell if cell is not None else "").strip() for cell in row)


def _cell(row: Sequence[object], idx: int) -> str:
    if idx >= len(row) or row[idx] is None:
        return ""
    return str(row[idx])


def normalize_rows(
    detection: DetectionResult,
    rows: Sequence[Sequence[object]],
    options: Optional[ImportOptions] = None,
) -> NormalizedRows:
    """Build records from ``rows`` (data rows only, header excluded).

    Raises:
        StrictModeViolationError: ``options.strict_mode`` is set and at least
            one row was skipped for a missing field.
    """
    opts = options or ImportOptions()
    fields = required_fields(detection.shape)
    out = NormalizedRows()

    for row_no, row in enumerate(rows, start=1):
        if opts.skip_empty_rows and is_blank_row(row):
            continue
        out.total_rows += 1

        values: dict[str, str] = {}
        missing: list[str] = []
        for f in fields:
            raw = _cell(row, detection.columns[f])
            stripped = raw.strip()
            if not stripped:
                missing.append(f)
                continue
            values[f] = stripped if opts.trim_whitespace else raw

        if missing:
            out.warnings.append(
                RowValidationWarning(row=row_no, field=missing[0], missing_fields=missing)
            )
            continue

        out.records.append(build_record(detection.shape, values))
        out.valid_rows += 1

    if out.warnings:
        logger.debug(
            "Skipped %d of %d rows with missing required fields",
            len(out.warnings), out.total_rows,
        )
        if opts.strict_mode:
            raise StrictModeViolationError(out.warnings)
    return out


__all__ = ["NormalizedRows", "normalize_rows", "is_blank_row"]
