# services/person_list_import_service.py
"""Person-list import: uploaded spreadsheet -> canonical person records.

Pipeline: workbook reader -> format detector (row 0) -> record normalizer
(rows 1..N). Every expected failure comes back as a value inside
``ImportOutcome``; nothing partial is returned on failure.

Conventions
-----------
- Only the first sheet is read; row 0 is the header row.
- A file with a header but no data rows is an ``EmptyFileError``, checked
  before the header is classified.
- Each call is independent: imports of several files (applicants, approvers)
  can run side by side.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from domain.models.import_result import ImportOptions, ImportResult
from middleware.errors import EmptyFileError, PersonListImportError
from services.format_detector import detect_format
from services.record_normalizer import is_blank_row, normalize_rows
from services.workbook_reader import SpreadsheetSource, read_first_sheet
from utils.header_aliases import DEFAULT_ALIAS_TABLE, HeaderAliasTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportOutcome:
    """Either a result or a typed error, never both."""

    result: Optional[ImportResult] = None
    error: Optional[PersonListImportError] = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("ImportOutcome needs exactly one of result or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ImportResult:
        """Return the result, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.result  # type: ignore[return-value]


def _run_import(
    source: SpreadsheetSource,
    options: ImportOptions,
    alias_table: HeaderAliasTable,
) -> ImportResult:
    grid = read_first_sheet(source)
    header, data_rows = grid[0], grid[1:]

    if all(is_blank_row(row) for row in data_rows):
        raise EmptyFileError(
            "Spreadsheet has a header row but no data rows",
            {"reason": "no_data_rows", "headers": [h.strip() for h in header if h.strip()]},
        )

    detection = detect_format(header, alias_table, options.language)
    normalized = normalize_rows(detection, data_rows, options)

    return ImportResult(
        format_type=detection.shape,
        records=normalized.records,
        total_rows=normalized.total_rows,
        valid_rows=normalized.valid_rows,
        warnings=normalized.warnings,
        language=detection.language,
    )


def import_person_list(
    file: SpreadsheetSource,
    options: ImportOptions | Mapping[str, Any] | None = None,
    *,
    alias_table: HeaderAliasTable | None = None,
) -> ImportOutcome:
    """Import one person list.

    Args:
        file: spreadsheet bytes or a binary file-like object (an upload).
        options: ``ImportOptions`` or a mapping of its fields; defaults come
            from the environment-backed settings.
        alias_table: header alias table (built-in table by default).

    Returns:
        ``ImportOutcome`` holding either the ``ImportResult`` or the
        ``PersonListImportError`` that stopped the import.

    Raises:
        pydantic.ValidationError: ``options`` is a mapping that does not
            validate as ``ImportOptions``. This is a caller error, raised
            before the file is read, not an import outcome.
    """
    if options is None:
        opts = ImportOptions.from_settings()
    elif isinstance(options, ImportOptions):
        opts = options
    else:
        opts = ImportOptions.from_settings(**dict(options))
    table = alias_table or DEFAULT_ALIAS_TABLE

    try:
        result = _run_import(file, opts, table)
    except PersonListImportError as exc:
        logger.warning("Person list import failed: %s %s", type(exc).__name__, exc.details)
        return ImportOutcome(error=exc)

    logger.info(
        "Imported person list: format=%s language=%s valid=%d/%d warnings=%d",
        result.format_type, result.language, result.valid_rows,
        result.total_rows, len(result.warnings),
    )
    return ImportOutcome(result=result)


def import_person_lists(
    files: Mapping[str, SpreadsheetSource],
    options: ImportOptions | Mapping[str, Any] | None = None,
    *,
    alias_table: HeaderAliasTable | None = None,
) -> Dict[str, ImportOutcome]:
    """Import several named files independently, preserving their order."""
    outcomes: Dict[str, ImportOutcome] = {}
    for i, (name, source) in enumerate(files.items(), start=1):
        logger.info("Processing file %d/%d: %s", i, len(files), name)
        outcomes[name] = import_person_list(source, options, alias_table=alias_table)

    succeeded = sum(1 for o in outcomes.values() if o.ok)
    logger.info("Batch import complete: %d/%d files imported", succeeded, len(outcomes))
    return outcomes


def excel_file_to_person_list(file: SpreadsheetSource) -> Optional[List[dict]]:
    """Legacy helper: camelCase record dicts, or ``None`` if the import fails.

    Unlike the older helper of the same name, rows missing a required field
    are dropped (the regular skip policy), not returned half-filled.
    """
    outcome = import_person_list(
        file,
        ImportOptions(language="auto", skip_empty_rows=True),
    )
    if not outcome.ok:
        logger.error("Excel file processing failed: %s", outcome.error.message)
        return None
    return [record.to_dict() for record in outcome.result.records]


__all__ = [
    "ImportOutcome",
    "import_person_list",
    "import_person_lists",
    "excel_file_to_person_list",
]
