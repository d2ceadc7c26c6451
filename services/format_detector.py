# services/format_detector.py
"""Detect which person-list shape (and header language) a header row uses.

Resolution rules
----------------
- A (language, shape) pair qualifies only when every required field of the
  shape is matched by some header in that language.
- Among qualifying pairs the shape with the most required fields wins; ties
  go to the language declared first in the alias table, then to the shape
  declared first in ``RecordShape``.
- Blank headers are ignored. For duplicate headers the last occurrence gives
  the column index, the first occurrence is reported, and the field counts
  once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from domain.models.import_result import AUTO_LANGUAGE, DetectionResult
from domain.models.record_shape import RecordShape, required_fields, richer_shapes
from middleware.errors import UnrecognizedFormatError, UnsupportedLanguageError
from utils.header_aliases import DEFAULT_ALIAS_TABLE, HeaderAliasTable

logger = logging.getLogger(__name__)


@dataclass
class _LanguageMatch:
    """Headers of one row resolved against one language."""

    language: str
    columns: Dict[str, int] = field(default_factory=dict)  # field -> last column index
    first_seen: Dict[str, tuple[int, str]] = field(default_factory=dict)  # field -> (index, raw header)

    def covers(self, shape: RecordShape) -> bool:
        return all(f in self.columns for f in required_fields(shape))


def _languages_to_scan(alias_table: HeaderAliasTable, language: Optional[str]) -> List[str]:
    if not language or language == AUTO_LANGUAGE:
        return list(alias_table.languages)
    if language not in alias_table:
        raise UnsupportedLanguageError(language, alias_table.languages)
    return [language]


def _match_language(headers: Sequence[str], alias_table: HeaderAliasTable, language: str) -> _LanguageMatch:
    match = _LanguageMatch(language=language)
    for idx, raw in enumerate(headers):
        canonical = alias_table.field_for(raw, language)
        if canonical is None:
            continue
        match.columns[canonical] = idx
        match.first_seen.setdefault(canonical, (idx, str(raw).strip()))
    return match


def _missing_for_richer_shape(
    shape: RecordShape, match: _LanguageMatch, alias_table: HeaderAliasTable
) -> tuple[str, ...]:
    richer = richer_shapes(shape)
    if not richer:
        return ()
    target = richer[0]
    missing = [f for f in required_fields(target) if f not in match.columns]
    return tuple(
        (alias_table.aliases(match.language, f) or (f,))[0]
        for f in missing
    )


def detect_format(
    headers: Sequence[object],
    alias_table: HeaderAliasTable | None = None,
    language: str | None = AUTO_LANGUAGE,
) -> DetectionResult:
    """Classify a header row.

    Args:
        headers: raw header cells, in column order.
        alias_table: alias table to match against (built-in table by default).
        language: ``"auto"`` to scan every configured language, or a language
            code to pin detection to.

    Raises:
        UnrecognizedFormatError: no (language, shape) pair is fully matched.
        UnsupportedLanguageError: ``language`` is pinned but not configured.
    """
    table = alias_table or DEFAULT_ALIAS_TABLE
    cells = ["" if h is None else str(h) for h in headers]
    present = [c.strip() for c in cells if c.strip()]

    shape_order = {shape: i for i, shape in enumerate(RecordShape)}
    candidates: list[tuple[int, int, int, RecordShape, _LanguageMatch]] = []
    for lang_idx, lang in enumerate(_languages_to_scan(table, language)):
        match = _match_language(cells, table, lang)
        if not match.columns:
            continue
        for shape in RecordShape:
            if match.covers(shape):
                candidates.append(
                    (-len(required_fields(shape)), lang_idx, shape_order[shape], shape, match)
                )

    if not candidates:
        logger.debug("No person-list format matched headers %s", present)
        raise UnrecognizedFormatError(present)

    candidates.sort(key=lambda c: c[:3])
    _, _, _, shape, match = candidates[0]
    needed = required_fields(shape)

    confidence = len(needed) / len(present) if present else 0.0
    confidence = max(0.0, min(1.0, confidence))

    first = sorted(match.first_seen[f] for f in needed)
    result = DetectionResult(
        shape=shape,
        confidence=confidence,
        matched_headers=tuple(raw for _, raw in first),
        missing_headers=_missing_for_richer_shape(shape, match, table),
        language=match.language,
        columns={f: match.columns[f] for f in needed},
    )
    logger.debug(
        "Detected %s (language=%s, confidence=%.2f, candidates=%d)",
        result.shape, result.language, result.confidence, len(candidates),
    )
    return result


__all__ = ["detect_format"]
