from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.models.person_record import PersonRecord
from domain.models.record_shape import RecordShape

AUTO_LANGUAGE = "auto"


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of header detection for one upload.

    ``columns`` maps each required canonical field of ``shape`` to the column
    index the normalizer reads it from.
    """

    shape: RecordShape
    confidence: float
    matched_headers: tuple[str, ...]
    missing_headers: tuple[str, ...]
    language: str
    columns: dict[str, int] = field(default_factory=dict)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class RowValidationWarning(_CamelModel):
    """A data row that was skipped because a required field was empty.

    ``row`` is 1-based and counts data rows only (the first row under the
    header is row 1). ``field`` is the first empty required field;
    ``missing_fields`` lists every empty one.
    """

    row: int = Field(..., ge=1)
    field: str
    missing_fields: List[str] = Field(default_factory=list)


class ImportResult(_CamelModel):
    format_type: RecordShape
    records: List[PersonRecord] = Field(default_factory=list)
    total_rows: int = 0
    valid_rows: int = 0
    warnings: List[RowValidationWarning] = Field(default_factory=list)
    language: str

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class ImportOptions(_CamelModel):
    """Caller-facing knobs for one import."""

    language: str = AUTO_LANGUAGE
    skip_empty_rows: bool = True
    trim_whitespace: bool = True
    strict_mode: bool = False

    @field_validator("language", mode="before")
    @classmethod
    def _normalize_language(cls, v):
        text = str(v or "").strip().lower()
        return text or AUTO_LANGUAGE

    @property
    def pinned_language(self) -> str | None:
        return None if self.language == AUTO_LANGUAGE else self.language

    @classmethod
    def from_settings(cls, **overrides) -> "ImportOptions":
        """Options seeded from the environment-backed settings module."""
        from config import settings

        payload = {
            "language": settings.IMPORT_LANGUAGE,
            "skip_empty_rows": settings.IMPORT_SKIP_EMPTY_ROWS,
            "trim_whitespace": settings.IMPORT_TRIM_WHITESPACE,
            "strict_mode": settings.IMPORT_STRICT_MODE,
        }
        payload.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**payload)
