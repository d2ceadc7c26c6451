# utils/header_aliases.py
"""Header translation table: raw spreadsheet headers -> canonical fields.

Keep ``HEADER_ALIASES`` as the single source of truth for which header
spellings each language accepts. The first alias of every field is its
primary spelling, the one shown to users as the expected header.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from domain.models.record_shape import CANONICAL_FIELDS, RecordShape, required_fields

# ─────────────────────────────────────────────────────────────────────────────
# 1) Built-in aliases: language -> canonical field -> header spellings
#    Language order is the detection tie-break order.
# ─────────────────────────────────────────────────────────────────────────────
HEADER_ALIASES: dict[str, dict[str, list[str]]] = {
    "en": {
        "id": ["id", "identifier"],
        "firstName": ["firstName", "first_name", "First Name", "name", "given name"],
        "lastName": ["lastName", "last_name", "Last Name", "surname", "family name"],
        "employeeNumber": ["employee_number", "employeeNumber", "Employee Number", "employee no"],
        "workerId": ["worker_id", "workerId", "Worker ID", "employee_id", "employee id"],
        "personIdNumber": ["person_id_number", "personIdNumber", "Person ID Number", "national id", "id number"],
    },
    "he": {
        "id": ["מזהה"],
        "firstName": ["שם פרטי", "שם", "firstName"],
        "lastName": ["שם משפחה", "lastName"],
        "employeeNumber": ["מספר עובד"],
        "workerId": ["מזהה עובד"],
        "personIdNumber": ["תעודת זהות", "ת.ז.", "ת\"ז", "מספר זהות"],
    },
    "ru": {
        "id": ["ид", "идентификатор"],
        "firstName": ["имя", "firstName"],
        "lastName": ["фамилия", "lastName"],
        "employeeNumber": ["номер_сотрудника", "номер сотрудника", "табельный номер"],
        "workerId": ["ид_работника", "ид работника"],
        "personIdNumber": ["паспорт", "номер паспорта"],
    },
}

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_header(value: object) -> str:
    """Trim, collapse internal whitespace and case-fold a header cell."""

    if value is None:
        return ""
    return _WHITESPACE_RE.sub(" ", str(value).strip()).casefold()


class HeaderAliasTable:
    """Immutable per-language alias table.

    Construction validates that, within one language, no normalized alias
    belongs to two canonical fields. Aliases may repeat across languages.
    """

    def __init__(self, aliases: Mapping[str, Mapping[str, Iterable[str]]]):
        if not aliases:
            raise ValueError("alias table needs at least one language")

        table: dict[str, Mapping[str, tuple[str, ...]]] = {}
        lookup: dict[str, Mapping[str, str]] = {}
        for language, fields in aliases.items():
            lang = str(language).strip().lower()
            if not lang:
                raise ValueError("language codes must be non-empty")
            if lang in table:
                raise ValueError(f"language '{lang}' declared twice")

            field_aliases: dict[str, tuple[str, ...]] = {}
            header_to_field: dict[str, str] = {}
            for field, raw_aliases in fields.items():
                if field not in CANONICAL_FIELDS:
                    raise ValueError(f"unknown canonical field '{field}' in language '{lang}'")
                cleaned = tuple(a.strip() for a in raw_aliases if a and a.strip())
                if not cleaned:
                    continue
                field_aliases[field] = cleaned
                for alias in cleaned:
                    key = normalize_header(alias)
                    owner = header_to_field.get(key)
                    if owner is not None and owner != field:
                        raise ValueError(
                            f"ambiguous header '{alias}' in language '{lang}': "
                            f"maps to both '{owner}' and '{field}'"
                        )
                    header_to_field[key] = field

            table[lang] = MappingProxyType(field_aliases)
            lookup[lang] = MappingProxyType(header_to_field)

        self._table = MappingProxyType(table)
        self._lookup = MappingProxyType(lookup)

    # ----------------- Construction helpers -----------------
    @classmethod
    def from_json(cls, path: str | Path) -> "HeaderAliasTable":
        """Load ``{"en": {"firstName": [...], ...}, ...}`` from a JSON file."""
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"alias file {path} must contain a JSON object")
        return cls(data)

    # ----------------- Queries -----------------
    @property
    def languages(self) -> tuple[str, ...]:
        """Configured languages in declaration order."""
        return tuple(self._table)

    def aliases(self, language: str, field: str) -> tuple[str, ...]:
        return self._table.get(language, {}).get(field, ())

    def field_for(self, header: object, language: str) -> str | None:
        """Canonical field for a raw header in ``language``, or ``None``."""
        key = normalize_header(header)
        if not key:
            return None
        return self._lookup.get(language, {}).get(key)

    def expected_headers(self, shape: RecordShape, language: str = "en") -> list[str]:
        """Primary header spelling of each field ``shape`` requires.

        Falls back to English (then to the first configured language) when
        ``language`` is not configured.
        """
        lang = language if language in self._table else ("en" if "en" in self._table else self.languages[0])
        out: list[str] = []
        for field in required_fields(shape):
            names = self.aliases(lang, field)
            out.append(names[0] if names else field)
        return out

    def __contains__(self, language: object) -> bool:
        return language in self._table

    def __repr__(self) -> str:
        return f"HeaderAliasTable(languages={list(self.languages)!r})"


DEFAULT_ALIAS_TABLE = HeaderAliasTable(HEADER_ALIASES)


def get_expected_headers(shape: RecordShape, language: str = "en") -> list[str]:
    """Expected headers for ``shape`` from the built-in table."""
    return DEFAULT_ALIAS_TABLE.expected_headers(shape, language)


def load_alias_table(path: str | None = None) -> HeaderAliasTable:
    """Alias table from ``path`` if given, otherwise the built-in one."""
    if path:
        return HeaderAliasTable.from_json(path)
    return DEFAULT_ALIAS_TABLE


__all__ = [
    "HEADER_ALIASES",
    "DEFAULT_ALIAS_TABLE",
    "HeaderAliasTable",
    "get_expected_headers",
    "load_alias_table",
    "normalize_header",
]
