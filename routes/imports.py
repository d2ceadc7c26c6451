# routes/imports.py
from __future__ import annotations

import os
from typing import Any

from flask import Blueprint, current_app, jsonify, request

from domain.models.import_result import ImportOptions, ImportResult
from domain.models.record_shape import RecordShape
from middleware.errors import InvalidUploadError
from middleware.handlers import request_language
from services.person_list_import_service import import_person_list, import_person_lists
from utils.messages import describe_error, describe_warning, get_format_display_name

imports_bp = Blueprint("imports", __name__, url_prefix="/import")
ALLOWED_EXTENSIONS = {".xlsx", ".xls"}
_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def _allowed_file(filename: str) -> bool:
    _, ext = os.path.splitext(filename.lower())
    return ext in ALLOWED_EXTENSIONS


def _form_bool(name: str) -> bool | None:
    """Tri-state form flag: ``None`` when absent or unparseable."""
    raw = (request.form.get(name) or "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return None


def _options_from_form() -> ImportOptions:
    return ImportOptions.from_settings(
        language=request.form.get("language") or None,
        skip_empty_rows=_form_bool("skip_empty_rows"),
        trim_whitespace=_form_bool("trim_whitespace"),
        strict_mode=_form_bool("strict_mode"),
    )


def _uploaded_bytes(field: str, required: bool = True) -> bytes | None:
    f = request.files.get(field)
    if not f or not f.filename:
        if required:
            raise InvalidUploadError("No file selected", {"field": field})
        return None
    if not _allowed_file(f.filename):
        raise InvalidUploadError(
            "Unsupported file type. Please upload .xlsx or .xls.",
            {"field": field, "filename": f.filename},
        )
    return f.read()


def _result_payload(result: ImportResult, lang: str) -> dict[str, Any]:
    return {
        "result": result.to_dict(),
        "format_name": get_format_display_name(RecordShape(result.format_type), lang),
        "warnings": [describe_warning(w, lang) for w in result.warnings],
    }


@imports_bp.post("/person-list")
def import_person_list_upload():
    """
    Upload one person list and return its canonical records.
    - Form field ``file``: the .xls/.xlsx upload
    - Optional form fields: language, skip_empty_rows, trim_whitespace, strict_mode
    - Import failures are raised so the JSON error handlers render them
    """
    data = _uploaded_bytes("file")
    options = _options_from_form()
    lang = request_language()

    outcome = import_person_list(data, options, alias_table=current_app.config.get("ALIAS_TABLE"))
    if not outcome.ok:
        raise outcome.error

    return jsonify({"status": "ok", **_result_payload(outcome.result, lang)})


@imports_bp.post("/event-lists")
def import_event_lists():
    """
    Import the applicants list and (optionally) the approvers list of an event.
    Each file is imported independently; one failing does not hide the other.
    """
    files = {"applicants": _uploaded_bytes("applicants")}
    approvers = _uploaded_bytes("approvers", required=False)
    if approvers is not None:
        files["approvers"] = approvers

    options = _options_from_form()
    lang = request_language()
    outcomes = import_person_lists(
        files, options, alias_table=current_app.config.get("ALIAS_TABLE")
    )

    body: dict[str, Any] = {}
    for name, outcome in outcomes.items():
        if outcome.ok:
            body[name] = {"status": "ok", **_result_payload(outcome.result, lang)}
        else:
            err = outcome.error
            body[name] = {**err.to_dict(), "display_message": describe_error(err, lang)}

    succeeded = sum(1 for o in outcomes.values() if o.ok)
    if succeeded == len(outcomes):
        status, status_code = "ok", 200
    elif succeeded:
        status, status_code = "partial", 207
    else:
        status, status_code = "error", 422
    current_app.logger.info("Event lists import: %d/%d files ok", succeeded, len(outcomes))
    return jsonify({"status": status, "files": body}), status_code


@imports_bp.get("/person-list/expected-headers")
def expected_headers():
    """Primary header spellings per format, for the upload form's help text."""
    lang = (request.args.get("language") or "en").strip().lower()
    table = current_app.config["ALIAS_TABLE"]
    if lang not in table:
        lang = "en" if "en" in table else table.languages[0]
    ui_lang = request_language()
    formats = [
        {
            "format_type": str(shape),
            "format_name": get_format_display_name(shape, ui_lang),
            "headers": table.expected_headers(shape, lang),
        }
        for shape in RecordShape
    ]
    return jsonify({"status": "ok", "language": lang, "languages": list(table.languages), "formats": formats})
