import pytest

from domain.models.import_result import RowValidationWarning
from domain.models.record_shape import RecordShape
from middleware.errors import (
    ConfigurationError,
    EmptyFileError,
    InvalidUploadError,
    StrictModeViolationError,
    UnreadableFormatError,
    UnrecognizedFormatError,
    UnsupportedLanguageError,
)
from utils.messages import describe_error, describe_warning, get_format_display_name


@pytest.mark.parametrize(
    "shape,expected",
    [
        (RecordShape.COMPLETE_EMPLOYEE, "Complete Employee Data"),
        (RecordShape.BASIC_NAME, "Basic Name Information"),
        (RecordShape.EMPLOYEE_ID_ONLY, "Worker ID List"),
        (RecordShape.PERSON_ID_ONLY, "Person ID Numbers"),
    ],
)
def test_english_format_names(shape, expected):
    assert get_format_display_name(shape) == expected


def test_format_name_accepts_plain_value_and_falls_back():
    assert get_format_display_name("basic_name", "he") == "פרטי שם בסיסיים"
    assert get_format_display_name(RecordShape.BASIC_NAME, "xx") == "Basic Name Information"


def test_unrecognized_format_message_lists_headers():
    err = UnrecognizedFormatError(["foo", "bar"])
    assert describe_error(err) == "Unrecognized Excel format. Available headers: foo, bar"


@pytest.mark.parametrize(
    "error",
    [
        EmptyFileError(),
        UnreadableFormatError("bad zip"),
        UnrecognizedFormatError(["foo"]),
        StrictModeViolationError([RowValidationWarning(row=1, field="firstName")]),
        UnsupportedLanguageError("fr", ["en"]),
        InvalidUploadError(),
    ],
)
@pytest.mark.parametrize("language", ["en", "he", "ru"])
def test_every_error_has_a_message_in_every_language(error, language):
    text = describe_error(error, language)
    assert text
    assert "{" not in text


def test_russian_and_hebrew_differ_from_english():
    err = EmptyFileError()
    assert describe_error(err, "ru") != describe_error(err, "en")
    assert describe_error(err, "he") != describe_error(err, "en")


def test_unknown_error_uses_generic_template():
    assert describe_error(ConfigurationError("alias file missing")) == "Import failed: alias file missing"
    assert describe_error(RuntimeError("boom")) == "Import failed: boom"


def test_describe_warning_lists_missing_fields():
    warning = RowValidationWarning(row=4, field="firstName", missing_fields=["firstName", "lastName"])
    assert describe_warning(warning) == "Row 4: Missing required fields (firstName, lastName)"


def test_strict_mode_message_counts_rows():
    err = StrictModeViolationError([
        RowValidationWarning(row=1, field="firstName"),
        RowValidationWarning(row=5, field="lastName"),
    ])
    assert describe_error(err) == "Import rejected: 2 row(s) have missing required fields"
