import pytest

from domain.models.import_result import DetectionResult, ImportOptions
from domain.models.person_record import BasicNameRecord, CompleteEmployeeRecord
from domain.models.record_shape import RecordShape
from middleware.errors import StrictModeViolationError
from services.record_normalizer import is_blank_row, normalize_rows


def _basic_name_detection(**overrides):
    payload = dict(
        shape=RecordShape.BASIC_NAME,
        confidence=1.0,
        matched_headers=("firstName", "lastName"),
        missing_headers=("id", "employee_number"),
        language="en",
        columns={"firstName": 0, "lastName": 1},
    )
    payload.update(overrides)
    return DetectionResult(**payload)


@pytest.mark.parametrize(
    "row,blank",
    [
        (["", "  ", "\t"], True),
        ([], True),
        ([None, ""], True),
        (["", "x"], False),
    ],
)
def test_is_blank_row(row, blank):
    assert is_blank_row(row) is blank


def test_rows_become_records_in_order():
    out = normalize_rows(_basic_name_detection(), [["Dana", "Levi"], ["Avi", "Cohen"]])

    assert [r.first_name for r in out.records] == ["Dana", "Avi"]
    assert all(isinstance(r, BasicNameRecord) for r in out.records)
    assert (out.total_rows, out.valid_rows, out.warnings) == (2, 2, [])


def test_row_missing_required_field_is_skipped_with_warning():
    rows = [["Dana", "Levi"], ["Avi", "   "], ["", ""], ["Noa", "Mizrahi"]]

    out = normalize_rows(_basic_name_detection(), rows)

    assert [r.first_name for r in out.records] == ["Dana", "Noa"]
    assert out.total_rows == 3
    assert out.valid_rows == 2
    assert len(out.warnings) == 1
    warning = out.warnings[0]
    assert warning.row == 2
    assert warning.field == "lastName"
    assert warning.missing_fields == ["lastName"]


def test_blank_rows_are_counted_when_not_skipped():
    rows = [["Dana", "Levi"], ["", ""]]

    out = normalize_rows(_basic_name_detection(), rows, ImportOptions(skip_empty_rows=False))

    assert out.total_rows == 2
    assert out.valid_rows == 1
    assert out.warnings[0].row == 2
    assert out.warnings[0].missing_fields == ["firstName", "lastName"]


def test_values_are_trimmed_by_default():
    out = normalize_rows(_basic_name_detection(), [["  Dana ", "Levi\t"]])
    assert (out.records[0].first_name, out.records[0].last_name) == ("Dana", "Levi")


def test_trim_whitespace_off_keeps_raw_value():
    out = normalize_rows(
        _basic_name_detection(), [["  Dana ", "Levi"]], ImportOptions(trim_whitespace=False)
    )
    assert out.records[0].first_name == "  Dana "


def test_short_rows_count_as_missing_trailing_cells():
    out = normalize_rows(_basic_name_detection(), [["Dana"]])
    assert out.valid_rows == 0
    assert out.warnings[0].field == "lastName"


def test_column_mapping_follows_detection():
    detection = DetectionResult(
        shape=RecordShape.COMPLETE_EMPLOYEE,
        confidence=0.8,
        matched_headers=("Employee Number", "id", "first name", "last name"),
        missing_headers=(),
        language="en",
        columns={"employeeNumber": 0, "id": 1, "firstName": 2, "lastName": 3},
    )

    out = normalize_rows(detection, [["E-17", "305", "Dana", "Levi", "ignored"]])

    record = out.records[0]
    assert isinstance(record, CompleteEmployeeRecord)
    assert record.employee_id == "E-17"
    assert record.person_id == "305"
    assert record.to_dict() == {
        "sourceFormat": "complete_employee",
        "firstName": "Dana",
        "lastName": "Levi",
        "employeeId": "E-17",
        "personId": "305",
    }


def test_strict_mode_raises_with_every_warning():
    rows = [["Dana", ""], ["Avi", "Cohen"], ["", "Levi"]]

    with pytest.raises(StrictModeViolationError) as exc:
        normalize_rows(_basic_name_detection(), rows, ImportOptions(strict_mode=True))

    assert [w.row for w in exc.value.warnings] == [1, 3]
    assert exc.value.details["rows"][1]["field"] == "firstName"


def test_strict_mode_passes_clean_input():
    out = normalize_rows(
        _basic_name_detection(), [["Dana", "Levi"]], ImportOptions(strict_mode=True)
    )
    assert out.valid_rows == 1
