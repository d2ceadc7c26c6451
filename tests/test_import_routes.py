from io import BytesIO

import pytest

from app import create_app
from conftest import build_workbook_bytes


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def _upload(client, url, files, **form):
    data = {name: (BytesIO(content), filename) for name, (content, filename) in files.items()}
    data.update(form)
    return client.post(url, data=data, content_type="multipart/form-data")


def test_person_list_upload_returns_records(client, basic_name_bytes):
    resp = _upload(client, "/import/person-list", {"file": (basic_name_bytes, "people.xlsx")})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["format_name"] == "Basic Name Information"
    assert body["result"]["formatType"] == "basic_name"
    assert body["result"]["records"][1]["lastName"] == "Cohen"
    assert body["warnings"] == []


def test_person_list_upload_reports_row_warnings(client):
    data = build_workbook_bytes([["worker_id"], ["1"], [""], ["3"]])

    resp = _upload(
        client, "/import/person-list", {"file": (data, "workers.xlsx")}, skip_empty_rows="false"
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["result"]["validRows"] == 2
    assert body["warnings"] == ["Row 2: Missing required fields (workerId)"]


def test_unrecognized_headers_are_422_with_localized_message(client):
    data = build_workbook_bytes([["foo", "bar"], ["1", "2"]])

    resp = _upload(client, "/import/person-list", {"file": (data, "odd.xlsx")})

    assert resp.status_code == 422
    body = resp.get_json()
    assert body["error"] == "UnrecognizedFormatError"
    assert body["details"]["headers"] == ["foo", "bar"]
    assert body["display_message"] == "Unrecognized Excel format. Available headers: foo, bar"


def test_error_message_follows_accept_language(client):
    resp = client.post(
        "/import/person-list",
        data={"file": (BytesIO(b""), "empty.xlsx")},
        content_type="multipart/form-data",
        headers={"Accept-Language": "ru"},
    )

    assert resp.status_code == 422
    assert resp.get_json()["display_message"] == "Файл Excel пуст или недействителен"


def test_strict_mode_form_flag(client):
    data = build_workbook_bytes([["firstName", "lastName"], ["Dana", ""]])

    resp = _upload(client, "/import/person-list", {"file": (data, "p.xlsx")}, strict_mode="on")

    assert resp.status_code == 422
    assert resp.get_json()["error"] == "StrictModeViolationError"


def test_missing_file_is_400(client):
    resp = client.post("/import/person-list", data={}, content_type="multipart/form-data")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidUploadError"


def test_wrong_extension_is_400(client, basic_name_bytes):
    resp = _upload(client, "/import/person-list", {"file": (basic_name_bytes, "people.csv")})

    assert resp.status_code == 400
    assert resp.get_json()["details"]["filename"] == "people.csv"


def test_event_lists_import_both_files(client, basic_name_bytes):
    approvers = build_workbook_bytes([["worker_id"], ["42"]])

    resp = _upload(client, "/import/event-lists", {
        "applicants": (basic_name_bytes, "applicants.xlsx"),
        "approvers": (approvers, "approvers.xlsx"),
    })

    assert resp.status_code == 200
    files = resp.get_json()["files"]
    assert files["applicants"]["result"]["validRows"] == 2
    assert files["approvers"]["format_name"] == "Worker ID List"


def test_event_lists_partial_failure(client, basic_name_bytes):
    resp = _upload(client, "/import/event-lists", {
        "applicants": (basic_name_bytes, "applicants.xlsx"),
        "approvers": (b"garbage", "approvers.xls"),
    })

    assert resp.status_code == 207
    body = resp.get_json()
    assert body["status"] == "partial"
    assert body["files"]["approvers"]["error"] == "UnreadableFormatError"
    assert body["files"]["approvers"]["display_message"]


def test_event_lists_approvers_optional(client, basic_name_bytes):
    resp = _upload(client, "/import/event-lists", {"applicants": (basic_name_bytes, "a.xlsx")})

    assert resp.status_code == 200
    assert list(resp.get_json()["files"]) == ["applicants"]


def test_expected_headers(client):
    resp = client.get("/import/person-list/expected-headers?language=he")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["language"] == "he"
    by_type = {f["format_type"]: f for f in body["formats"]}
    assert by_type["basic_name"]["headers"] == ["שם פרטי", "שם משפחה"]
    assert by_type["complete_employee"]["format_name"] == "Complete Employee Data"


def test_strict_mode_error_carries_row_details(client):
    data = build_workbook_bytes([["firstName", "lastName"], ["Dana", ""], ["Avi", "Cohen"]])

    resp = _upload(client, "/import/person-list", {"file": (data, "p.xlsx")}, strict_mode="true")

    body = resp.get_json()
    assert resp.status_code == 422
    assert body["details"]["rows"] == [{"row": 1, "field": "lastName", "missing_fields": ["lastName"]}]
    assert body["display_message"] == "Import rejected: 1 row(s) have missing required fields"


def test_plain_404_keeps_json_shape(client):
    resp = client.get("/import/nowhere")

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NotFound"
