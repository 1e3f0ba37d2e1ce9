"""Upload, preview and confirm over HTTP."""
from helpers import HEADER, SAMPLE_ROWS, csv_bytes, xlsx_bytes


def upload(client, headers, rows=SAMPLE_ROWS, filename="performance.xlsx", path="/performance/import"):
    payload = xlsx_bytes(rows) if filename.endswith(".xlsx") else csv_bytes(rows)
    return client.post(path, files={"file": (filename, payload)}, headers=headers)


def test_preview_returns_records_without_saving(client, admin_headers):
    response = upload(client, admin_headers, path="/performance/import/preview")

    assert response.status_code == 200
    body = response.json()
    assert body["total_rows"] == 4
    assert [r["pro_rated_ach"] for r in body["records"]] == [50.0, 90.0, 0.0, 25.0]

    table = client.get("/performance", headers=admin_headers).json()
    assert table["records"] == []


def test_confirm_import_persists_records(client, admin_headers, imported):
    assert imported == {"imported": 4, "message": "Data imported successfully!"}

    table = client.get("/performance", headers=admin_headers).json()

    assert table["stats"]["total"] == 4
    assert table["stats"]["underperforming"] == 2
    assert table["pocs"] == ["Karan", "Priya"]
    assert {r["user_id"] for r in table["records"]} == {"U001", "U002", "U003", "U004"}


def test_second_import_replaces_collection(client, admin_headers, imported):
    rows = [HEADER, ["U100", "01/02/2024", "Sana Mir", "Priya", 100, 75, 25]]

    response = upload(client, admin_headers, rows=rows, filename="february.csv")

    assert response.status_code == 200
    table = client.get("/performance", headers=admin_headers).json()
    assert [r["user_id"] for r in table["records"]] == ["U100"]


def test_failed_import_keeps_previous_data(client, admin_headers, imported):
    rows = [HEADER, ["U100", "01/02/2024", "Sana Mir", "Priya", "lots", 75, 25]]

    response = upload(client, admin_headers, rows=rows)

    assert response.status_code == 422
    table = client.get("/performance", headers=admin_headers).json()
    assert table["stats"]["total"] == 4


def test_invalid_numeric_error_body(client, admin_headers):
    rows = [HEADER, SAMPLE_ROWS[1], ["U9", "15/01/2024", "Ravi", "Priya", 100, "n/a", 0]]

    response = upload(client, admin_headers, rows=rows)

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "InvalidNumeric"
    assert body["row"] == 3
    assert body["field"] == "Last 30 days"
    assert "row 3" in body["detail"]


def test_missing_headers_error_body(client, admin_headers):
    header = [h for h in HEADER if h != "POC"]
    rows = [header, ["U1", "15/01/2024", "Ravi", 100, 50, 50]]

    response = upload(client, admin_headers, rows=rows, path="/performance/import/preview")

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "MissingHeaders"
    assert body["missing"] == ["POC"]
    assert body["expected"] == HEADER


def test_invalid_date_error_body(client, admin_headers):
    rows = [HEADER, ["U1", "2024-01-15", "Ravi", "Priya", 100, 50, 50]]

    body = upload(client, admin_headers, rows=rows).json()

    assert body["error"] == "InvalidDate"
    assert body["row"] == 2
    assert body["field"] == "Date"


def test_unsupported_file_type(client, admin_headers):
    files = {"file": ("report.pdf", b"%PDF-1.4")}

    response = client.post("/performance/import", files=files, headers=admin_headers)

    assert response.status_code == 422
    assert response.json()["error"] == "UnsupportedFileType"


def test_header_only_upload_is_empty_dataset(client, admin_headers):
    response = upload(client, admin_headers, rows=[HEADER])

    assert response.status_code == 422
    assert response.json()["error"] == "EmptyDataset"


def test_employee_cannot_import(client, make_employee):
    headers = make_employee("Priya")

    response = upload(client, headers)

    assert response.status_code == 403


def test_import_requires_authentication(client):
    response = client.post("/performance/import", files={"file": ("p.xlsx", xlsx_bytes(SAMPLE_ROWS))})

    assert response.status_code in (401, 403)


def test_table_filters_over_http(client, admin_headers, imported):
    params = {"performance": "underperforming", "sort_field": "pro_rated_ach", "sort_direction": "desc"}

    table = client.get("/performance", params=params, headers=admin_headers).json()

    assert [r["user_id"] for r in table["records"]] == ["U004", "U003"]


def test_bad_sort_field_is_rejected(client, admin_headers):
    response = client.get("/performance", params={"sort_field": "password"}, headers=admin_headers)

    assert response.status_code == 422
