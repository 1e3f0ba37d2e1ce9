"""Shared builders for spreadsheet payloads and auth headers."""
from io import BytesIO

from openpyxl import Workbook

ADMIN_EMAIL = "admin@kamcorp.com"
ADMIN_PASSWORD = "admin-pass-123"
EMPLOYEE_PASSWORD = "employee-pass-123"

HEADER = ["UserID", "Date", "Name", "POC", "Potential", "Last 30 days", "ShortFall"]

SAMPLE_ROWS = [
    HEADER,
    ["U001", "15/01/2024", "Ravi Kumar", "Priya", 100, 50, 50],
    ["U002", "15/01/2024", "Meena Shah", "Priya", 200, 180, 20],
    ["U003", "16/01/2024", "Arjun Das", "Karan", 0, 40, 0],
    ["U004", "16/01/2024", "Neha Iyer", "Karan", 400, 100, 300],
]


def xlsx_bytes(rows):
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def csv_bytes(rows):
    lines = [",".join("" if cell is None else str(cell) for cell in row) for row in rows]
    return ("\n".join(lines) + "\n").encode("utf-8")


def login(client, email, password):
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
