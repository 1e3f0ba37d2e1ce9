# kam_admin/core/exceptions.py
from typing import Iterable, Optional


class ImportValidationError(Exception):
    """Base class for spreadsheet import failures.

    All of these are user-input errors: the whole batch is rejected and the
    operator is expected to fix the file and upload it again.
    """

    def __init__(self, message: str, row: Optional[int] = None, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.row = row
        self.field = field

    def to_dict(self) -> dict:
        return {
            "detail": self.message,
            "error": type(self).__name__,
            "row": self.row,
            "field": self.field,
        }


class EmptyDataset(ImportValidationError):
    def __init__(self):
        super().__init__("Excel file must contain at least a header row and one data row")


class MissingHeaders(ImportValidationError):
    def __init__(self, expected: Iterable[str], missing: Iterable[str] = ()):
        self.expected = list(expected)
        self.missing = list(missing)
        super().__init__(
            "Excel file must contain the following headers: " + ", ".join(self.expected)
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["expected"] = self.expected
        data["missing"] = self.missing
        return data


class InvalidNumeric(ImportValidationError):
    def __init__(self, row: int, field: str):
        super().__init__(f"Invalid numeric value in row {row}, column {field}", row=row, field=field)


class InvalidDate(ImportValidationError):
    def __init__(self, row: int):
        super().__init__(
            f"Invalid date format in row {row}. Expected format: dd/mm/yyyy", row=row, field="Date"
        )


class UnsupportedFileType(ImportValidationError):
    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Please upload a valid Excel file (.xlsx, .xls) or CSV file, got '{filename}'")


class UnreadableWorkbook(ImportValidationError):
    def __init__(self, reason: str):
        super().__init__(f"Failed to read uploaded file: {reason}")
