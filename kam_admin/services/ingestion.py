# kam_admin/services/ingestion.py
"""Spreadsheet import: header checks, type coercion, date validation and the
derived ProRatedAch metric for performance records.

``parse_performance_rows`` is a pure, all-or-nothing pass: the first bad cell
aborts the batch and nothing is returned.
"""
import csv
import logging
import math
import re
import zipfile
from datetime import date, datetime
from io import BytesIO, StringIO
from typing import Any, List, Optional, Sequence

import pandas as pd
import xlrd
from openpyxl.utils.exceptions import InvalidFileException

from kam_admin.core.exceptions import (
    EmptyDataset,
    InvalidDate,
    InvalidNumeric,
    MissingHeaders,
    UnreadableWorkbook,
    UnsupportedFileType,
)
from kam_admin.schemas.performance import PerformanceRecordData

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = ("UserID", "Date", "Name", "POC", "Potential", "Last 30 days", "ShortFall")
NUMERIC_FIELDS = ("Potential", "Last 30 days", "ShortFall")

# Day 01-31, month 01-12. Does not check day against month or leap years.
DATE_PATTERN = re.compile(r"(0[1-9]|[12][0-9]|3[01])/(0[1-9]|1[0-2])/[0-9]{4}")

EXCEL_EXTENSIONS = (".xlsx", ".xlsm", ".xls")
CSV_EXTENSIONS = (".csv",)


def round_half_away_from_zero(value: float, places: int = 2) -> float:
    scale = 10 ** places
    return math.copysign(math.floor(abs(value) * scale + 0.5) / scale, value)


def compute_pro_rated_ach(potential: float, last_30_days: float) -> float:
    if potential > 0:
        return round_half_away_from_zero(last_30_days / potential * 100)
    return 0.0


def _is_blank(cell: Any) -> bool:
    if cell is None:
        return True
    if isinstance(cell, float) and math.isnan(cell):
        return True
    return isinstance(cell, str) and not cell.strip()


def _as_text(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        # numeric IDs come back from Excel as 12345.0
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.strftime("%d/%m/%Y")
    return str(value).strip()


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or _is_blank(value):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def parse_performance_rows(rows: Sequence[Sequence[Any]]) -> List[PerformanceRecordData]:
    """Validate raw spreadsheet rows and build performance records.

    ``rows[0]`` is the header. Row numbers reported in errors are spreadsheet
    row numbers (the header is row 1). Fully blank rows are ignored. Rows with
    an empty UserID, Name or POC are dropped after validation.

    Raises:
        EmptyDataset: no data rows below the header.
        MissingHeaders: a required column is absent.
        InvalidNumeric: Potential, Last 30 days or ShortFall is not a number.
        InvalidDate: Date does not match dd/mm/yyyy.
    """
    numbered = [(index, row) for index, row in enumerate(rows, start=1)
                if row is not None and not all(_is_blank(cell) for cell in row)]
    if len(numbered) < 2:
        raise EmptyDataset()

    _, header_row = numbered[0]
    headers = [_as_text(cell) for cell in header_row]
    missing = [h for h in REQUIRED_HEADERS if h not in headers]
    if missing:
        raise MissingHeaders(REQUIRED_HEADERS, missing)

    records = []
    for row_number, row in numbered[1:]:
        values = {}
        for position, header in enumerate(headers):
            values[header] = row[position] if position < len(row) else None

        user_id = _as_text(values["UserID"])
        name = _as_text(values["Name"])
        poc = _as_text(values["POC"])

        numbers = {}
        for field in NUMERIC_FIELDS:
            number = _as_number(values[field])
            if number is None:
                raise InvalidNumeric(row_number, field)
            numbers[field] = number

        row_date = _as_text(values["Date"])
        if not DATE_PATTERN.fullmatch(row_date):
            raise InvalidDate(row_number)

        pro_rated_ach = compute_pro_rated_ach(numbers["Potential"], numbers["Last 30 days"])

        if not (user_id and name and poc):
            continue

        records.append(
            PerformanceRecordData(
                user_id=user_id,
                date=row_date,
                name=name,
                poc=poc,
                potential=numbers["Potential"],
                last_30_days=numbers["Last 30 days"],
                pro_rated_ach=pro_rated_ach,
                short_fall=numbers["ShortFall"],
            )
        )

    logger.info("Parsed %d performance records from %d data rows", len(records), len(numbered) - 1)
    return records


def _read_csv(content: bytes) -> pd.DataFrame:
    text = content.decode("utf-8-sig")
    # rows may be wider than the header (trailing commas), so size columns to the widest line
    width = max((len(line) for line in csv.reader(StringIO(text))), default=0)
    if not width:
        raise EmptyDataset()
    return pd.read_csv(
        StringIO(text),
        header=None,
        names=range(width),
        dtype=object,
        keep_default_na=False,
        na_values=[""],
        skip_blank_lines=False,
    )


def read_workbook_rows(content: bytes, filename: str) -> List[List[Any]]:
    """Load the first sheet of an uploaded .xlsx, .xls or .csv file as raw rows.

    Only empty cells become missing values; text such as "NA" or "null" is
    kept as written.
    """
    fn = (filename or "").lower()
    if not fn.endswith(EXCEL_EXTENSIONS + CSV_EXTENSIONS):
        raise UnsupportedFileType(filename)
    if not content:
        raise EmptyDataset()

    try:
        if fn.endswith(CSV_EXTENSIONS):
            df = _read_csv(content)
        else:
            df = pd.read_excel(
                BytesIO(content),
                header=None,
                dtype=object,
                engine="xlrd" if fn.endswith(".xls") else "openpyxl",
                keep_default_na=False,
                na_values=[""],
            )
    except pd.errors.EmptyDataError:
        raise EmptyDataset()
    except (ValueError, OSError, KeyError, csv.Error, zipfile.BadZipFile, InvalidFileException,
            xlrd.XLRDError) as e:
        logger.warning("Could not read upload %s: %s", filename, e)
        raise UnreadableWorkbook(str(e)) from e

    df = df.astype(object).where(pd.notna(df), None)
    rows = []
    for raw in df.values.tolist():
        rows.append([cell.to_pydatetime() if isinstance(cell, pd.Timestamp) else cell for cell in raw])
    return rows


def parse_upload(content: bytes, filename: str) -> List[PerformanceRecordData]:
    return parse_performance_rows(read_workbook_rows(content, filename))
