# catalog_diff/row_source.py
from __future__ import annotations

import csv
import logging
import os
import zipfile
from typing import List

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from .exceptions import RowSourceError
from .models import RawRow

logger = logging.getLogger(__name__)

# Line 1 holds the snapshot labels ("Thursday,,,Friday,,"), line 2 the column names
HEADER_LINES = 2

EXCEL_EXTENSIONS = (".xlsx", ".xlsm")


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def read_csv_rows(file_path: str) -> List[RawRow]:
    """
    Read a side-by-side snapshot export saved as CSV.

    The two header lines are skipped, blank lines are ignored, every cell is
    trimmed and rows may have differing column counts.

    Args:
        file_path (str): Path to the CSV file.

    Returns:
        list[list[str]]: Data rows in file order.

    Raises:
        RowSourceError: If the file cannot be opened or decoded.
    """
    rows: List[RawRow] = []
    try:
        with open(file_path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.reader(f)
            for line_number, record in enumerate(reader, start=1):
                if line_number <= HEADER_LINES:
                    continue
                if not record:
                    continue
                rows.append([_clean(cell) for cell in record])
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise RowSourceError(f"Unable to read CSV file {file_path}: {e}") from e

    logger.debug(f"Read {len(rows)} data row(s) from {file_path}")
    return rows


def read_xlsx_rows(file_path: str) -> List[RawRow]:
    """
    Read a side-by-side snapshot export from the first sheet of a workbook.

    Data starts on row 3. Every row is padded with "" to the widest row of
    the sheet (header rows included), so a removed entry keeps its empty
    after-columns. Rows where every cell is empty are skipped.
    """
    logger.debug(f"File path we're loading the excel from is {file_path}")
    try:
        workbook = openpyxl.load_workbook(file_path, read_only=True, data_only=True)
    except (OSError, KeyError, ValueError, zipfile.BadZipFile, InvalidFileException) as e:
        raise RowSourceError(f"Unable to read workbook {file_path}: {e}") from e

    rows: List[RawRow] = []
    width = 0
    try:
        worksheet = workbook.worksheets[0]
        for row_number, values in enumerate(worksheet.iter_rows(values_only=True), start=1):
            width = max(width, len(values))
            if row_number <= HEADER_LINES:
                continue
            if all(cell is None for cell in values):
                continue
            rows.append([_clean(cell) for cell in values])
    finally:
        workbook.close()

    for row in rows:
        row.extend([""] * (width - len(row)))

    logger.debug(f"Read {len(rows)} data row(s) from {file_path}")
    return rows


def read_rows(file_path: str) -> List[RawRow]:
    """
    Read snapshot rows from a CSV or Excel export, chosen by file extension.

    Raises:
        RowSourceError: If the file does not exist or its extension is unsupported.
    """
    if not os.path.exists(file_path):
        raise RowSourceError(f"Input file not found: {file_path}")

    extension = os.path.splitext(file_path)[1].lower()
    if extension == ".csv":
        return read_csv_rows(file_path)
    if extension in EXCEL_EXTENSIONS:
        return read_xlsx_rows(file_path)
    raise RowSourceError(f"Unsupported input file type '{extension}' for {file_path}")
