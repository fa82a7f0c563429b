"""
Tabular sources for the event importer.

Reads survey-form exports (CSV text and XLSX workbooks) into raw rows:
plain dicts mapping a stripped header label to stripped cell text.

The CSV reader is a best-effort scanner matching how the survey exports are
produced: records are split on line breaks and a double quote toggles an
"inside quotes" mode during which commas are not separators. Escaped quotes
and quoted line breaks are not supported.
"""

import logging
import re
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from openpyxl import load_workbook

logger = logging.getLogger(__name__)

RawRow = Dict[str, str]
PathLike = Union[str, Path]

# Records end at \n or \r\n only
_LINE_BREAK = re.compile(r"\r?\n")


class SourceNotFoundError(FileNotFoundError):
    """Raised when none of the configured import sources exist."""


# ============================================================================
# CSV
# ============================================================================


def split_csv_line(line: str) -> List[str]:
    """
    Split one CSV line on commas that are outside double quotes.

    Quote characters are consumed, not kept. Each value is stripped.
    """
    values: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    values.append("".join(current).strip())
    return values


def parse_csv_text(text: str) -> List[RawRow]:
    """
    Parse CSV text into raw rows.

    The first line holds the headers. Blank lines are skipped. Rows shorter
    than the header line are padded with empty strings; extra values are
    ignored.

    Args:
        text: Full CSV content

    Returns:
        List of header -> value dicts
    """
    if not text:
        return []
    lines = _LINE_BREAK.split(text)

    headers = split_csv_line(lines[0])
    rows: List[RawRow] = []

    for line in lines[1:]:
        if not line.strip():
            continue
        values = split_csv_line(line)
        rows.append(
            {
                header: values[index] if index < len(values) else ""
                for index, header in enumerate(headers)
            }
        )

    return rows


def parse_csv_file(path: PathLike) -> List[RawRow]:
    """Read a UTF-8 CSV file (BOM tolerated) and parse it into raw rows."""
    with open(path, "r", encoding="utf-8-sig") as f:
        return parse_csv_text(f.read())


# ============================================================================
# XLSX
# ============================================================================


def _cell_to_text(value: Any) -> str:
    """Coerce a worksheet cell value to stripped text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value).strip()


def parse_xlsx_file(path: PathLike) -> List[RawRow]:
    """
    Read the first worksheet of an XLSX workbook into raw rows.

    Row 1 supplies the header labels by column position. Columns without a
    label are ignored and rows where every labelled cell is empty are skipped.

    Args:
        path: Path to the .xlsx file

    Returns:
        List of header -> value dicts
    """
    workbook = load_workbook(filename=str(path), read_only=True, data_only=True)
    try:
        if not workbook.worksheets:
            return []
        worksheet = workbook.worksheets[0]

        row_iter = worksheet.iter_rows(values_only=True)
        header_values = next(row_iter, None)
        if header_values is None:
            return []
        headers = [_cell_to_text(value) for value in header_values]

        rows: List[RawRow] = []
        for values in row_iter:
            row: RawRow = {}
            for index, header in enumerate(headers):
                if not header:
                    continue
                value = values[index] if index < len(values) else None
                row[header] = _cell_to_text(value)

            if any(row.values()):
                rows.append(row)

        return rows
    finally:
        workbook.close()


# ============================================================================
# SOURCE LOADING
# ============================================================================


def load_sources(
    csv_path: Optional[PathLike] = None,
    xlsx_path: Optional[PathLike] = None,
) -> List[RawRow]:
    """
    Load and concatenate rows from whichever sources exist.

    CSV rows come first, then XLSX rows, so that for duplicate event names
    the workbook wins under last-write-wins deduplication.

    Raises:
        SourceNotFoundError: If neither source file exists
    """
    csv_file = Path(csv_path) if csv_path else None
    xlsx_file = Path(xlsx_path) if xlsx_path else None

    csv_exists = csv_file is not None and csv_file.is_file()
    xlsx_exists = xlsx_file is not None and xlsx_file.is_file()

    if not csv_exists and not xlsx_exists:
        raise SourceNotFoundError(
            f"Neither CSV nor XLSX file found at expected paths "
            f"({csv_file}, {xlsx_file})"
        )

    rows: List[RawRow] = []
    if csv_exists:
        csv_rows = parse_csv_file(csv_file)
        logger.info(f"Read {len(csv_rows)} rows from {csv_file}")
        rows.extend(csv_rows)
    if xlsx_exists:
        xlsx_rows = parse_xlsx_file(xlsx_file)
        logger.info(f"Read {len(xlsx_rows)} rows from {xlsx_file}")
        rows.extend(xlsx_rows)

    return rows
