"""Staff importer for CSV and Excel sheets.

Reads a tabular staff list into StaffMember records. Columns are taken by
position after a header row:

    name, available date, available time, skill, good with, bad with

Blank or malformed cells are replaced with defaults instead of rejecting
the row, so every record handed to the scheduler is fully populated.
"""

import logging
import zipfile
from datetime import date, datetime
from pathlib import Path
from typing import Union

import pandas as pd

from shiftplanner.domain.models import StaffMember, TimeWindow
from shiftplanner.exceptions import StaffImportError, UnsupportedFormatError

logger = logging.getLogger(__name__)

STAFF_COLUMNS = ["name", "available_date", "available_time", "skill", "good_with", "bad_with"]

DEFAULT_DATE = date(2025, 7, 1)
DEFAULT_TIME = "09:00-18:00"
DEFAULT_SKILL = "General"

CSV_EXTENSIONS = {".csv"}
EXCEL_EXTENSIONS = {".xlsx", ".xlsm", ".xls"}


def load_staff(path: Union[str, Path]) -> list[StaffMember]:
    """Load staff records from a CSV or Excel file.

    Args:
        path: File to read. The extension selects the reader.

    Returns:
        Records in file order.

    Raises:
        UnsupportedFormatError: If the extension is not CSV or Excel.
        StaffImportError: If the file cannot be read.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in CSV_EXTENSIONS:
        return read_csv_staff(path)
    if suffix in EXCEL_EXTENSIONS:
        return read_excel_staff(path)
    raise UnsupportedFormatError(
        f"Unsupported file type {path.suffix!r}: upload a CSV (.csv) or Excel (.xlsx, .xls) file"
    )


def read_csv_staff(path: Union[str, Path]) -> list[StaffMember]:
    """Load staff records from a CSV file."""
    try:
        frame = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            engine="python",
            # Rows longer than the header keep their first six cells
            on_bad_lines=_truncate_row,
        )
    except pd.errors.EmptyDataError:
        logger.warning("Staff file %s is empty", path)
        return []
    except (OSError, ValueError) as exc:
        raise StaffImportError(f"Failed to read CSV file {path}: {exc}") from exc
    return frame_to_staff(frame, source=str(path))


def _truncate_row(fields: list[str]) -> list[str]:
    return fields[: len(STAFF_COLUMNS)]


def read_excel_staff(path: Union[str, Path]) -> list[StaffMember]:
    """Load staff records from the first sheet of an Excel workbook."""
    try:
        frame = pd.read_excel(path, sheet_name=0, dtype=str)
    except ImportError as exc:
        raise StaffImportError(
            f"Reading {Path(path).suffix} files needs an extra Excel engine: {exc}"
        ) from exc
    except (OSError, ValueError, KeyError, zipfile.BadZipFile) as exc:
        raise StaffImportError(f"Failed to read Excel file {path}: {exc}") from exc
    return frame_to_staff(frame, source=str(path))


def frame_to_staff(frame: pd.DataFrame, source: str = "<frame>") -> list[StaffMember]:
    """Convert a staff table into records, applying defaults.

    Args:
        frame: Table whose first six columns follow STAFF_COLUMNS.
        source: Name used in log messages.

    Raises:
        StaffImportError: If the table has fewer than six columns.
    """
    if frame.empty and len(frame.columns) == 0:
        return []
    if len(frame.columns) < len(STAFF_COLUMNS):
        raise StaffImportError(
            f"{source}: expected {len(STAFF_COLUMNS)} columns "
            f"({', '.join(STAFF_COLUMNS)}), found {len(frame.columns)}"
        )

    table = frame.iloc[:, : len(STAFF_COLUMNS)].copy()
    table.columns = STAFF_COLUMNS
    table = table.fillna("")

    staff = []
    for row_number, row in enumerate(table.itertuples(index=False), start=1):
        cells = [_clean(value) for value in row]
        if not any(cells):
            continue
        staff.append(_row_to_member(cells, row_number, source))

    logger.info("Imported %d staff records from %s", len(staff), source)
    return staff


def _clean(value) -> str:
    if isinstance(value, (datetime, pd.Timestamp)):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def _row_to_member(cells: list[str], row_number: int, source: str) -> StaffMember:
    name, date_text, time_text, skill, good_with, bad_with = cells
    return StaffMember(
        name=name or f"Staff{row_number}",
        available_date=_parse_date(date_text, row_number, source),
        available_time=_parse_window(time_text, row_number, source),
        skill=skill or DEFAULT_SKILL,
        good_with=good_with,
        bad_with=bad_with,
    )


def _parse_date(text: str, row_number: int, source: str) -> date:
    if not text:
        return DEFAULT_DATE
    try:
        # Spreadsheet dates can arrive as "2025-07-09 00:00:00"
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.warning(
            "%s row %d: unreadable date %r, using %s",
            source, row_number, text, DEFAULT_DATE.isoformat(),
        )
        return DEFAULT_DATE


def _parse_window(text: str, row_number: int, source: str) -> TimeWindow:
    if text:
        try:
            return TimeWindow.parse(text)
        except ValueError:
            logger.warning(
                "%s row %d: unreadable time window %r, using %s",
                source, row_number, text, DEFAULT_TIME,
            )
    return TimeWindow.parse(DEFAULT_TIME)
