"""Staff importers (CSV, Excel) and the built-in sample roster."""

from shiftplanner.importer.sample_data import sample_staff
from shiftplanner.importer.staff_importer import (
    frame_to_staff,
    load_staff,
    read_csv_staff,
    read_excel_staff,
)

__all__ = [
    "frame_to_staff",
    "load_staff",
    "read_csv_staff",
    "read_excel_staff",
    "sample_staff",
]
