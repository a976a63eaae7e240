"""Tests for staff file import."""

import logging
from datetime import date

import pandas as pd
import pytest

from shiftplanner.domain.models import TimeWindow
from shiftplanner.exceptions import StaffImportError, UnsupportedFormatError
from shiftplanner.importer import frame_to_staff, load_staff, sample_staff
from shiftplanner.importer.staff_importer import DEFAULT_DATE, DEFAULT_TIME

HEADER = "name,date,time,skill,good,bad\n"


def write_csv(tmp_path, body, name="staff.csv"):
    path = tmp_path / name
    path.write_text(HEADER + body, encoding="utf-8")
    return path


class TestCsvImport:
    """Tests for CSV import."""

    def test_full_rows(self, tmp_path):
        """Every column is read by position."""
        path = write_csv(
            tmp_path,
            "Alice,2025-07-01,09:00-12:00,Lead,Bob,Carol\n"
            "Bob,2025-07-02,10:00-13:00,Trainee,,Alice\n",
        )
        staff = load_staff(path)

        assert [m.name for m in staff] == ["Alice", "Bob"]
        alice = staff[0]
        assert alice.available_date == date(2025, 7, 1)
        assert alice.available_time == TimeWindow.parse("09:00-12:00")
        assert alice.skill == "Lead"
        assert alice.good_with == "Bob"
        assert alice.bad_with == "Carol"
        assert staff[1].good_with == ""

    def test_header_names_do_not_matter(self, tmp_path):
        """Columns are positional, whatever the header says."""
        path = tmp_path / "staff.csv"
        path.write_text(
            "氏名,日付,時間,スキル,相性良,相性悪\n田中浩,2025-07-09,09:00-12:00,新人,,\n",
            encoding="utf-8",
        )
        staff = load_staff(path)
        assert staff[0].name == "田中浩"
        assert staff[0].skill == "新人"

    def test_blank_cells_get_defaults(self, tmp_path):
        """Missing values are filled in instead of rejecting the row."""
        path = write_csv(tmp_path, ",2025-07-03,,,,\nDana,,,,,\n")
        first, second = load_staff(path)

        assert first.name == "Staff1"
        assert first.available_time == TimeWindow.parse(DEFAULT_TIME)
        assert first.skill == "General"

        assert second.name == "Dana"
        assert second.available_date == DEFAULT_DATE
        assert second.available_time == TimeWindow.parse("09:00-18:00")

    def test_short_rows_get_defaults(self, tmp_path):
        """Rows with trailing cells missing are still read."""
        path = write_csv(tmp_path, "Eve,2025-07-05\n")
        (eve,) = load_staff(path)
        assert eve.available_date == date(2025, 7, 5)
        assert str(eve.available_time) == DEFAULT_TIME
        assert eve.bad_with == ""

    def test_long_rows_keep_first_six_cells(self, tmp_path):
        """Extra trailing cells are dropped instead of rejecting the file."""
        path = write_csv(
            tmp_path,
            "Alice,2025-07-01,09:00-12:00,Lead,,Bob\n"
            "Bob,2025-07-01,09:00-12:00,General,,,note\n"
            "Cara,2025-07-02,12:00-15:00,General,Alice,,x,y\n",
        )
        alice, bob, cara = load_staff(path)

        assert alice.bad_with == "Bob"
        assert bob.name == "Bob"
        assert bob.bad_with == ""
        assert str(bob.available_time) == "09:00-12:00"
        assert cara.good_with == "Alice"
        assert cara.available_date == date(2025, 7, 2)

    def test_blank_rows_skipped(self, tmp_path):
        """Entirely empty rows are not records."""
        path = write_csv(tmp_path, "Alice,2025-07-01,09:00-12:00,,,\n,,,,,\nBob,2025-07-01,09:00-12:00,,,\n")
        staff = load_staff(path)
        assert [m.name for m in staff] == ["Alice", "Bob"]

    def test_malformed_cells_fall_back_with_warning(self, tmp_path, caplog):
        """Unreadable dates and windows are defaulted and logged."""
        path = write_csv(tmp_path, "Fay,July 9th,25:00-26:00,,,\nGus,2025-07-01,12:00-09:00,,,\n")
        with caplog.at_level(logging.WARNING, logger="shiftplanner.importer.staff_importer"):
            fay, gus = load_staff(path)

        assert fay.available_date == DEFAULT_DATE
        assert str(fay.available_time) == DEFAULT_TIME
        assert str(gus.available_time) == DEFAULT_TIME
        assert "unreadable date" in caplog.text
        assert "unreadable time window" in caplog.text

    def test_datetime_text_is_truncated_to_date(self, tmp_path):
        """Dates exported with a time part are accepted."""
        path = write_csv(tmp_path, "Hal,2025-07-09 00:00:00,09:00-12:00,,,\n")
        assert load_staff(path)[0].available_date == date(2025, 7, 9)

    def test_header_only(self, tmp_path):
        """A file with only a header has no records."""
        assert load_staff(write_csv(tmp_path, "")) == []

    def test_empty_file(self, tmp_path):
        """A zero-byte file has no records."""
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        assert load_staff(path) == []

    def test_too_few_columns(self, tmp_path):
        """Tables must have all six columns."""
        path = tmp_path / "narrow.csv"
        path.write_text("name,date\nAlice,2025-07-01\n", encoding="utf-8")
        with pytest.raises(StaffImportError):
            load_staff(path)

    def test_missing_file(self, tmp_path):
        """Read failures are reported as import errors."""
        with pytest.raises(StaffImportError):
            load_staff(tmp_path / "missing.csv")


class TestExcelImport:
    """Tests for Excel import."""

    def test_first_sheet_is_read(self, tmp_path):
        """Excel date cells and text cells are both understood."""
        path = tmp_path / "staff.xlsx"
        frame = pd.DataFrame(
            [
                ["Alice", "2025-07-01", "09:00-12:00", "Lead", "", "Bob"],
                ["Bob", date(2025, 7, 2), "10:00-13:00", None, None, None],
            ],
            columns=["name", "date", "time", "skill", "good", "bad"],
        )
        frame.to_excel(path, index=False)

        alice, bob = load_staff(path)

        assert alice.name == "Alice"
        assert alice.available_date == date(2025, 7, 1)
        assert alice.bad_with == "Bob"
        assert bob.available_date == date(2025, 7, 2)
        assert bob.skill == "General"
        assert bob.bad_with == ""

    def test_corrupt_workbook(self, tmp_path):
        """A file that is not a workbook is an import error."""
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a zip file")
        with pytest.raises(StaffImportError):
            load_staff(path)


class TestFormatDispatch:
    """Tests for file type handling."""

    @pytest.mark.parametrize("name", ["staff.txt", "staff.json", "staff"])
    def test_unsupported_extension(self, tmp_path, name):
        with pytest.raises(UnsupportedFormatError):
            load_staff(tmp_path / name)

    def test_unsupported_is_an_import_error(self):
        assert issubclass(UnsupportedFormatError, StaffImportError)

    def test_extension_is_case_insensitive(self, tmp_path):
        path = write_csv(tmp_path, "Alice,2025-07-01,09:00-12:00,,,\n", name="STAFF.CSV")
        assert len(load_staff(path)) == 1


class TestFrameToStaff:
    """Tests for frame_to_staff."""

    def test_extra_columns_ignored(self):
        frame = pd.DataFrame(
            [["Alice", "2025-07-01", "09:00-12:00", "Lead", "", "", "note"]],
            columns=list("abcdefg"),
        )
        (alice,) = frame_to_staff(frame)
        assert alice.skill == "Lead"

    def test_frame_without_columns(self):
        assert frame_to_staff(pd.DataFrame()) == []


class TestSampleStaff:
    """Tests for the built-in sample roster."""

    def test_sample_roster(self):
        staff = sample_staff()
        assert len(staff) == 5
        assert staff[0].name == "田中浩"
        assert staff[0].available_date == date(2025, 7, 9)
        assert min(m.available_date for m in staff) == date(2025, 7, 6)
        assert max(m.available_date for m in staff) == date(2025, 7, 31)
