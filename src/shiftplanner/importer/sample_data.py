"""Built-in sample roster for trying the planner without a file."""

from shiftplanner.domain.models import StaffMember

SAMPLE_ROWS = [
    # name, date, time, skill, good with, bad with
    ("田中浩", "2025-07-09", "09:00-12:00", "新人", "後藤くみ子", "遠藤学"),
    ("佐藤くみ子", "2025-07-11", "12:00-15:00", "新人", "斉藤幹", "加藤陽子"),
    ("中村春香", "2025-07-31", "15:00-18:00", "新人", "高橋真綾", "石川くみ子"),
    ("中村学", "2025-07-10", "09:00-12:00", "新人", "中村七夏", "鈴木拓真"),
    ("佐藤健一", "2025-07-06", "09:00-12:00", "店長", "伊藤裕太", "中村健一"),
]


def sample_staff() -> list[StaffMember]:
    """Return the five-person sample roster."""
    return [StaffMember.from_strings(*row) for row in SAMPLE_ROWS]
