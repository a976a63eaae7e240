"""Tests for schedule generation."""

from datetime import date

import pytest

from shiftplanner.domain.directory import StaffDirectory
from shiftplanner.domain.models import CANONICAL_SLOTS, AlertType, StaffMember
from shiftplanner.domain.policies import JapaneseAlertPolicy
from shiftplanner.scheduling.generator import (
    ShiftGenerator,
    generate_schedule,
    validate_required_count,
)
from shiftplanner.validation.validator import ScheduleValidator


def make_staff(name, day="2025-07-01", window="09:00-12:00", bad_with="", skill="General"):
    """Helper to create test staff records."""
    return StaffMember.from_strings(name, day, window, skill, "", bad_with)


class TestShiftGenerator:
    """Tests for ShiftGenerator."""

    @pytest.fixture
    def generator(self):
        return ShiftGenerator()

    @pytest.fixture
    def pair(self):
        """Two people who should not work together."""
        return StaffDirectory([
            make_staff("A", window="09:00-12:00", bad_with="B"),
            make_staff("B", window="10:00-13:00", bad_with="A"),
        ])

    def test_conflicting_pair_scenario(self, generator, pair):
        """Both are assigned together and the pair is flagged once."""
        schedule = generator.generate(pair, required_count=2)

        assert schedule.schedule_dates == [date(2025, 7, 1)]
        morning, midday, afternoon, evening = schedule.days[0].shifts

        assert morning.staff_names == ["A", "B"]
        assert morning.alert_messages == ("Conflict: A and B",)
        assert morning.conflict_alerts[0].staff_names == ("A", "B")

        assert midday.staff_names == ["B"]
        assert midday.alert_messages == ("Understaffed: 1 more needed",)
        assert midday.shortage_alert.deficit == 1

        for shift in (afternoon, evening):
            assert shift.staff_names == []
            assert shift.alert_messages == ("Understaffed: 2 more needed",)

    def test_every_day_has_four_slots_in_order(self, generator):
        """Each day lists the canonical slots in order."""
        schedule = generator.generate([make_staff("A")], required_count=1)
        assert tuple(s.slot for s in schedule.days[0].shifts) == CANONICAL_SLOTS

    def test_days_without_staff_are_included(self, generator):
        """Gaps inside the date range still get slots."""
        staff = [make_staff("A", day="2025-07-01"), make_staff("B", day="2025-07-03")]
        schedule = generator.generate(staff, required_count=1)

        assert schedule.schedule_dates == [
            date(2025, 7, 1),
            date(2025, 7, 2),
            date(2025, 7, 3),
        ]
        gap = schedule.get_day(date(2025, 7, 2))
        assert all(s.assigned_count == 0 for s in gap.shifts)
        assert all(s.shortage_alert.deficit == 1 for s in gap.shifts)
        assert schedule.slot_count == 12

    def test_first_fit_keeps_input_order(self, generator):
        """The first candidates in input order win the places."""
        staff = [make_staff(name) for name in ("C", "A", "B")]
        schedule = generator.generate(staff, required_count=2)
        assert schedule.days[0].shifts[0].staff_names == ["C", "A"]

    def test_never_over_assigns(self, generator):
        """A slot never holds more than the required count."""
        staff = [make_staff(f"P{i}", window="09:00-21:00") for i in range(6)]
        schedule = generator.generate(staff, required_count=3)
        for shift in schedule.iter_assignments():
            assert shift.assigned_count == 3
            assert shift.alerts == ()

    def test_required_count_above_ui_range(self, generator, pair):
        """Large headcounts are accepted and produce larger deficits."""
        schedule = generator.generate(pair, required_count=10)
        morning = schedule.days[0].shifts[0]
        assert morning.shortage_alert.deficit == 8
        assert morning.alerts[0].alert_type == AlertType.SHORTAGE
        assert morning.alerts[1].alert_type == AlertType.CONFLICT

    def test_three_way_conflicts(self, generator):
        """Every offending pair gets its own alert, in pair order."""
        staff = [
            make_staff("A", bad_with="B"),
            make_staff("B", bad_with="C"),
            make_staff("C", bad_with="A"),
        ]
        schedule = generator.generate(staff, required_count=3)
        morning = schedule.days[0].shifts[0]
        assert morning.alert_messages == (
            "Conflict: A and B",
            "Conflict: A and C",
            "Conflict: B and C",
        )

    def test_one_sided_conflict(self, generator):
        """Listing the other person on one side is enough."""
        staff = [make_staff("A"), make_staff("B", bad_with="A")]
        schedule = generator.generate(staff, required_count=2)
        assert schedule.days[0].shifts[0].alert_messages == ("Conflict: A and B",)

    def test_unknown_and_self_references_never_conflict(self, generator):
        """Dangling names and self-references are ignored."""
        staff = [make_staff("A", bad_with="Ghost"), make_staff("B", bad_with="B")]
        schedule = generator.generate(staff, required_count=2)
        assert schedule.days[0].shifts[0].alerts == ()

    def test_conflict_only_when_co_assigned(self, generator):
        """A bad pairing outside the assigned set is not flagged."""
        staff = [make_staff("A", bad_with="C"), make_staff("B"), make_staff("C")]
        schedule = generator.generate(staff, required_count=2)
        morning = schedule.days[0].shifts[0]
        assert morning.staff_names == ["A", "B"]
        assert morning.alerts == ()

    def test_person_with_two_records_assigned_once(self, generator):
        """Overlapping records of one person do not double-book them."""
        staff = [
            make_staff("A", window="09:00-13:00"),
            make_staff("A", window="11:00-15:00"),
            make_staff("B", window="12:00-15:00"),
        ]
        schedule = generator.generate(staff, required_count=2)
        midday = schedule.days[0].shifts[1]
        assert midday.staff_names == ["A", "B"]

    def test_empty_staff(self, generator):
        """No staff gives an empty schedule."""
        schedule = generator.generate([], required_count=2)
        assert schedule.is_empty
        assert schedule.required_count == 2

    def test_deterministic(self, generator, pair):
        """The same input always produces an equal schedule."""
        first = generator.generate(pair, required_count=2)
        second = ShiftGenerator().generate(list(pair.members), required_count=2)
        assert first == second

    def test_output_validates(self, generator):
        """Generated schedules satisfy every schedule check."""
        staff = [
            make_staff("A", day="2025-07-01", window="09:00-15:00", bad_with="B"),
            make_staff("B", day="2025-07-01", window="11:00-21:00"),
            make_staff("C", day="2025-07-02", window="14:00-20:00", bad_with="A"),
            make_staff("A", day="2025-07-04", window="18:00-24:00"),
        ]
        directory = StaffDirectory(staff)
        schedule = generator.generate(directory, required_count=2)
        result = ScheduleValidator().validate_schedule(schedule, directory)
        assert result.is_valid, [str(e) for e in result.errors]

    def test_alert_policy_wording(self, pair):
        """Alert text comes from the configured policy."""
        generator = ShiftGenerator(alert_policy=JapaneseAlertPolicy())
        morning, midday = generator.generate(pair, required_count=2).days[0].shifts[:2]
        assert morning.alert_messages == ("相性注意: AとB",)
        assert midday.alert_messages == ("スタッフ不足: 1名不足",)

    def test_module_level_helper(self, pair):
        """generate_schedule matches the class API."""
        assert generate_schedule(pair, 2) == ShiftGenerator().generate(pair, 2)


class TestRequiredCount:
    """Tests for headcount validation."""

    @pytest.mark.parametrize("value", [1, 2, 5, 6, 100])
    def test_accepts_positive_integers(self, value):
        assert validate_required_count(value) == value

    @pytest.mark.parametrize("value", [0, -1, 2.5, "2", None, True])
    def test_rejects_everything_else(self, value):
        with pytest.raises(ValueError):
            validate_required_count(value)

    def test_generator_rejects_zero(self):
        """Invalid headcounts fail before any work is done."""
        with pytest.raises(ValueError):
            ShiftGenerator().generate([make_staff("A")], required_count=0)
