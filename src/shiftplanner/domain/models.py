"""Domain models for the shift planning system.

This module contains the value objects passed through the planning
pipeline: staff records, the fixed slot template, generated assignments
and the statistics derived from them. Everything that crosses a stage
boundary is frozen so a generated schedule can never be partially mutated.
"""

from dataclasses import dataclass, field, replace
from datetime import date, time, timedelta
from enum import Enum
from typing import Iterator, Optional

MINUTES_PER_DAY = 1440

# Each canonical slot lasts three hours
SLOT_HOURS = 3


def _parse_clock(text: str) -> int:
    """Parse an ``HH:MM`` clock value into minutes since midnight."""
    hours_text, minutes_text = text.strip().split(":")
    hours, minutes = int(hours_text), int(minutes_text)
    if not 0 <= minutes < 60:
        raise ValueError(f"Minutes out of range in {text!r}")
    if not 0 <= hours <= 24 or (hours == 24 and minutes != 0):
        raise ValueError(f"Hours out of range in {text!r}")
    return hours * 60 + minutes


def _format_clock(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


@dataclass(frozen=True)
class TimeWindow:
    """A half-open interval ``[start, end)`` within a single day.

    Attributes:
        start_minutes: Minutes from midnight when the window opens.
        end_minutes: Minutes from midnight when the window closes (exclusive).
    """

    start_minutes: int
    end_minutes: int

    def __post_init__(self):
        if not 0 <= self.start_minutes < self.end_minutes <= MINUTES_PER_DAY:
            raise ValueError(
                f"Invalid time window {self.start_minutes}-{self.end_minutes}: "
                f"start must precede end within one day"
            )

    @classmethod
    def parse(cls, text: str) -> "TimeWindow":
        """Create a window from its ``HH:MM-HH:MM`` text form.

        ``24:00`` is accepted as an end time.
        """
        try:
            start_text, end_text = str(text).split("-")
            start, end = _parse_clock(start_text), _parse_clock(end_text)
        except ValueError as exc:
            raise ValueError(
                f"Invalid time window {text!r}: expected HH:MM-HH:MM"
            ) from exc
        return cls(start, end)

    @classmethod
    def from_times(cls, start_time: time, end_time: time) -> "TimeWindow":
        """Create a window from time objects."""
        return cls(
            start_time.hour * 60 + start_time.minute,
            end_time.hour * 60 + end_time.minute,
        )

    @property
    def duration_minutes(self) -> int:
        """Length of the window in minutes."""
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: "TimeWindow") -> bool:
        """Check if two windows overlap.

        Windows that only touch at a boundary do not overlap.
        """
        return (
            self.start_minutes < other.end_minutes
            and self.end_minutes > other.start_minutes
        )

    def __str__(self) -> str:
        return f"{_format_clock(self.start_minutes)}-{_format_clock(self.end_minutes)}"


@dataclass(frozen=True)
class TimeSlot:
    """One of the fixed shift slots making up a working day.

    Attributes:
        index: Zero-based position of the slot within the day.
        window: Time window covered by the slot.
    """

    index: int
    window: TimeWindow

    @property
    def label(self) -> str:
        """Text form of the slot, e.g. ``09:00-12:00``."""
        return str(self.window)

    @property
    def hours(self) -> float:
        """Slot duration in hours."""
        return self.window.duration_minutes / 60.0

    def __repr__(self) -> str:
        return f"TimeSlot({self.label})"


CANONICAL_SLOTS: tuple[TimeSlot, ...] = tuple(
    TimeSlot(index, TimeWindow(start_hour * 60, (start_hour + SLOT_HOURS) * 60))
    for index, start_hour in enumerate((9, 12, 15, 18))
)


@dataclass(frozen=True)
class StaffMember:
    """A single day of availability for one staff member.

    A person available on several days is represented by several records
    sharing the same name.

    Attributes:
        name: Display name, also the key used by affinity references.
        available_date: The calendar date this record covers.
        available_time: Window within that date the person can work.
        skill: Free-text role label (display only).
        good_with: Name of a colleague this person works well with.
        bad_with: Name of a colleague this person should not be paired with.
        staff_id: Stable identifier assigned when loaded into a directory.
        good_with_id: ``good_with`` resolved to a staff ID, if known.
        bad_with_id: ``bad_with`` resolved to a staff ID, if known.
    """

    name: str
    available_date: date
    available_time: TimeWindow
    skill: str = "General"
    good_with: str = ""
    bad_with: str = ""
    staff_id: str = ""
    good_with_id: Optional[str] = None
    bad_with_id: Optional[str] = None

    @classmethod
    def from_strings(
        cls,
        name: str,
        available_date: str,
        available_time: str,
        skill: str = "General",
        good_with: str = "",
        bad_with: str = "",
    ) -> "StaffMember":
        """Create a record from ISO date and ``HH:MM-HH:MM`` strings."""
        return cls(
            name=name,
            available_date=date.fromisoformat(available_date),
            available_time=TimeWindow.parse(available_time),
            skill=skill,
            good_with=good_with,
            bad_with=bad_with,
        )

    def with_identity(
        self,
        staff_id: str,
        good_with_id: Optional[str] = None,
        bad_with_id: Optional[str] = None,
    ) -> "StaffMember":
        """Return a copy carrying directory-assigned identifiers."""
        return replace(
            self,
            staff_id=staff_id,
            good_with_id=good_with_id,
            bad_with_id=bad_with_id,
        )

    def is_available(self, schedule_date: date, window: TimeWindow) -> bool:
        """Check if this record covers any part of a window on a date."""
        return self.available_date == schedule_date and self.available_time.overlaps(window)

    def conflicts_with(self, other: "StaffMember") -> bool:
        """Check if either person lists the other as a bad pairing."""
        if self.bad_with_id is not None and self.bad_with_id == other.staff_id:
            return True
        if other.bad_with_id is not None and other.bad_with_id == self.staff_id:
            return True
        return False


class AlertType(Enum):
    """Kinds of per-slot diagnostics."""

    SHORTAGE = "shortage"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class SlotAlert:
    """A diagnostic attached to a single shift slot.

    Attributes:
        alert_type: What kind of problem was detected.
        message: Human-readable diagnostic text.
        deficit: Missing headcount (shortage alerts only).
        staff_names: Names involved, in assignment order (conflict alerts only).
    """

    alert_type: AlertType
    message: str
    deficit: int = 0
    staff_names: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ShiftAssignment:
    """Staff assigned to one slot on one date.

    Attributes:
        schedule_date: Date of the slot.
        slot: The canonical time slot.
        required_count: Headcount target for the slot.
        assigned_staff: Assigned records, in assignment order.
        alerts: Diagnostics for the slot, shortage first.
    """

    schedule_date: date
    slot: TimeSlot
    required_count: int
    assigned_staff: tuple[StaffMember, ...] = ()
    alerts: tuple[SlotAlert, ...] = ()

    @property
    def assigned_count(self) -> int:
        return len(self.assigned_staff)

    @property
    def shortfall(self) -> int:
        """Number of people still missing to reach the target."""
        return max(0, self.required_count - self.assigned_count)

    @property
    def fulfillment_ratio(self) -> float:
        """Assigned headcount divided by required headcount, 0 when nothing is required."""
        if self.required_count == 0:
            return 0.0
        return self.assigned_count / self.required_count

    @property
    def staff_names(self) -> list[str]:
        return [s.name for s in self.assigned_staff]

    @property
    def alert_messages(self) -> tuple[str, ...]:
        return tuple(alert.message for alert in self.alerts)

    @property
    def conflict_alerts(self) -> list[SlotAlert]:
        return [a for a in self.alerts if a.alert_type == AlertType.CONFLICT]

    @property
    def shortage_alert(self) -> Optional[SlotAlert]:
        for alert in self.alerts:
            if alert.alert_type == AlertType.SHORTAGE:
                return alert
        return None

    def has_staff(self, staff_id: str) -> bool:
        """Check if a person is assigned to this slot."""
        return any(s.staff_id == staff_id for s in self.assigned_staff)


@dataclass(frozen=True)
class DaySchedule:
    """All slot assignments for a single day.

    Attributes:
        schedule_date: Date of the schedule.
        shifts: One assignment per canonical slot, in slot order.
    """

    schedule_date: date
    shifts: tuple[ShiftAssignment, ...] = ()

    @property
    def day_label(self) -> str:
        """Date with weekday, e.g. ``2025-07-01 (Tuesday)``."""
        return f"{self.schedule_date.isoformat()} ({self.schedule_date.strftime('%A')})"

    def get_shift(self, slot: TimeSlot) -> Optional[ShiftAssignment]:
        for shift in self.shifts:
            if shift.slot == slot:
                return shift
        return None


@dataclass(frozen=True)
class Schedule:
    """Complete output of one generation run.

    Attributes:
        required_count: Headcount target used for every slot.
        days: Day schedules in chronological order.
    """

    required_count: int
    days: tuple[DaySchedule, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.days

    @property
    def start_date(self) -> Optional[date]:
        return self.days[0].schedule_date if self.days else None

    @property
    def end_date(self) -> Optional[date]:
        return self.days[-1].schedule_date if self.days else None

    @property
    def num_days(self) -> int:
        return len(self.days)

    @property
    def slot_count(self) -> int:
        """Total number of slots across all days."""
        return sum(len(day.shifts) for day in self.days)

    @property
    def schedule_dates(self) -> list[date]:
        return [day.schedule_date for day in self.days]

    def iter_assignments(self) -> Iterator[ShiftAssignment]:
        """Iterate over every slot assignment in output order."""
        for day in self.days:
            yield from day.shifts

    def get_day(self, schedule_date: date) -> Optional[DaySchedule]:
        for day in self.days:
            if day.schedule_date == schedule_date:
                return day
        return None


@dataclass(frozen=True)
class StaffStatistic:
    """Workload summary for one staff record.

    Attributes:
        staff_id: Identifier of the person.
        name: Display name.
        total_assigned_slots: Number of slots the person was assigned to.
        derived_work_hours: Slots multiplied by the slot length in hours.
        derived_work_days: Estimated working days (display heuristic).
    """

    staff_id: str
    name: str
    total_assigned_slots: int = 0
    derived_work_hours: int = 0
    derived_work_days: int = 0


@dataclass(frozen=True)
class FleetSummary:
    """Schedule-wide KPIs.

    Attributes:
        total_staff: Number of staff records in the directory.
        total_slots: Number of slots in the schedule.
        average_fulfillment: Mean assigned/required ratio over all slots.
        fulfillment_percent: ``average_fulfillment`` as a rounded percentage.
        shortage_slots: Slots carrying a shortage alert.
        conflict_alerts: Total number of conflict alerts.
    """

    total_staff: int
    total_slots: int = 0
    average_fulfillment: float = 0.0
    fulfillment_percent: int = 0
    shortage_slots: int = 0
    conflict_alerts: int = 0


def date_span(start_date: date, end_date: date) -> list[date]:
    """All calendar days from ``start_date`` to ``end_date`` inclusive."""
    dates = []
    current = start_date
    while current <= end_date:
        dates.append(current)
        current += timedelta(days=1)
    return dates
