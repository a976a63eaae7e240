"""Schedule generator.

This module provides the ShiftGenerator class, which turns a staff
directory and a headcount target into a complete Schedule using a
first-fit greedy pass:

1. Derive the date range from the directory
2. Find candidates for every (date, slot) pair
3. Assign the first candidates up to the required headcount
4. Attach shortage and conflict alerts to each slot

Conflicts are only detected, never avoided.
"""

import logging
from datetime import date
from typing import Optional, Sequence, Union

from shiftplanner.domain.directory import StaffDirectory
from shiftplanner.domain.models import (
    CANONICAL_SLOTS,
    AlertType,
    DaySchedule,
    Schedule,
    ShiftAssignment,
    SlotAlert,
    StaffMember,
    TimeSlot,
)
from shiftplanner.domain.policies import AlertPolicy, DefaultAlertPolicy
from shiftplanner.scheduling.candidate_generator import CandidateGenerator

logger = logging.getLogger(__name__)


def validate_required_count(required_count: int) -> int:
    """Check that a headcount target is a positive integer."""
    if isinstance(required_count, bool) or not isinstance(required_count, int):
        raise ValueError(f"required_count must be an integer, got {required_count!r}")
    if required_count < 1:
        raise ValueError(f"required_count must be at least 1, got {required_count}")
    return required_count


class ShiftGenerator:
    """First-fit shift generator.

    The generator is stateless between runs: the same directory and
    headcount always produce an equal Schedule.

    Example:
        >>> generator = ShiftGenerator()
        >>> schedule = generator.generate(staff, required_count=2)
        >>> for day in schedule.days:
        ...     for shift in day.shifts:
        ...         print(shift.slot.label, shift.staff_names, shift.alert_messages)
    """

    def __init__(
        self,
        alert_policy: Optional[AlertPolicy] = None,
        slots: Sequence[TimeSlot] = CANONICAL_SLOTS,
    ):
        """Initialize the generator.

        Args:
            alert_policy: Policy for alert wording.
            slots: Daily slot template. Defaults to the four canonical slots.
        """
        self.alert_policy = alert_policy or DefaultAlertPolicy()
        self.slots = tuple(slots)
        self.candidate_generator = CandidateGenerator()

    def generate(
        self,
        staff: Union[StaffDirectory, Sequence[StaffMember]],
        required_count: int,
    ) -> Schedule:
        """Generate a schedule covering every day of the staff's date range.

        Args:
            staff: Staff directory, or records to build one from.
            required_count: Headcount target for every slot (any positive integer).

        Returns:
            Complete Schedule. Empty when there is no staff.
        """
        validate_required_count(required_count)
        directory = StaffDirectory.coerce(staff)

        dates = directory.dates()
        if not dates:
            logger.info("No staff loaded; returning an empty schedule")
            return Schedule(required_count=required_count)

        logger.info(
            "Generating schedule for %s to %s (%d days, %d staff records, %d per slot)",
            dates[0],
            dates[-1],
            len(dates),
            len(directory),
            required_count,
        )

        days = tuple(
            self._generate_day(directory, d, required_count) for d in dates
        )
        schedule = Schedule(required_count=required_count, days=days)

        logger.info("Generated %d slots", schedule.slot_count)
        return schedule

    def _generate_day(
        self,
        directory: StaffDirectory,
        schedule_date: date,
        required_count: int,
    ) -> DaySchedule:
        """Build the assignments for every slot of one date."""
        logger.debug(
            "%s: %d people available",
            schedule_date,
            self.candidate_generator.count_available(directory, schedule_date),
        )
        candidates_by_slot = self.candidate_generator.generate_all_candidates(
            directory, schedule_date, self.slots
        )
        shifts = tuple(
            self._assign_slot(schedule_date, slot, candidates_by_slot[slot], required_count)
            for slot in self.slots
        )
        return DaySchedule(schedule_date=schedule_date, shifts=shifts)

    def _assign_slot(
        self,
        schedule_date: date,
        slot: TimeSlot,
        candidates: list[StaffMember],
        required_count: int,
    ) -> ShiftAssignment:
        """Take the first candidates and attach alerts."""
        assigned = tuple(candidates[:required_count])
        alerts = self._build_alerts(assigned, required_count)

        for alert in alerts:
            logger.debug("%s %s: %s", schedule_date, slot.label, alert.message)

        return ShiftAssignment(
            schedule_date=schedule_date,
            slot=slot,
            required_count=required_count,
            assigned_staff=assigned,
            alerts=alerts,
        )

    def _build_alerts(
        self,
        assigned: tuple[StaffMember, ...],
        required_count: int,
    ) -> tuple[SlotAlert, ...]:
        """Shortage alert first, then one conflict alert per offending pair."""
        alerts = []

        deficit = required_count - len(assigned)
        if deficit > 0:
            alerts.append(
                SlotAlert(
                    alert_type=AlertType.SHORTAGE,
                    message=self.alert_policy.shortage_message(deficit),
                    deficit=deficit,
                )
            )

        for i, first in enumerate(assigned):
            for second in assigned[i + 1 :]:
                if first.conflicts_with(second):
                    alerts.append(
                        SlotAlert(
                            alert_type=AlertType.CONFLICT,
                            message=self.alert_policy.conflict_message(
                                first.name, second.name
                            ),
                            staff_names=(first.name, second.name),
                        )
                    )

        return tuple(alerts)


def generate_schedule(
    staff: Union[StaffDirectory, Sequence[StaffMember]],
    required_count: int,
    alert_policy: Optional[AlertPolicy] = None,
) -> Schedule:
    """Generate a schedule with a default ShiftGenerator."""
    return ShiftGenerator(alert_policy=alert_policy).generate(staff, required_count)
