"""Validation module for staff directories and generated schedules.

This module is the single place where the pipeline invariants are
checked. The generator does not need it to run; callers use it to vet
imported data and to verify schedules before publishing them.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Sequence

from shiftplanner.domain.directory import StaffDirectory
from shiftplanner.domain.models import (
    CANONICAL_SLOTS,
    AlertType,
    Schedule,
    ShiftAssignment,
    TimeSlot,
)


class ValidationErrorType(Enum):
    """Types of validation errors."""

    BLANK_NAME = "blank_name"
    WRONG_DATE_RANGE = "wrong_date_range"
    WRONG_SLOT_TEMPLATE = "wrong_slot_template"
    INCONSISTENT_REQUIRED_COUNT = "inconsistent_required_count"
    OVER_ASSIGNED = "over_assigned"
    UNKNOWN_STAFF = "unknown_staff"
    NOT_A_CANDIDATE = "not_a_candidate"
    DUPLICATE_STAFF = "duplicate_staff"
    ALERT_MISMATCH = "alert_mismatch"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    staff_id: Optional[str] = None
    schedule_date: Optional[date] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.schedule_date is not None:
            parts.append(f"{self.schedule_date.isoformat()}:")
        if self.staff_id:
            parts.append(f"Staff {self.staff_id}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of a validation pass."""

    is_valid: bool = True
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    def error_types(self) -> set[ValidationErrorType]:
        return {e.error_type for e in self.errors}


class ScheduleValidator:
    """Validates staff directories and schedules.

    Example:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate_schedule(schedule, directory)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, slots: Sequence[TimeSlot] = CANONICAL_SLOTS):
        self.slots = tuple(slots)

    def validate_directory(self, directory: StaffDirectory) -> ValidationResult:
        """Check imported staff data.

        Blank names are errors. Affinity references to unknown people,
        self-references and a person listed twice on one date are warnings:
        the scheduler tolerates them, but they usually mean a data entry slip.
        """
        result = ValidationResult()

        for position, member in enumerate(directory, start=1):
            if not member.name.strip():
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.BLANK_NAME,
                        message=f"Record {position} has no name",
                        staff_id=member.staff_id,
                    )
                )

            for label, reference, resolved in (
                ("bad_with", member.bad_with, member.bad_with_id),
                ("good_with", member.good_with, member.good_with_id),
            ):
                if not reference or resolved is not None:
                    continue
                if reference == member.name:
                    result.add_warning(f"{member.name}: {label} refers to themself")
                else:
                    result.add_warning(
                        f"{member.name}: {label} {reference!r} is not in the staff list"
                    )

        per_day = Counter((m.staff_id, m.available_date) for m in directory)
        for (staff_id, available_date), count in per_day.items():
            if count > 1:
                member = directory.get(staff_id)
                result.add_warning(
                    f"{member.name} has {count} records on {available_date.isoformat()}; "
                    f"only the first matching record is used per slot"
                )

        return result

    def validate_schedule(
        self,
        schedule: Schedule,
        directory: StaffDirectory,
    ) -> ValidationResult:
        """Check a generated schedule against the directory it came from.

        Args:
            schedule: The schedule to validate.
            directory: Staff directory used for generation.

        Returns:
            ValidationResult with is_valid flag and any errors.
        """
        result = ValidationResult()

        expected_dates = directory.dates()
        if schedule.schedule_dates != expected_dates:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.WRONG_DATE_RANGE,
                    message=(
                        f"Schedule covers {schedule.num_days} days "
                        f"({schedule.start_date} to {schedule.end_date}), expected "
                        f"{len(expected_dates)} days of staff availability"
                    ),
                )
            )

        for day in schedule.days:
            slots = tuple(shift.slot for shift in day.shifts)
            if slots != self.slots:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.WRONG_SLOT_TEMPLATE,
                        message=f"Day has slots {[s.label for s in slots]}",
                        schedule_date=day.schedule_date,
                    )
                )
            for shift in day.shifts:
                self._validate_shift(shift, schedule.required_count, directory, result)

        return result

    def _validate_shift(
        self,
        shift: ShiftAssignment,
        required_count: int,
        directory: StaffDirectory,
        result: ValidationResult,
    ) -> None:
        """Validate a single slot assignment."""
        where = f"slot {shift.slot.label}"

        if shift.required_count != required_count:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.INCONSISTENT_REQUIRED_COUNT,
                    message=(
                        f"{where} requires {shift.required_count}, "
                        f"schedule requires {required_count}"
                    ),
                    schedule_date=shift.schedule_date,
                )
            )

        if shift.assigned_count > shift.required_count:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.OVER_ASSIGNED,
                    message=(
                        f"{where} has {shift.assigned_count} staff "
                        f"for {shift.required_count} places"
                    ),
                    schedule_date=shift.schedule_date,
                    details={"assigned": shift.assigned_count},
                )
            )

        ids = [m.staff_id for m in shift.assigned_staff]
        for staff_id, count in Counter(ids).items():
            if count > 1:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.DUPLICATE_STAFF,
                        message=f"{where} lists the same person {count} times",
                        staff_id=staff_id,
                        schedule_date=shift.schedule_date,
                    )
                )

        for member in shift.assigned_staff:
            if member not in directory.members:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.UNKNOWN_STAFF,
                        message=f"{where}: {member.name} is not in the directory",
                        staff_id=member.staff_id,
                        schedule_date=shift.schedule_date,
                    )
                )
            elif not member.is_available(shift.schedule_date, shift.slot.window):
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.NOT_A_CANDIDATE,
                        message=(
                            f"{where}: {member.name} is available "
                            f"{member.available_date} {member.available_time}"
                        ),
                        staff_id=member.staff_id,
                        schedule_date=shift.schedule_date,
                    )
                )

        shortage = shift.shortage_alert
        expected_deficit = shift.shortfall
        actual_deficit = shortage.deficit if shortage else 0
        if actual_deficit != expected_deficit:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.ALERT_MISMATCH,
                    message=(
                        f"{where} reports a deficit of {actual_deficit}, "
                        f"actual deficit is {expected_deficit}"
                    ),
                    schedule_date=shift.schedule_date,
                )
            )

        expected_conflicts = [
            (first.name, second.name)
            for i, first in enumerate(shift.assigned_staff)
            for second in shift.assigned_staff[i + 1 :]
            if first.conflicts_with(second)
        ]
        actual_conflicts = [
            a.staff_names for a in shift.alerts if a.alert_type == AlertType.CONFLICT
        ]
        if actual_conflicts != expected_conflicts:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.ALERT_MISMATCH,
                    message=(
                        f"{where} conflict alerts {actual_conflicts} "
                        f"do not match pairs {expected_conflicts}"
                    ),
                    schedule_date=shift.schedule_date,
                )
            )
