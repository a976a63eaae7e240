"""Validation module for staff data and generated schedules."""

from shiftplanner.validation.validator import (
    ScheduleValidator,
    ValidationError,
    ValidationErrorType,
    ValidationResult,
)

__all__ = [
    "ScheduleValidator",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
]
