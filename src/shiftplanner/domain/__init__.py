"""Domain models and business rules for shift planning."""

from shiftplanner.domain.directory import StaffDirectory
from shiftplanner.domain.models import (
    CANONICAL_SLOTS,
    SLOT_HOURS,
    AlertType,
    DaySchedule,
    FleetSummary,
    Schedule,
    ShiftAssignment,
    SlotAlert,
    StaffMember,
    StaffStatistic,
    TimeSlot,
    TimeWindow,
)
from shiftplanner.domain.policies import (
    AlertPolicy,
    DefaultAlertPolicy,
    DefaultWorkloadPolicy,
    JapaneseAlertPolicy,
    WorkloadPolicy,
    get_alert_policy,
)

__all__ = [
    # Models
    "AlertType",
    "CANONICAL_SLOTS",
    "DaySchedule",
    "FleetSummary",
    "SLOT_HOURS",
    "Schedule",
    "ShiftAssignment",
    "SlotAlert",
    "StaffMember",
    "StaffStatistic",
    "TimeSlot",
    "TimeWindow",
    # Directory
    "StaffDirectory",
    # Policies
    "AlertPolicy",
    "DefaultAlertPolicy",
    "DefaultWorkloadPolicy",
    "JapaneseAlertPolicy",
    "WorkloadPolicy",
    "get_alert_policy",
]
