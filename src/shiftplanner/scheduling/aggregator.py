"""Statistics aggregation over generated schedules.

Per-person workload figures and schedule-wide KPIs are derived entirely
from a Schedule and recomputed on every call.
"""

import math
from typing import Optional, Sequence, Union

from shiftplanner.domain.directory import StaffDirectory
from shiftplanner.domain.models import (
    FleetSummary,
    Schedule,
    StaffMember,
    StaffStatistic,
)
from shiftplanner.domain.policies import DefaultWorkloadPolicy, WorkloadPolicy


def round_percent(ratio: float) -> int:
    """Convert a ratio to a whole percentage, rounding halves up."""
    return math.floor(ratio * 100 + 0.5)


class StatisticsAggregator:
    """Computes workload statistics for a schedule.

    Example:
        >>> aggregator = StatisticsAggregator()
        >>> stats = aggregator.aggregate(schedule, directory)
        >>> summary = aggregator.summarize(schedule, directory)
    """

    def __init__(self, workload_policy: Optional[WorkloadPolicy] = None):
        self.workload_policy = workload_policy or DefaultWorkloadPolicy()

    def count_slots(self, schedule: Schedule) -> dict[str, int]:
        """Count assigned slots per person name."""
        counts: dict[str, int] = {}
        for shift in schedule.iter_assignments():
            for member in shift.assigned_staff:
                counts[member.name] = counts.get(member.name, 0) + 1
        return counts

    def aggregate(
        self,
        schedule: Schedule,
        staff: Union[StaffDirectory, Sequence[StaffMember]],
    ) -> list[StaffStatistic]:
        """Build one statistic per staff record, in directory order.

        Records with no assignments are included with zero values.
        Records sharing a name report the same person-level totals.

        Args:
            schedule: Generated schedule.
            staff: Staff records to report on, matched to the schedule by name.

        Returns:
            List with exactly one entry per record.
        """
        directory = StaffDirectory.coerce(staff)
        counts = self.count_slots(schedule)

        stats = []
        for member in directory:
            total = counts.get(member.name, 0)
            stats.append(
                StaffStatistic(
                    staff_id=member.staff_id,
                    name=member.name,
                    total_assigned_slots=total,
                    derived_work_hours=self.workload_policy.work_hours(total),
                    derived_work_days=self.workload_policy.work_days(total),
                )
            )
        return stats

    def summarize(
        self,
        schedule: Schedule,
        staff: Union[StaffDirectory, Sequence[StaffMember]],
    ) -> FleetSummary:
        """Compute schedule-wide KPIs.

        Fulfillment is the mean of assigned/required over every slot.
        A schedule without slots reports 0.
        """
        total_staff = len(StaffDirectory.coerce(staff))
        shifts = list(schedule.iter_assignments())
        if not shifts:
            return FleetSummary(total_staff=total_staff)

        average = sum(s.fulfillment_ratio for s in shifts) / len(shifts)
        return FleetSummary(
            total_staff=total_staff,
            total_slots=len(shifts),
            average_fulfillment=average,
            fulfillment_percent=round_percent(average),
            shortage_slots=sum(1 for s in shifts if s.shortage_alert is not None),
            conflict_alerts=sum(len(s.conflict_alerts) for s in shifts),
        )


def aggregate(
    schedule: Schedule,
    staff: Union[StaffDirectory, Sequence[StaffMember]],
) -> list[StaffStatistic]:
    """Per-staff statistics with the default workload policy."""
    return StatisticsAggregator().aggregate(schedule, staff)
