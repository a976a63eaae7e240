"""Plain-text output for schedules and workload statistics.

This module renders:
- The schedule, day by day and slot by slot, with assigned staff and alerts
- The dashboard: schedule-wide KPIs and a per-staff workload table
"""

from pathlib import Path
from typing import Optional, Union

from shiftplanner.domain.directory import StaffDirectory
from shiftplanner.domain.models import Schedule
from shiftplanner.scheduling.aggregator import StatisticsAggregator

RULE_WIDTH = 80


class TextReportGenerator:
    """Generates human-readable text reports.

    Example:
        >>> generator = TextReportGenerator()
        >>> print(generator.generate_to_string(schedule, directory))
    """

    def __init__(self, aggregator: Optional[StatisticsAggregator] = None):
        self.aggregator = aggregator or StatisticsAggregator()

    def generate(
        self,
        schedule: Schedule,
        directory: StaffDirectory,
        output_path: Union[str, Path],
        include_dashboard: bool = True,
    ) -> str:
        """Generate the report and save it to a file.

        Returns:
            The generated text content.
        """
        content = self.generate_to_string(schedule, directory, include_dashboard)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(
        self,
        schedule: Schedule,
        directory: StaffDirectory,
        include_dashboard: bool = True,
    ) -> str:
        """Generate the report and return it as a string."""
        lines = self._schedule_lines(schedule)
        if include_dashboard:
            lines.append("")
            lines.extend(self._dashboard_lines(schedule, directory))
        return "\n".join(lines) + "\n"

    def _schedule_lines(self, schedule: Schedule) -> list[str]:
        lines = []

        lines.append("=" * RULE_WIDTH)
        if schedule.is_empty:
            lines.append("SHIFT SCHEDULE - no schedule generated")
            lines.append("=" * RULE_WIDTH)
            return lines

        lines.append(
            f"SHIFT SCHEDULE - {schedule.start_date} to {schedule.end_date} "
            f"({schedule.required_count} per slot)"
        )
        lines.append("=" * RULE_WIDTH)

        for day in schedule.days:
            lines.append("")
            lines.append(day.day_label)
            lines.append("-" * RULE_WIDTH)
            for shift in day.shifts:
                lines.append(
                    f"  {shift.slot.label}  required {shift.required_count}  "
                    f"assigned {shift.assigned_count}"
                )
                for member in shift.assigned_staff:
                    lines.append(f"      - {member.name} [{member.skill}]")
                for alert in shift.alerts:
                    lines.append(f"      ! {alert.message}")

        return lines

    def _dashboard_lines(self, schedule: Schedule, directory: StaffDirectory) -> list[str]:
        summary = self.aggregator.summarize(schedule, directory)
        stats = self.aggregator.aggregate(schedule, directory)

        lines = []
        lines.append("=" * RULE_WIDTH)
        lines.append("DASHBOARD")
        lines.append("=" * RULE_WIDTH)
        lines.append(f"Total Staff: {summary.total_staff}")
        lines.append(f"Total Slots: {summary.total_slots}")
        lines.append(f"Average Fulfillment: {summary.fulfillment_percent}%")
        lines.append(f"Understaffed Slots: {summary.shortage_slots}")
        lines.append(f"Conflict Alerts: {summary.conflict_alerts}")
        lines.append("")

        lines.append("-" * RULE_WIDTH)
        lines.append(f"{'#':>3} {'Name':<20} {'Slots':>6} {'Hours':>6} {'Days':>5}")
        lines.append("-" * RULE_WIDTH)
        for i, stat in enumerate(stats, 1):
            lines.append(
                f"{i:>3} {stat.name[:20]:<20} {stat.total_assigned_slots:>6} "
                f"{stat.derived_work_hours:>5}h {stat.derived_work_days:>4}d"
            )

        return lines
