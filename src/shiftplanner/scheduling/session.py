"""Planning session holding the state of one user's planning work.

The session owns the loaded staff directory, the headcount setting and
the most recent schedule. Loading new staff replaces the directory
wholesale; generating replaces the schedule only once the new one is
complete.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from shiftplanner.domain.directory import StaffDirectory
from shiftplanner.domain.models import FleetSummary, Schedule, StaffMember, StaffStatistic
from shiftplanner.domain.policies import AlertPolicy
from shiftplanner.exceptions import SessionError
from shiftplanner.importer import load_staff, sample_staff
from shiftplanner.scheduling.aggregator import StatisticsAggregator
from shiftplanner.scheduling.generator import ShiftGenerator, validate_required_count

logger = logging.getLogger(__name__)


class PlanningSession:
    """Single-user, in-memory planning state.

    Example:
        >>> session = PlanningSession(required_count=2)
        >>> session.load_sample()
        >>> schedule = session.generate()
        >>> stats = session.statistics()
    """

    def __init__(
        self,
        required_count: int = 2,
        alert_policy: Optional[AlertPolicy] = None,
        aggregator: Optional[StatisticsAggregator] = None,
    ):
        self._required_count = validate_required_count(required_count)
        self.generator = ShiftGenerator(alert_policy=alert_policy)
        self.aggregator = aggregator or StatisticsAggregator()
        self._directory = StaffDirectory()
        self._schedule: Optional[Schedule] = None
        self._is_generating = False

    @property
    def directory(self) -> StaffDirectory:
        return self._directory

    @property
    def schedule(self) -> Optional[Schedule]:
        """Most recent complete schedule, or None before the first run."""
        return self._schedule

    @property
    def is_generating(self) -> bool:
        """True while a generation run is in progress."""
        return self._is_generating

    @property
    def required_count(self) -> int:
        return self._required_count

    @required_count.setter
    def required_count(self, value: int) -> None:
        self._required_count = validate_required_count(value)

    @property
    def can_generate(self) -> bool:
        return bool(self._directory) and not self._is_generating

    def load_staff(self, staff: Union[StaffDirectory, Sequence[StaffMember]]) -> StaffDirectory:
        """Replace the directory and discard the previous schedule."""
        self._directory = StaffDirectory.coerce(staff)
        self._schedule = None
        logger.info("Loaded %d staff records", len(self._directory))
        return self._directory

    def load_file(self, path: Union[str, Path]) -> StaffDirectory:
        """Replace the directory with the contents of a CSV or Excel file."""
        return self.load_staff(load_staff(path))

    def load_sample(self) -> StaffDirectory:
        """Replace the directory with the built-in sample roster."""
        return self.load_staff(sample_staff())

    def generate(self) -> Schedule:
        """Generate a new schedule from the current directory.

        Raises:
            SessionError: If no staff is loaded or a run is already in progress.
        """
        if not self._directory:
            raise SessionError("Load staff data before generating a schedule")
        if self._is_generating:
            raise SessionError("A schedule is already being generated")

        self._is_generating = True
        try:
            schedule = self.generator.generate(self._directory, self._required_count)
        finally:
            self._is_generating = False

        self._schedule = schedule
        return schedule

    def statistics(self) -> list[StaffStatistic]:
        """Per-staff statistics for the current schedule.

        Before any generation every record reports zero.
        """
        schedule = self._schedule or Schedule(required_count=self._required_count)
        return self.aggregator.aggregate(schedule, self._directory)

    def summary(self) -> FleetSummary:
        """Schedule-wide KPIs for the current schedule."""
        schedule = self._schedule or Schedule(required_count=self._required_count)
        return self.aggregator.summarize(schedule, self._directory)
