"""Policy definitions for alert wording and workload estimates.

Policies are kept separate from the scheduling engine so that the
diagnostic text and the workload heuristics can be swapped or tested
independently of assignment.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from math import ceil

from shiftplanner.domain.models import SLOT_HOURS


class AlertPolicy(ABC):
    """Abstract base class for slot alert wording."""

    @abstractmethod
    def shortage_message(self, deficit: int) -> str:
        """Text for a slot that is short of ``deficit`` people."""
        pass

    @abstractmethod
    def conflict_message(self, first_name: str, second_name: str) -> str:
        """Text for two co-assigned people who should not be paired.

        Args:
            first_name: Name of the person assigned first.
            second_name: Name of the person assigned second.
        """
        pass


class WorkloadPolicy(ABC):
    """Abstract base class for per-person workload estimates."""

    @abstractmethod
    def work_hours(self, assigned_slots: int) -> int:
        """Hours worked for a number of assigned slots."""
        pass

    @abstractmethod
    def work_days(self, assigned_slots: int) -> int:
        """Estimated working days for a number of assigned slots."""
        pass


@dataclass
class DefaultAlertPolicy(AlertPolicy):
    """English alert wording."""

    def shortage_message(self, deficit: int) -> str:
        return f"Understaffed: {deficit} more needed"

    def conflict_message(self, first_name: str, second_name: str) -> str:
        return f"Conflict: {first_name} and {second_name}"


@dataclass
class JapaneseAlertPolicy(AlertPolicy):
    """Japanese alert wording."""

    def shortage_message(self, deficit: int) -> str:
        return f"スタッフ不足: {deficit}名不足"

    def conflict_message(self, first_name: str, second_name: str) -> str:
        return f"相性注意: {first_name}と{second_name}"


@dataclass
class DefaultWorkloadPolicy(WorkloadPolicy):
    """Default workload estimates.

    - Every slot counts for ``slot_hours`` hours (3).
    - A working day is assumed to hold at most ``max_slots_per_day``
      slots (2), so days = ceil(slots / 2). This is a display heuristic
      and can differ from the number of distinct dates worked.
    """

    slot_hours: int = SLOT_HOURS
    max_slots_per_day: int = 2

    def work_hours(self, assigned_slots: int) -> int:
        return assigned_slots * self.slot_hours

    def work_days(self, assigned_slots: int) -> int:
        return ceil(assigned_slots / self.max_slots_per_day)


ALERT_POLICIES = {
    "en": DefaultAlertPolicy,
    "ja": JapaneseAlertPolicy,
}


def get_alert_policy(language: str) -> AlertPolicy:
    """Look up the alert policy for a language code (``en`` or ``ja``)."""
    try:
        return ALERT_POLICIES[language]()
    except KeyError:
        raise ValueError(
            f"Unknown alert language {language!r}; "
            f"expected one of {sorted(ALERT_POLICIES)}"
        ) from None
