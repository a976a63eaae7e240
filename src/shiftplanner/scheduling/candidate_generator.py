"""Candidate generator for finding eligible staff per slot.

This module decides which staff records may be assigned to a given
date and slot, based only on availability.
"""

from datetime import date
from typing import Sequence

from shiftplanner.domain.directory import StaffDirectory
from shiftplanner.domain.models import StaffMember, TimeSlot


class CandidateGenerator:
    """Finds eligible staff for each (date, slot) pair.

    A record is a candidate when:
    - its available date is the slot's date, and
    - its available time window overlaps the slot window
      (touching boundaries do not count).

    Candidates keep directory order. A person with several records on
    the same date is returned once, through the first matching record.
    """

    def generate_candidates(
        self,
        directory: StaffDirectory,
        schedule_date: date,
        slot: TimeSlot,
    ) -> list[StaffMember]:
        """Get candidates for one slot.

        Args:
            directory: Staff directory to search.
            schedule_date: Date of the slot.
            slot: The time slot.

        Returns:
            Eligible records in directory order, one per person.
        """
        candidates = []
        seen_ids = set()
        for member in directory:
            if not member.is_available(schedule_date, slot.window):
                continue
            if member.staff_id in seen_ids:
                continue
            seen_ids.add(member.staff_id)
            candidates.append(member)
        return candidates

    def generate_all_candidates(
        self,
        directory: StaffDirectory,
        schedule_date: date,
        slots: Sequence[TimeSlot],
    ) -> dict[TimeSlot, list[StaffMember]]:
        """Get candidates for every slot of a date.

        Returns:
            Dict mapping each slot to its candidate list (possibly empty).
        """
        return {
            slot: self.generate_candidates(directory, schedule_date, slot)
            for slot in slots
        }

    def count_available(self, directory: StaffDirectory, schedule_date: date) -> int:
        """Count distinct people with any availability on a date."""
        return len({m.staff_id for m in directory if m.available_date == schedule_date})
