"""Staff directory with stable identifiers.

The directory is the first stage of the planning pipeline. It takes the
raw staff records produced by an importer, gives every distinct person a
stable ID and resolves the name-based affinity references to those IDs
once, at load time.
"""

import logging
from datetime import date
from typing import Iterator, Optional, Sequence, Union

from shiftplanner.domain.models import StaffMember, date_span

logger = logging.getLogger(__name__)


class StaffDirectory:
    """Ordered, immutable collection of staff records.

    Records keep their input order. Each distinct name receives an ID
    (``S001``, ``S002``, ...) in order of first appearance; every record
    of that person carries the same ID. ``good_with``/``bad_with`` names
    that are not in the directory, or that point at the person themself,
    resolve to ``None``.

    Example:
        >>> directory = StaffDirectory(records)
        >>> directory.id_for("Alice")
        'S001'
    """

    def __init__(self, staff: Sequence[StaffMember] = ()):
        self._ids_by_name: dict[str, str] = {}
        for member in staff:
            if member.name not in self._ids_by_name:
                self._ids_by_name[member.name] = f"S{len(self._ids_by_name) + 1:03d}"

        members = []
        for member in staff:
            staff_id = self._ids_by_name[member.name]
            members.append(
                member.with_identity(
                    staff_id,
                    good_with_id=self._resolve(member.good_with, staff_id),
                    bad_with_id=self._resolve(member.bad_with, staff_id),
                )
            )
        self._members: tuple[StaffMember, ...] = tuple(members)

        logger.debug(
            "Loaded directory with %d records for %d people",
            len(self._members),
            len(self._ids_by_name),
        )

    @classmethod
    def coerce(
        cls,
        staff: Union["StaffDirectory", Sequence[StaffMember]],
    ) -> "StaffDirectory":
        """Return ``staff`` as a directory, building one if needed."""
        if isinstance(staff, cls):
            return staff
        return cls(staff)

    def _resolve(self, name: str, own_id: str) -> Optional[str]:
        if not name:
            return None
        staff_id = self._ids_by_name.get(name)
        if staff_id == own_id:
            return None
        return staff_id

    @property
    def members(self) -> tuple[StaffMember, ...]:
        """All records in directory order."""
        return self._members

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[StaffMember]:
        return iter(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)

    def __repr__(self) -> str:
        return f"StaffDirectory({len(self._members)} records, {len(self._ids_by_name)} people)"

    def id_for(self, name: str) -> Optional[str]:
        """Get the staff ID for a name, if the name is in the directory."""
        return self._ids_by_name.get(name)

    def names(self) -> list[str]:
        """Distinct names in order of first appearance."""
        return list(self._ids_by_name)

    def get(self, staff_id: str) -> Optional[StaffMember]:
        """Get the first record of a person."""
        for member in self._members:
            if member.staff_id == staff_id:
                return member
        return None

    def records_for(self, staff_id: str) -> list[StaffMember]:
        """Get every record of a person, in directory order."""
        return [m for m in self._members if m.staff_id == staff_id]

    def date_range(self) -> Optional[tuple[date, date]]:
        """Earliest and latest available date, or None when empty."""
        if not self._members:
            return None
        dates = [m.available_date for m in self._members]
        return min(dates), max(dates)

    def dates(self) -> list[date]:
        """Every calendar day between the earliest and latest available date."""
        span = self.date_range()
        if span is None:
            return []
        return date_span(*span)
