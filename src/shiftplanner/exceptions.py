"""Exceptions raised outside the scheduling engine.

The generator and aggregator never raise these; they are used by the
importer and the planning session.
"""


class ShiftPlannerError(Exception):
    """Base exception for shift planner operations"""
    pass


class StaffImportError(ShiftPlannerError):
    """Raised when a staff file cannot be read"""
    pass


class UnsupportedFormatError(StaffImportError):
    """Raised when a staff file has an unsupported extension"""
    pass


class SessionError(ShiftPlannerError):
    """Raised when a session operation's preconditions are not met"""
    pass
