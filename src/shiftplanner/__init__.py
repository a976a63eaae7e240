"""
Shift Planner

Assigns staff to fixed daily time slots from per-person availability,
flags understaffed slots and incompatible pairings, and summarizes
workload per person.
"""

__version__ = "1.0.0"
