"""Scheduling engine: candidate filtering, generation and statistics."""

from shiftplanner.scheduling.aggregator import StatisticsAggregator, aggregate
from shiftplanner.scheduling.candidate_generator import CandidateGenerator
from shiftplanner.scheduling.generator import ShiftGenerator, generate_schedule
from shiftplanner.scheduling.session import PlanningSession

__all__ = [
    "CandidateGenerator",
    "PlanningSession",
    "ShiftGenerator",
    "StatisticsAggregator",
    "aggregate",
    "generate_schedule",
]
