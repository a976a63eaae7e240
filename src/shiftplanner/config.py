"""Planner configuration.

Settings are plain dataclass fields with defaults. A JSON file can
override them, and command-line flags override the file.
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Union

from shiftplanner.domain.policies import ALERT_POLICIES, AlertPolicy, get_alert_policy
from shiftplanner.scheduling.generator import validate_required_count

logger = logging.getLogger(__name__)


@dataclass
class PlannerConfig:
    """Configuration for a planning run.

    Attributes:
        required_count: Headcount target per slot. The UI offers 1-5 but any
            positive integer is accepted.
        alert_language: Alert wording, ``en`` or ``ja``.
        include_dashboard: Whether reports include the statistics section.
        page_margin: PDF page margin in points.
    """

    required_count: int = 2
    alert_language: str = "en"
    include_dashboard: bool = True
    page_margin: float = 36  # 0.5 inch

    def __post_init__(self):
        validate_required_count(self.required_count)
        if self.alert_language not in ALERT_POLICIES:
            raise ValueError(
                f"alert_language must be one of {sorted(ALERT_POLICIES)}, "
                f"got {self.alert_language!r}"
            )
        if self.page_margin < 0:
            raise ValueError(f"page_margin must not be negative, got {self.page_margin}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlannerConfig":
        """Create a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def alert_policy(self) -> AlertPolicy:
        """Alert policy matching ``alert_language``."""
        return get_alert_policy(self.alert_language)


def load_config(path: Union[str, Path]) -> PlannerConfig:
    """Load a PlannerConfig from a JSON file.

    Raises:
        ValueError: If the file is not a JSON object or holds invalid values.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    logger.debug("Loaded config from %s", path)
    return PlannerConfig.from_dict(data)
