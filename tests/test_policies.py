"""Tests for alert and workload policies."""

import pytest

from shiftplanner.domain.policies import (
    DefaultAlertPolicy,
    DefaultWorkloadPolicy,
    JapaneseAlertPolicy,
    get_alert_policy,
)


class TestAlertPolicies:
    """Tests for alert wording."""

    def test_default_wording(self):
        """English messages carry the deficit and both names."""
        policy = DefaultAlertPolicy()
        assert policy.shortage_message(2) == "Understaffed: 2 more needed"
        assert policy.conflict_message("Alice", "Bob") == "Conflict: Alice and Bob"

    def test_japanese_wording(self):
        """Japanese messages carry the same details."""
        policy = JapaneseAlertPolicy()
        assert policy.shortage_message(1) == "スタッフ不足: 1名不足"
        assert policy.conflict_message("田中", "佐藤") == "相性注意: 田中と佐藤"

    def test_lookup_by_language(self):
        """Language codes map to policies."""
        assert isinstance(get_alert_policy("en"), DefaultAlertPolicy)
        assert isinstance(get_alert_policy("ja"), JapaneseAlertPolicy)

    def test_unknown_language(self):
        """Unknown codes are rejected."""
        with pytest.raises(ValueError):
            get_alert_policy("fr")


class TestDefaultWorkloadPolicy:
    """Tests for DefaultWorkloadPolicy."""

    @pytest.mark.parametrize(
        "slots, hours, days",
        [(0, 0, 0), (1, 3, 1), (2, 6, 1), (3, 9, 2), (4, 12, 2), (5, 15, 3)],
    )
    def test_hours_and_days(self, slots, hours, days):
        """Hours are 3 per slot; days are ceil(slots / 2)."""
        policy = DefaultWorkloadPolicy()
        assert policy.work_hours(slots) == hours
        assert policy.work_days(slots) == days

    def test_custom_values(self):
        """Slot length and slots per day are configurable."""
        policy = DefaultWorkloadPolicy(slot_hours=4, max_slots_per_day=3)
        assert policy.work_hours(3) == 12
        assert policy.work_days(4) == 2
