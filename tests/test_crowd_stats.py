"""Unit tests for gate status classification and stadium-wide figures."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import random
import pytest
from datetime import datetime
from crowdwatch.models.enums import GateStatus
from crowdwatch.schemas.gate import GateOut
from crowdwatch.services.crowd_stats import (
    build_analytics, busiest_gate, gate_status, least_crowded_gate,
    percent_of_capacity, round_half_up, utilization_rate,
)


def make_gate(name, current_count, capacity=1200):
    return GateOut(id=ord(name[-1]), name=name, capacity=capacity, current_count=current_count,
                   status=gate_status(current_count, capacity), last_updated=datetime.utcnow())


class TestGateStatus:
    @pytest.mark.parametrize("count,expected", [
        (0, GateStatus.NORMAL),
        (900, GateStatus.NORMAL),      # exactly 75%
        (901, GateStatus.MODERATE),
        (1200, GateStatus.MODERATE),   # exactly full
        (1201, GateStatus.CRITICAL),
        (5000, GateStatus.CRITICAL),
    ])
    def test_thresholds(self, count, expected):
        assert gate_status(count, 1200) == expected

    def test_critical_iff_over_capacity(self):
        for capacity in (1, 7, 100, 1200):
            for count in range(0, capacity * 2):
                assert (gate_status(count, capacity) == GateStatus.CRITICAL) == (count > capacity)


class TestPercentages:
    def test_rounds_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert percent_of_capacity(1247, 1200) == 104

    def test_zero_capacity(self):
        assert percent_of_capacity(10, 0) == 0
        assert utilization_rate(0, 0) == 0

    def test_utilization(self):
        assert utilization_rate(1000, 2400) == 42


class TestGateSelection:
    def test_busiest_and_least_crowded(self):
        gates = [make_gate("Gate A", 300), make_gate("Gate B", 900), make_gate("Gate C", 120)]
        assert busiest_gate(gates).name == "Gate B"
        assert least_crowded_gate(gates).name == "Gate C"

    def test_empty(self):
        assert busiest_gate([]) is None
        assert least_crowded_gate([]) is None


class TestAnalytics:
    def test_summary(self):
        gates = [make_gate("Gate A", 1247), make_gate("Gate B", 553)]
        summary = build_analytics(gates, active_alerts=2, rng=random.Random(5))
        assert summary.total_people == 1800
        assert summary.total_capacity == 2400
        assert summary.capacity_percentage == 75
        assert summary.active_alerts == 2
        assert summary.busiest_gate == "Gate A"
        assert 2 <= summary.average_wait_time <= 8
        assert 15 <= summary.entry_rate <= 30
        assert summary.peak_hour == "7:30 PM"

    def test_no_gates(self):
        summary = build_analytics([], active_alerts=0, rng=random.Random(5))
        assert summary.capacity_percentage == 0
        assert summary.busiest_gate is None
