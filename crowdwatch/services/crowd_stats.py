# crowdwatch/services/crowd_stats.py
"""
Pure helpers over gate snapshots: status classification, capacity
percentages, totals and the dashboard analytics summary.
Shared by the simulator, the chat responder and the routers.
"""

import math
import random
from typing import Optional, Sequence
from crowdwatch.models.enums import GateStatus
from crowdwatch.schemas.analytics import AnalyticsOut
from crowdwatch.schemas.gate import GateOut

MODERATE_RATIO = 0.75    # above this → moderate
PEAK_HOUR = "7:30 PM"    # simulated


def round_half_up(value: float) -> int:
    """Round .5 towards +inf (round() would round half to even)."""
    return int(math.floor(value + 0.5))


def gate_status(current_count: int, capacity: int) -> GateStatus:
    if current_count > capacity:
        return GateStatus.CRITICAL
    if current_count > capacity * MODERATE_RATIO:
        return GateStatus.MODERATE
    return GateStatus.NORMAL


def percent_of_capacity(current_count: int, capacity: int) -> int:
    """Whole-number percentage. Zero capacity reports 0 instead of dividing by zero."""
    if capacity <= 0:
        return 0
    return round_half_up(current_count / capacity * 100)


def totals(gates: Sequence[GateOut]) -> tuple[int, int]:
    """(total people, total capacity) across all gates."""
    return sum(g.current_count for g in gates), sum(g.capacity for g in gates)


def utilization_rate(total_people: int, total_capacity: int) -> int:
    return percent_of_capacity(total_people, total_capacity)


def busiest_gate(gates: Sequence[GateOut]) -> Optional[GateOut]:
    """Gate with the highest count; ties go to the first in store order."""
    if not gates:
        return None
    return max(gates, key=lambda g: g.current_count)


def least_crowded_gate(gates: Sequence[GateOut]) -> Optional[GateOut]:
    """Suggested evacuation gate: lowest current count, first in store order on ties."""
    if not gates:
        return None
    return min(gates, key=lambda g: g.current_count)


def gates_with_status(gates: Sequence[GateOut], status: GateStatus) -> list[GateOut]:
    return [g for g in gates if g.status == status]


def build_analytics(gates: Sequence[GateOut], active_alerts: int,
                    rng: Optional[random.Random] = None) -> AnalyticsOut:
    """Dashboard summary. Wait time and entry rate are simulated."""
    rng = rng or random.Random()
    total_people, total_capacity = totals(gates)
    busiest = busiest_gate(gates)

    average_wait_time = 2 + rng.random() * 6
    entry_rate = 15 + rng.random() * 15

    return AnalyticsOut(
        total_people=total_people,
        total_capacity=total_capacity,
        capacity_percentage=utilization_rate(total_people, total_capacity),
        active_alerts=active_alerts,
        busiest_gate=busiest.name if busiest else None,
        average_wait_time=round_half_up(average_wait_time * 10) / 10,
        entry_rate=round_half_up(entry_rate),
        peak_hour=PEAK_HOUR,
    )
