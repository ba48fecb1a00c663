# crowdwatch/schemas/analytics.py
from pydantic import BaseModel
from typing import Optional


class AnalyticsOut(BaseModel):
    total_people: int
    total_capacity: int
    capacity_percentage: int
    active_alerts: int
    busiest_gate: Optional[str]
    average_wait_time: float   # minutes, simulated
    entry_rate: int            # people per minute, simulated
    peak_hour: str
