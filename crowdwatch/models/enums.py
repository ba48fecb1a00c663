# crowdwatch/models/enums.py
"""Closed value sets stored as plain strings in the database."""

import enum


class GateStatus(str, enum.Enum):
    NORMAL = "normal"
    MODERATE = "moderate"
    CRITICAL = "critical"


class AlertSeverity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AlertType(str, enum.Enum):
    CAPACITY_EXCEEDED = "capacity_exceeded"
