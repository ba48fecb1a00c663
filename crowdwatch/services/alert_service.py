# crowdwatch/services/alert_service.py
"""
Shared alert creation service.
Used by the crowd simulator and the manual gate update endpoint.
Capacity alerts are only ever created through raise_capacity_alert().
"""

from crowdwatch.models.enums import AlertSeverity, AlertType
from crowdwatch.schemas.alert import AlertOut
from crowdwatch.schemas.gate import GateOut
from crowdwatch.utils.logger import get_logger

logger = get_logger(__name__)


def is_fresh_breach(previous_count: int, new_count: int, capacity: int) -> bool:
    """True only on the transition from at-or-under capacity to over it."""
    return new_count > capacity and previous_count <= capacity


def raise_capacity_alert(store, gate: GateOut, new_count: int) -> AlertOut:
    """Create and persist a critical capacity alert for a gate."""
    message = f"{gate.name} has exceeded capacity ({new_count}/{gate.capacity})"
    alert = store.create_alert(
        gate_id=gate.id,
        type=AlertType.CAPACITY_EXCEEDED.value,
        message=message,
        severity=AlertSeverity.CRITICAL,
    )
    logger.warning(f"[ALERT][{alert.type.upper()}] {message}")
    return alert
