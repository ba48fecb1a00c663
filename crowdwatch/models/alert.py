# crowdwatch/models/alert.py
"""
Alerts table: capacity alerts raised when a gate breaches its capacity.
Alerts are acknowledged, never deleted.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean, Enum, ForeignKey
from crowdwatch.database import Base
from crowdwatch.models.enums import AlertSeverity


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    gate_id = Column(Integer, ForeignKey("gates.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False, index=True)
    message = Column(Text, nullable=False)
    severity = Column(Enum(AlertSeverity, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)
    acknowledged_at = Column(DateTime)

    def __repr__(self):
        return f"<Alert {self.id} gate={self.gate_id} type={self.type} active={self.is_active}>"
