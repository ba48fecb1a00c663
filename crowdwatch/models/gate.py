# crowdwatch/models/gate.py
"""
Gate occupancy table.
One row per monitored entry point, seeded at startup and never deleted.
Updated by the crowd simulator and the manual gate update endpoint.
"""

from sqlalchemy import Column, Integer, String, DateTime, Enum
from crowdwatch.database import Base
from crowdwatch.models.enums import GateStatus


class Gate(Base):
    __tablename__ = "gates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False, index=True)
    capacity = Column(Integer, nullable=False)
    current_count = Column(Integer, default=0, nullable=False)
    status = Column(Enum(GateStatus, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]), default=GateStatus.NORMAL, nullable=False)
    last_updated = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Gate {self.name} count={self.current_count}/{self.capacity} status={self.status}>"
