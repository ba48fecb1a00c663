# crowdwatch/schemas/alert.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from crowdwatch.models.enums import AlertSeverity


class AlertOut(BaseModel):
    id: int
    gate_id: int
    type: str
    message: str
    severity: AlertSeverity
    is_active: bool
    created_at: datetime
    acknowledged_at: Optional[datetime]

    class Config:
        from_attributes = True
