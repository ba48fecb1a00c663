# crowdwatch/schemas/gate.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from crowdwatch.models.enums import GateStatus


class GateOut(BaseModel):
    id: int
    name: str
    capacity: int
    current_count: int
    status: GateStatus
    last_updated: datetime

    class Config:
        from_attributes = True


class GateUpdate(BaseModel):
    current_count: Optional[int] = Field(default=None, ge=0)
    capacity: Optional[int] = Field(default=None, gt=0)
