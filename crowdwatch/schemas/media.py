# crowdwatch/schemas/media.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class HeatmapRegion(BaseModel):
    x: float          # % of frame width
    y: float          # % of frame height
    width: float
    height: float
    density: float    # 0-1 scale
    color: str


class HeatmapResult(BaseModel):
    regions: list[HeatmapRegion]
    processing_time: int   # milliseconds
    timestamp: datetime


class MediaOut(BaseModel):
    id: int
    filename: str
    original_name: str
    size: int
    mime_type: str
    uploaded_at: datetime
    processed_at: Optional[datetime]
    is_processed: bool
    heatmap_data: Optional[HeatmapResult]

    class Config:
        from_attributes = True
