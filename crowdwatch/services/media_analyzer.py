# crowdwatch/services/media_analyzer.py
"""
Heatmap analysis stub for uploaded videos.

No frames are decoded: after a fixed delay that stands in for processing
time, a handful of rectangular density regions are generated at random and
stored on the media record.
"""

import asyncio
import random
import time
from datetime import datetime
from typing import Callable, Optional
from crowdwatch.schemas.media import HeatmapRegion, HeatmapResult
from crowdwatch.utils.logger import get_logger

logger = get_logger(__name__)

HEATMAP_COLORS = {
    "low": "#10b981",      # green
    "medium": "#f59e0b",   # yellow
    "high": "#ef4444",     # red
}


def density_color(density: float) -> str:
    if density < 0.3:
        return HEATMAP_COLORS["low"]
    if density < 0.7:
        return HEATMAP_COLORS["medium"]
    return HEATMAP_COLORS["high"]


class MediaAnalyzer:
    def __init__(self, store, rng: Optional[random.Random] = None,
                 delay_seconds: float = 2.0, region_count: int = 8,
                 clock: Callable[[], datetime] = datetime.utcnow):
        self.store = store
        self.rng = rng or random.Random()
        self.delay_seconds = delay_seconds
        self.region_count = region_count
        self.clock = clock

    def generate_regions(self) -> list[HeatmapRegion]:
        regions = []
        for _ in range(self.region_count):
            density = self.rng.random()
            regions.append(HeatmapRegion(
                x=self.rng.random() * 80,          # % of frame
                y=self.rng.random() * 80,
                width=10 + self.rng.random() * 15,
                height=10 + self.rng.random() * 15,
                density=density,
                color=density_color(density),
            ))
        return regions

    async def analyze(self, media_id: int) -> HeatmapResult:
        """
        Simulate processing one uploaded video and attach the heatmap to it.
        Runs to completion even if nobody is waiting on it. If the record has
        gone away meanwhile, the result is simply not stored.
        """
        started = time.monotonic()
        logger.info(f"[HEATMAP] Processing media {media_id}...")
        await asyncio.sleep(self.delay_seconds)

        result = HeatmapResult(
            regions=self.generate_regions(),
            processing_time=int((time.monotonic() - started) * 1000),
            timestamp=self.clock(),
        )

        updated = self.store.update_media(
            media_id,
            is_processed=True,
            processed_at=self.clock(),
            heatmap_data=result.model_dump(mode="json"),
        )
        if updated is None:
            logger.warning(f"[HEATMAP] Media {media_id} no longer exists, result discarded")
        else:
            logger.info(f"[HEATMAP] Media {media_id} processed in {result.processing_time}ms "
                        f"({len(result.regions)} regions)")
        return result
