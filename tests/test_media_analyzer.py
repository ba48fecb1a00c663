"""Unit tests for the heatmap analysis stub."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import random
import pytest
from unittest.mock import AsyncMock, patch
from crowdwatch.services.media_analyzer import HEATMAP_COLORS, MediaAnalyzer, density_color


class TestDensityColor:
    @pytest.mark.parametrize("density,expected", [
        (0.0, "#10b981"),
        (0.29, "#10b981"),
        (0.3, "#f59e0b"),
        (0.69, "#f59e0b"),
        (0.7, "#ef4444"),
        (1.0, "#ef4444"),
    ])
    def test_tiers(self, density, expected):
        assert density_color(density) == expected


class TestGenerateRegions:
    def test_region_bounds(self, empty_store):
        analyzer = MediaAnalyzer(empty_store, rng=random.Random(11), delay_seconds=0)
        regions = analyzer.generate_regions()
        assert len(regions) == 8
        for region in regions:
            assert 0 <= region.x <= 80
            assert 0 <= region.y <= 80
            assert 10 <= region.width <= 25
            assert 10 <= region.height <= 25
            assert 0 <= region.density <= 1
            assert region.color == density_color(region.density)
            assert region.color in HEATMAP_COLORS.values()

    def test_region_count_configurable(self, empty_store):
        analyzer = MediaAnalyzer(empty_store, rng=random.Random(1), region_count=3)
        assert len(analyzer.generate_regions()) == 3


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_marks_record_processed(self, empty_store):
        media = empty_store.create_media("f00d", "match.mp4", 1024, "video/mp4")
        analyzer = MediaAnalyzer(empty_store, rng=random.Random(2), delay_seconds=0)

        result = await analyzer.analyze(media.id)

        stored = empty_store.get_media(media.id)
        assert stored.is_processed is True
        assert stored.processed_at is not None
        assert len(stored.heatmap_data.regions) == 8
        assert stored.heatmap_data.processing_time == result.processing_time
        assert result.processing_time >= 0

    @pytest.mark.asyncio
    async def test_waits_for_configured_delay(self, empty_store):
        media = empty_store.create_media("beef", "gate.mp4", 10, "video/mp4")
        analyzer = MediaAnalyzer(empty_store, rng=random.Random(2), delay_seconds=2.0)

        with patch("crowdwatch.services.media_analyzer.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await analyzer.analyze(media.id)

        sleep.assert_awaited_once_with(2.0)

    @pytest.mark.asyncio
    async def test_missing_record_is_not_an_error(self, empty_store):
        analyzer = MediaAnalyzer(empty_store, rng=random.Random(2), delay_seconds=0)
        result = await analyzer.analyze(404)
        assert len(result.regions) == 8
        assert empty_store.list_media() == []
