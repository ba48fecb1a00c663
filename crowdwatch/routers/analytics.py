# crowdwatch/routers/analytics.py
"""Stadium-wide summary for the dashboard's analytics panel."""

import random
from fastapi import APIRouter, Depends
from crowdwatch.dependencies import get_rng, get_store
from crowdwatch.schemas.analytics import AnalyticsOut
from crowdwatch.services.crowd_stats import build_analytics
from crowdwatch.services.store import StadiumStore

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsOut, summary="Crowd analytics summary")
async def get_analytics(store: StadiumStore = Depends(get_store),
                        rng: random.Random = Depends(get_rng)):
    """Totals, utilisation, busiest gate and active alert count. Wait time and entry rate are simulated."""
    return build_analytics(store.list_gates(), len(store.list_active_alerts()), rng)
