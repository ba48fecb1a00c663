# crowdwatch/routers/alerts.py
from fastapi import APIRouter, Depends, Query
from crowdwatch.dependencies import get_store
from crowdwatch.errors import NotFound
from crowdwatch.schemas.alert import AlertOut
from crowdwatch.services.store import StadiumStore
from crowdwatch.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/alerts", response_model=list[AlertOut], summary="Active alerts, newest first")
async def get_alerts(
    include_acknowledged: bool = False,
    limit: int = Query(50, ge=1, le=500),
    store: StadiumStore = Depends(get_store),
):
    """Active alerts by default. Pass include_acknowledged=true for the full history."""
    return store.list_alerts(active_only=not include_acknowledged, limit=limit)


@router.patch("/alerts/{alert_id}/acknowledge", response_model=AlertOut, summary="Acknowledge an alert")
async def acknowledge_alert(alert_id: int, store: StadiumStore = Depends(get_store)):
    alert = store.acknowledge_alert(alert_id)
    if not alert:
        raise NotFound(f"Alert {alert_id} not found")
    logger.info(f"Alert {alert_id} acknowledged")
    return alert
