# crowdwatch/routers/health.py
"""
Liveness + readiness in one call: store reachability, gate count and
whether the crowd simulator loop is running.
"""

from datetime import datetime
from fastapi import APIRouter, Depends
from crowdwatch.dependencies import get_simulator, get_store
from crowdwatch.services.crowd_simulator import CrowdSimulator
from crowdwatch.services.store import StadiumStore
from crowdwatch.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def _store_health(store: StadiumStore) -> tuple[str, int]:
    """("ok", gate count) or ("error: ...", 0) when the store cannot be queried."""
    try:
        store.ping()
        return "ok", len(store.list_gates())
    except Exception as e:
        logger.error(f"Health check: store unavailable: {e}")
        return f"error: {e}", 0


@router.get("/health", summary="System health check")
async def health_check(store: StadiumStore = Depends(get_store),
                       simulator: CrowdSimulator = Depends(get_simulator)):
    database, gate_count = _store_health(store)
    return {
        "status": "ok" if database == "ok" else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": database,
        "simulator": "running" if simulator.is_running else "stopped",
        "gates": gate_count,
    }
