# crowdwatch/routers/gates.py
"""Gate occupancy — read, evacuation suggestion and manual update endpoints."""

from fastapi import APIRouter, Depends
from crowdwatch.dependencies import get_store
from crowdwatch.errors import NotFound
from crowdwatch.schemas.gate import GateOut, GateUpdate
from crowdwatch.services.alert_service import raise_capacity_alert
from crowdwatch.services.crowd_stats import least_crowded_gate
from crowdwatch.services.store import StadiumStore
from crowdwatch.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/gates", response_model=list[GateOut], summary="All gates")
async def list_gates(store: StadiumStore = Depends(get_store)):
    """Current count and status for every gate, in creation order."""
    return store.list_gates()


@router.get("/gates/evacuation", response_model=GateOut, summary="Fastest evacuation gate")
async def evacuation_gate(store: StadiumStore = Depends(get_store)):
    """The least crowded gate, where to send people in an emergency."""
    gate = least_crowded_gate(store.list_gates())
    if not gate:
        raise NotFound("No gates configured")
    return gate


@router.get("/gates/{gate_id}", response_model=GateOut)
async def get_gate(gate_id: int, store: StadiumStore = Depends(get_store)):
    gate = store.get_gate(gate_id)
    if not gate:
        raise NotFound(f"Gate {gate_id} not found")
    return gate


@router.patch("/gates/{gate_id}", response_model=GateOut, summary="Manually set count or capacity")
async def update_gate(gate_id: int, body: GateUpdate, store: StadiumStore = Depends(get_store)):
    """
    Override a gate's count and/or capacity. Status is re-derived.
    Pushing a gate over capacity raises a capacity alert, same as the simulator.
    """
    previous = store.get_gate(gate_id)
    if not previous:
        raise NotFound(f"Gate {gate_id} not found")

    gate = store.update_gate(gate_id, **body.model_dump(exclude_none=True))
    if not gate:
        raise NotFound(f"Gate {gate_id} not found")
    logger.info(f"Manual update {gate.name}: {gate.current_count}/{gate.capacity} ({gate.status.value})")

    if gate.current_count > gate.capacity and previous.current_count <= previous.capacity:
        raise_capacity_alert(store, gate, gate.current_count)
    return gate
