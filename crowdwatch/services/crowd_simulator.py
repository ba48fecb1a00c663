# crowdwatch/services/crowd_simulator.py
"""
Occupancy simulator: drives every gate's people count with a biased random
walk and raises an alert the moment a gate goes over capacity.

Biases:
  - near capacity (>90%) counts tend to fall
  - near empty (<20%) counts tend to rise
  - high occupancy (>70%) swings are damped
  - evening (18-22h) and late morning (10-12h) add inflow
  - 10% of updates carry a sudden surge

tick() is synchronous and can be driven directly by tests; start()/stop()
run it on the event loop every interval_seconds.
"""

import asyncio
import random
from datetime import datetime
from typing import Callable, Optional
from crowdwatch.schemas.alert import AlertOut
from crowdwatch.schemas.gate import GateOut
from crowdwatch.services.alert_service import is_fresh_breach, raise_capacity_alert
from crowdwatch.services.crowd_stats import round_half_up
from crowdwatch.utils.logger import get_logger

logger = get_logger(__name__)

BASE_SWING = 30          # base change is uniform in [-30, +30]
SURGE_PROBABILITY = 0.10
SURGE_MAX = 50
EVENING_HOURS = (18, 22)
MORNING_HOURS = (10, 12)


class CrowdSimulator:
    def __init__(self, store, rng: Optional[random.Random] = None,
                 clock: Callable[[], datetime] = datetime.now,
                 interval_seconds: float = 10.0, initial_delay_seconds: float = 2.0):
        self.store = store
        self.rng = rng or random.Random()
        self.clock = clock   # local time, used for the time-of-day bias
        self.interval_seconds = interval_seconds
        self.initial_delay_seconds = initial_delay_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def generate_change(self, current_count: int, capacity: int, hour: int) -> int:
        """Proposed change in people count for one gate over one tick."""
        ratio = current_count / capacity if capacity > 0 else 0.0
        r = self.rng.random

        change = r() * (2 * BASE_SWING) - BASE_SWING

        if ratio > 0.9:
            change *= 0.3
            change -= r() * 20
        elif ratio < 0.2:
            change *= 0.5
            change += r() * 40
        elif ratio > 0.7:
            change *= 0.6

        if EVENING_HOURS[0] <= hour <= EVENING_HOURS[1]:
            change += r() * 15
        elif MORNING_HOURS[0] <= hour <= MORNING_HOURS[1]:
            change += r() * 10

        if r() < SURGE_PROBABILITY:
            change += r() * SURGE_MAX

        return round_half_up(change)

    def tick(self) -> list[AlertOut]:
        """Advance every gate once. Returns the alerts raised during this tick."""
        try:
            gates = self.store.list_gates()
        except Exception as e:
            logger.error(f"Could not load gates for simulation: {e}", exc_info=True)
            return []

        hour = self.clock().hour
        raised = []
        for gate in gates:
            try:
                alert = self._advance_gate(gate, hour)
            except Exception as e:
                logger.error(f"Simulation update failed for {gate.name}: {e}", exc_info=True)
                continue
            if alert:
                raised.append(alert)

        logger.debug(f"📊 Crowd levels updated ({len(gates)} gates, {len(raised)} new alerts)")
        return raised

    def _advance_gate(self, gate: GateOut, hour: int) -> Optional[AlertOut]:
        change = self.generate_change(gate.current_count, gate.capacity, hour)
        new_count = max(0, gate.current_count + change)

        updated = self.store.update_gate(gate.id, current_count=new_count)
        if updated is None:
            logger.warning(f"{gate.name} disappeared during simulation, skipped")
            return None

        if is_fresh_breach(gate.current_count, new_count, gate.capacity):
            return raise_capacity_alert(self.store, updated, new_count)
        return None

    # ── Background loop ───────────────────────────────────────────────────
    def start(self):
        """Schedule the simulation loop on the running event loop. No-op if already running."""
        if self.is_running:
            return
        logger.info(f"🚀 Starting crowd simulation (every {self.interval_seconds}s)")
        self._task = asyncio.create_task(self._run(), name="crowd-simulator")

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("⏹️ Crowd simulation stopped")

    async def _run(self):
        await asyncio.sleep(self.initial_delay_seconds)
        while True:
            self.tick()
            await asyncio.sleep(self.interval_seconds)
