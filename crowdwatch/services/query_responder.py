# crowdwatch/services/query_responder.py
"""
Rule-based chat assistant over a gate snapshot.

Questions are classified by keyword, first match wins:
  1. "gate <A-F>"                         → that gate's count and status
  2. busiest | highest | most crowded     → gate with the most people
  3. total | all | overall                → stadium-wide totals
  4. status | how many                    → every gate
  5. alert | warning | emergency          → critical / moderate gates
  6. recommend | suggest | advice         → crowd-control recommendation
  7. anything else                        → help text

respond() never touches the store: the caller passes the gates in and
persists the exchange afterwards. Randomness only picks the phrasing.
"""

import enum
import random
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Sequence
from crowdwatch.models.enums import GateStatus
from crowdwatch.schemas.gate import GateOut
from crowdwatch.services.crowd_stats import (
    busiest_gate, gates_with_status, percent_of_capacity, totals, utilization_rate,
)
from crowdwatch.utils.logger import get_logger

logger = get_logger(__name__)


class QueryCategory(str, enum.Enum):
    GATE = "gate"
    BUSIEST = "busiest"
    TOTALS = "totals"
    STATUS = "status"
    ALERTS = "alerts"
    RECOMMENDATION = "recommendation"
    HELP = "help"


GATE_PATTERN = re.compile(r"\bgate\s+([a-f])\b", re.IGNORECASE)
BUSIEST_KEYWORDS = ("busiest", "highest", "most crowded")
TOTALS_KEYWORDS = ("total", "all", "overall")
STATUS_KEYWORDS = ("status", "how many")
ALERT_KEYWORDS = ("alert", "warning", "emergency")
RECOMMEND_KEYWORDS = ("recommend", "suggest", "advice")

STATUS_EMOJI = {
    GateStatus.CRITICAL: "🚨",
    GateStatus.MODERATE: "⚡",
    GateStatus.NORMAL: "✅",
}

HELP_RESPONSES = (
    "I can help you monitor crowd levels! Ask me about specific gates (A-F), total attendance, or which gate is busiest.",
    "Try asking me 'Gate A status?' or 'Which gate is busiest?' for real-time crowd information.",
    "I'm here to help with crowd monitoring. You can ask about gate status, total capacity, or get recommendations for crowd control.",
)
TROUBLE_RESPONSE = (
    "I'm experiencing technical difficulties. Please try again or contact support if the issue persists."
)


@dataclass
class ChatReply:
    response: str
    category: QueryCategory
    action_required: bool = False
    gate_data: Any = None


def _mentions(text: str, keywords: Sequence[str]) -> bool:
    return any(k in text for k in keywords)


def _names(gates: Sequence[GateOut]) -> str:
    return ", ".join(g.name for g in gates)


class QueryResponder:
    def __init__(self, rng: Optional[random.Random] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.rng = rng or random.Random()
        self.clock = clock

    def respond(self, message: str, gates: Sequence[GateOut]) -> ChatReply:
        try:
            return self._answer(message.lower(), list(gates))
        except Exception as e:
            logger.error(f"Error processing chat message {message!r}: {e}", exc_info=True)
            return ChatReply(response=TROUBLE_RESPONSE, category=QueryCategory.HELP)

    def _answer(self, text: str, gates: list[GateOut]) -> ChatReply:
        timestamp = self.clock().strftime("%H:%M:%S")

        match = GATE_PATTERN.search(text)
        if match:
            gate_name = f"Gate {match.group(1).upper()}"
            gate = next((g for g in gates if g.name == gate_name), None)
            if gate:
                return self._gate_reply(gate, timestamp)

        if _mentions(text, BUSIEST_KEYWORDS):
            return self._busiest_reply(gates)
        if _mentions(text, TOTALS_KEYWORDS):
            return self._totals_reply(gates, timestamp)
        if _mentions(text, STATUS_KEYWORDS):
            return self._status_reply(gates)
        if _mentions(text, ALERT_KEYWORDS):
            return self._alerts_reply(gates)
        if _mentions(text, RECOMMEND_KEYWORDS):
            return self._recommendation_reply(gates)

        return ChatReply(response=self.rng.choice(HELP_RESPONSES), category=QueryCategory.HELP)

    def _gate_reply(self, gate: GateOut, timestamp: str) -> ChatReply:
        count = gate.current_count
        percentage = percent_of_capacity(count, gate.capacity)
        emoji = STATUS_EMOJI[gate.status]
        status = gate.status.value
        over_capacity = count > gate.capacity

        variations = (
            f"{gate.name} status update ({timestamp}): **{count:,} people** ({percentage}% capacity). "
            f"{status.upper()} {emoji}",
            f"Current crowd at {gate.name}: **{count:,}** out of {gate.capacity:,} max capacity "
            f"({percentage}%). Status: {status} {emoji}",
            f"{gate.name} real-time data: **{count:,} attendees** - {percentage}% full. "
            f"Condition: {status} {emoji}",
        )
        response = self.rng.choice(variations)
        if over_capacity:
            response += " - **IMMEDIATE ATTENTION REQUIRED!**"

        return ChatReply(response=response, category=QueryCategory.GATE,
                         action_required=over_capacity,
                         gate_data=gate.model_dump(mode="json"))

    def _busiest_reply(self, gates: list[GateOut]) -> ChatReply:
        busiest = busiest_gate(gates)
        if busiest is None:
            return ChatReply(response="No gate data is available right now.",
                             category=QueryCategory.BUSIEST)

        over_capacity = busiest.current_count > busiest.capacity
        outlook = ("This gate is **OVER CAPACITY** and requires immediate attention!"
                   if over_capacity else "Crowd levels are manageable.")
        return ChatReply(
            response=f"{busiest.name} is currently the busiest with **{busiest.current_count:,} people**. {outlook}",
            category=QueryCategory.BUSIEST,
            action_required=over_capacity,
            gate_data=busiest.model_dump(mode="json"),
        )

    def _totals_reply(self, gates: list[GateOut], timestamp: str) -> ChatReply:
        total_people, total_capacity = totals(gates)
        rate = utilization_rate(total_people, total_capacity)

        variations = (
            f"Stadium overview ({timestamp}): **{total_people:,} attendees** across all gates. "
            f"Total capacity utilization: {rate}% ({total_capacity:,} max).",
            f"Real-time totals: **{total_people:,} people** currently in venue. "
            f"Overall capacity: {rate}% of {total_capacity:,} maximum.",
            f"Current stadium status: **{total_people:,} total attendees**. "
            f"Facility running at {rate}% capacity out of {total_capacity:,} total.",
        )
        tags = [tag for applies, tag in (
            (rate > 85, "🔥 Peak attendance levels!"),
            (rate > 70, "⚡ High activity period."),
            (rate < 50, "✅ Plenty of space available."),
        ) if applies]
        tag = self.rng.choice(tags) if tags else "📊 Normal operations."

        return ChatReply(
            response=f"{self.rng.choice(variations)} {tag}",
            category=QueryCategory.TOTALS,
            action_required=rate > 90,
            gate_data={"total_people": total_people, "total_capacity": total_capacity,
                       "utilization_rate": rate},
        )

    def _status_reply(self, gates: list[GateOut]) -> ChatReply:
        lines = "\n".join(
            f"{g.name}: {g.current_count:,} people "
            f"({percent_of_capacity(g.current_count, g.capacity)}% full, {g.status.value})"
            for g in gates
        )
        critical = len(gates_with_status(gates, GateStatus.CRITICAL))
        summary = (f"⚠️ {critical} gate(s) require immediate attention!" if critical
                   else "✅ All gates operating normally.")

        return ChatReply(
            response=f"Current gate status:\n{lines}\n\n{summary}",
            category=QueryCategory.STATUS,
            action_required=critical > 0,
            gate_data=[{"name": g.name, "count": g.current_count, "status": g.status.value} for g in gates],
        )

    def _alerts_reply(self, gates: list[GateOut]) -> ChatReply:
        critical = gates_with_status(gates, GateStatus.CRITICAL)
        moderate = gates_with_status(gates, GateStatus.MODERATE)

        if critical:
            verb = "is" if len(critical) == 1 else "are"
            return ChatReply(
                response=f"🚨 **CRITICAL ALERT:** {_names(critical)} {verb} over capacity! "
                         f"Immediate crowd control measures needed. Consider redirecting attendees to other gates.",
                category=QueryCategory.ALERTS,
                action_required=True,
                gate_data=[g.model_dump(mode="json") for g in critical],
            )
        if moderate:
            return ChatReply(
                response=f"⚡ Moderate crowd levels detected at {len(moderate)} gate(s). "
                         f"Monitor closely but no immediate action required.",
                category=QueryCategory.ALERTS,
                gate_data=[g.model_dump(mode="json") for g in moderate],
            )
        return ChatReply(
            response="✅ No active alerts. All gates are operating within normal capacity limits.",
            category=QueryCategory.ALERTS,
        )

    def _recommendation_reply(self, gates: list[GateOut]) -> ChatReply:
        critical = gates_with_status(gates, GateStatus.CRITICAL)
        normal = gates_with_status(gates, GateStatus.NORMAL)

        if critical and normal:
            return ChatReply(
                response=f"💡 **Recommendation:** Redirect traffic from overcrowded gates ({_names(critical)}) "
                         f"to available gates ({_names(normal)}). This will help balance crowd distribution.",
                category=QueryCategory.RECOMMENDATION,
                action_required=True,
                gate_data={"critical_gates": [g.name for g in critical],
                           "normal_gates": [g.name for g in normal]},
            )
        if not normal:
            return ChatReply(
                response="⚠️ All gates are experiencing high traffic. Consider opening additional "
                         "entry points or implementing crowd control measures.",
                category=QueryCategory.RECOMMENDATION,
                action_required=True,
            )
        return ChatReply(
            response="✅ Crowd distribution is well balanced. Continue monitoring for optimal flow management.",
            category=QueryCategory.RECOMMENDATION,
        )
