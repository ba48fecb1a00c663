# crowdwatch/services/store.py
"""
State store — the only owner of gates, alerts, chat messages and media records.

Wraps a SQLAlchemy engine (in-memory SQLite by default). Every accessor opens
its own short session and hands back detached pydantic read models, so callers
never hold live ORM objects across calls.

Lifecycle: init() creates tables and seeds the default gates, teardown()
disposes the engine. Both are called by the process entry point (main.py).
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterable, Optional
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from crowdwatch.database import create_tables
from crowdwatch.errors import InternalError, ValidationError
from crowdwatch.models.alert import Alert
from crowdwatch.models.chat_message import ChatMessage
from crowdwatch.models.enums import AlertSeverity
from crowdwatch.models.gate import Gate
from crowdwatch.models.media import MediaRecord
from crowdwatch.schemas.alert import AlertOut
from crowdwatch.schemas.chat import ChatMessageOut
from crowdwatch.schemas.gate import GateOut
from crowdwatch.schemas.media import MediaOut
from crowdwatch.services.crowd_stats import gate_status
from crowdwatch.utils.logger import get_logger

logger = get_logger(__name__)

GATE_UPDATE_FIELDS = {"current_count", "capacity"}
MEDIA_UPDATE_FIELDS = {"is_processed", "processed_at", "heatmap_data"}


class StadiumStore:
    def __init__(self, engine: Engine, clock: Callable[[], datetime] = datetime.utcnow):
        self.engine = engine
        self.clock = clock
        self._session_factory = sessionmaker(
            bind=engine, autocommit=False, autoflush=False, expire_on_commit=False,
        )

    # ── Lifecycle ─────────────────────────────────────────────────────────
    def init(self, default_gates: Iterable[dict] = ()):
        """Create tables and seed the default gates if none exist yet."""
        create_tables(self.engine)
        if self.list_gates():
            return
        for gate in default_gates:
            self.create_gate(**gate)
        logger.info(f"Seeded gates: {[g.name for g in self.list_gates()]}")

    def teardown(self):
        self.engine.dispose()
        logger.info("Store disposed")

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    @contextmanager
    def _session(self):
        """One unit of work. Commits on success; storage errors become InternalError."""
        db: Session = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Storage error: {e}", exc_info=True)
            raise InternalError("Storage operation failed") from e
        finally:
            db.close()

    # ── Gates ─────────────────────────────────────────────────────────────
    def create_gate(self, name: str, capacity: int, current_count: int = 0) -> GateOut:
        if capacity <= 0:
            raise ValidationError(f"Gate capacity must be positive, got {capacity}")
        if current_count < 0:
            raise ValidationError(f"Gate count cannot be negative, got {current_count}")
        if self.get_gate_by_name(name):
            raise ValidationError(f"Gate '{name}' already exists")

        with self._session() as db:
            gate = Gate(name=name, capacity=capacity, current_count=current_count,
                        status=gate_status(current_count, capacity),
                        last_updated=self.clock())
            db.add(gate)
            db.flush()
            return GateOut.model_validate(gate)

    def list_gates(self) -> list[GateOut]:
        with self._session() as db:
            return [GateOut.model_validate(g) for g in db.query(Gate).order_by(Gate.id).all()]

    def get_gate(self, gate_id: int) -> Optional[GateOut]:
        with self._session() as db:
            gate = db.query(Gate).filter(Gate.id == gate_id).first()
            return GateOut.model_validate(gate) if gate else None

    def get_gate_by_name(self, name: str) -> Optional[GateOut]:
        with self._session() as db:
            gate = db.query(Gate).filter(Gate.name == name).first()
            return GateOut.model_validate(gate) if gate else None

    def update_gate(self, gate_id: int, **fields) -> Optional[GateOut]:
        """
        Apply a partial update. Status is always re-derived from the resulting
        count and capacity, and last_updated is stamped. Returns None if the
        gate does not exist.
        """
        unknown = set(fields) - GATE_UPDATE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update gate fields: {sorted(unknown)}")

        with self._session() as db:
            gate = db.query(Gate).filter(Gate.id == gate_id).first()
            if not gate:
                return None
            for key, value in fields.items():
                if value is not None:
                    setattr(gate, key, value)
            gate.status = gate_status(gate.current_count, gate.capacity)
            gate.last_updated = self.clock()
            db.flush()
            return GateOut.model_validate(gate)

    # ── Alerts ────────────────────────────────────────────────────────────
    def create_alert(self, gate_id: int, type: str, message: str,
                     severity: AlertSeverity, is_active: bool = True) -> AlertOut:
        with self._session() as db:
            alert = Alert(gate_id=gate_id, type=type, message=message,
                          severity=AlertSeverity(severity), is_active=is_active,
                          created_at=self.clock())
            db.add(alert)
            db.flush()
            return AlertOut.model_validate(alert)

    def get_alert(self, alert_id: int) -> Optional[AlertOut]:
        with self._session() as db:
            alert = db.query(Alert).filter(Alert.id == alert_id).first()
            return AlertOut.model_validate(alert) if alert else None

    def list_alerts(self, active_only: bool = True, limit: Optional[int] = None) -> list[AlertOut]:
        """Alerts newest first."""
        with self._session() as db:
            q = db.query(Alert)
            if active_only:
                q = q.filter(Alert.is_active.is_(True))
            q = q.order_by(Alert.created_at.desc(), Alert.id.desc())
            if limit is not None:
                q = q.limit(limit)
            return [AlertOut.model_validate(a) for a in q.all()]

    def list_active_alerts(self) -> list[AlertOut]:
        return self.list_alerts(active_only=True)

    def acknowledge_alert(self, alert_id: int) -> Optional[AlertOut]:
        """Deactivate an alert. Re-acknowledging keeps the first acknowledgement time."""
        with self._session() as db:
            alert = db.query(Alert).filter(Alert.id == alert_id).first()
            if not alert:
                return None
            if alert.is_active:
                alert.is_active = False
                alert.acknowledged_at = self.clock()
                db.flush()
            return AlertOut.model_validate(alert)

    # ── Chat ──────────────────────────────────────────────────────────────
    def append_chat_message(self, message: str, response: str) -> ChatMessageOut:
        with self._session() as db:
            entry = ChatMessage(message=message, response=response, timestamp=self.clock())
            db.add(entry)
            db.flush()
            return ChatMessageOut.model_validate(entry)

    def recent_chat_messages(self, limit: int = 50) -> list[ChatMessageOut]:
        """Most recent messages first."""
        with self._session() as db:
            rows = (
                db.query(ChatMessage)
                .order_by(ChatMessage.timestamp.desc(), ChatMessage.id.desc())
                .limit(limit)
                .all()
            )
            return [ChatMessageOut.model_validate(m) for m in rows]

    # ── Media ─────────────────────────────────────────────────────────────
    def create_media(self, filename: str, original_name: str, size: int, mime_type: str) -> MediaOut:
        with self._session() as db:
            media = MediaRecord(filename=filename, original_name=original_name, size=size,
                                mime_type=mime_type, uploaded_at=self.clock(),
                                is_processed=False)
            db.add(media)
            db.flush()
            return MediaOut.model_validate(media)

    def get_media(self, media_id: int) -> Optional[MediaOut]:
        with self._session() as db:
            media = db.query(MediaRecord).filter(MediaRecord.id == media_id).first()
            return MediaOut.model_validate(media) if media else None

    def list_media(self) -> list[MediaOut]:
        with self._session() as db:
            return [MediaOut.model_validate(m) for m in db.query(MediaRecord).order_by(MediaRecord.id).all()]

    def update_media(self, media_id: int, **fields) -> Optional[MediaOut]:
        """Partial update of processing fields. Returns None if the record is gone."""
        unknown = set(fields) - MEDIA_UPDATE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update media fields: {sorted(unknown)}")

        with self._session() as db:
            media = db.query(MediaRecord).filter(MediaRecord.id == media_id).first()
            if not media:
                return None
            for key, value in fields.items():
                setattr(media, key, value)
            db.flush()
            return MediaOut.model_validate(media)
