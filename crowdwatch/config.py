# crowdwatch/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite://"   # in-memory, state lives with the process

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Simulation ────────────────────────────────────────────────────────
    SIMULATION_ENABLED: bool = True
    SIMULATION_INTERVAL_SECONDS: float = 10.0
    SIMULATION_INITIAL_DELAY_SECONDS: float = 2.0
    RANDOM_SEED: Optional[int] = None   # Set to make simulation + phrasing reproducible

    # ── Gates ─────────────────────────────────────────────────────────────
    GATE_CAPACITY: int = 1200
    GATE_A_START: int = 1247
    GATE_B_START: int = 892
    GATE_C_START: int = 456
    GATE_D_START: int = 234
    GATE_E_START: int = 678
    GATE_F_START: int = 345

    @property
    def DEFAULT_GATES(self) -> list:
        return [
            {"name": "Gate A", "capacity": self.GATE_CAPACITY, "current_count": self.GATE_A_START},
            {"name": "Gate B", "capacity": self.GATE_CAPACITY, "current_count": self.GATE_B_START},
            {"name": "Gate C", "capacity": self.GATE_CAPACITY, "current_count": self.GATE_C_START},
            {"name": "Gate D", "capacity": self.GATE_CAPACITY, "current_count": self.GATE_D_START},
            {"name": "Gate E", "capacity": self.GATE_CAPACITY, "current_count": self.GATE_E_START},
            {"name": "Gate F", "capacity": self.GATE_CAPACITY, "current_count": self.GATE_F_START},
        ]

    # ── Video uploads ─────────────────────────────────────────────────────
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 500 * 1024 * 1024   # 500MB
    ANALYSIS_DELAY_SECONDS: float = 2.0
    HEATMAP_REGION_COUNT: int = 8

    # ── Chat ──────────────────────────────────────────────────────────────
    CHAT_HISTORY_LIMIT: int = 20

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"          # empty string disables the log file

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
