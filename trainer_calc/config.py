from __future__ import annotations
import os
from dataclasses import dataclass, field

DEFAULT_SERVICE_URL = "http://127.0.0.1:3000"
DEFAULT_DB_PATH = os.path.join(os.path.dirname(__file__), "..", "trainer_calc.db")

@dataclass(frozen=True)
class Settings:
    service_url: str = DEFAULT_SERVICE_URL
    sets_dir: str = field(default_factory=lambda: os.path.join(os.getcwd(), "data", "sets"))
    db_url: str = f"sqlite:///{os.path.abspath(DEFAULT_DB_PATH)}"
    timeout: float = 15.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        timeout = env.get("TRAINER_CALC_TIMEOUT")
        return cls(
            service_url=env.get("TRAINER_CALC_SERVICE_URL", defaults.service_url).rstrip("/"),
            sets_dir=env.get("TRAINER_CALC_SETS_DIR", defaults.sets_dir),
            db_url=env.get("TRAINER_CALC_DB_URL", defaults.db_url),
            timeout=float(timeout) if timeout else defaults.timeout,
            log_level=env.get("TRAINER_CALC_LOG_LEVEL", defaults.log_level).upper(),
        )
