"""Runtime settings read from the environment.

Everything has a development-friendly default so the service starts with no
configuration at all.
"""

import os
from dataclasses import dataclass

DEFAULT_SESSION_ID = "default-session"
LOW_STOCK_THRESHOLD = 5


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    payment_gateway: str = "simulated"
    payment_success_rate: float = 0.9
    default_session_id: str = DEFAULT_SESSION_ID
    low_stock_threshold: int = LOW_STOCK_THRESHOLD
    cors_origins: tuple[str, ...] = ("*",)
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str | None = None
    log_dir: str = "logs"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    @classmethod
    def from_env(cls) -> "Settings":
        success_rate = _float_env("PAYMENT_SUCCESS_RATE", 0.9)
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError(f"PAYMENT_SUCCESS_RATE must be between 0 and 1, got {success_rate}")

        origins = os.environ.get("CORS_ORIGINS", "*")
        return cls(
            environment=os.environ.get("PROTEAN_ENV", "development").lower(),
            payment_gateway=os.environ.get("PAYMENT_GATEWAY", "simulated").lower(),
            payment_success_rate=success_rate,
            default_session_id=os.environ.get("DEFAULT_SESSION_ID") or DEFAULT_SESSION_ID,
            low_stock_threshold=_int_env("LOW_STOCK_THRESHOLD", LOW_STOCK_THRESHOLD),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=_int_env("PORT", 3000),
            log_level=os.environ.get("LOG_LEVEL") or None,
            log_dir=os.environ.get("LOG_DIR") or "logs",
        )


def get_settings() -> Settings:
    """Settings for the current process environment.

    Read on every call so tests can flip environment variables with monkeypatch.
    """
    return Settings.from_env()
