from __future__ import annotations

import os
from pathlib import Path

# Base data dir: repository_root/data (we are in backend/faultdemo/)
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def data_dir() -> Path:
    return Path(os.getenv("APP_DATA_DIR", str(DEFAULT_DATA_DIR)))


def port() -> int:
    return _int_env("PORT", 3000)


def host() -> str:
    return os.getenv("HOST", "127.0.0.1")


def upstream_base_url() -> str:
    """Where priceView sends its chained calls; loopback to this server unless overridden."""
    return os.getenv("UPSTREAM_BASE_URL") or f"http://localhost:{port()}"


def upstream_timeout_seconds() -> float:
    return _float_env("UPSTREAM_TIMEOUT_SECONDS", 5.0)


def rate_latency_ms() -> int:
    return max(0, _int_env("RATE_LATENCY_MS", 120))


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()]


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
