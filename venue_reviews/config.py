from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class ReviewsConfig:
    data_path: Path = Path(
        os.getenv(
            "VENUE_REVIEWS_DATA_PATH",
            str(Path(__file__).resolve().parent / "data" / "places.json"),
        )
    )
    cooldown_months: int = 3
    ranking_size: int = 5
    trust_proxy: bool = _env_flag("VENUE_REVIEWS_TRUST_PROXY", True)
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _env_list("VENUE_REVIEWS_CORS_ORIGINS", "*")
    )
    host: str = os.getenv("VENUE_REVIEWS_HOST", "0.0.0.0")
    port: int = int(os.getenv("VENUE_REVIEWS_PORT", "3000"))
    log_level: str = os.getenv("VENUE_REVIEWS_LOG_LEVEL", "INFO")


DEFAULT_REVIEWS_CONFIG = ReviewsConfig()
