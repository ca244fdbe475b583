from __future__ import annotations

import threading
from datetime import datetime, timezone

from fastapi import Depends, Request

from .config import DEFAULT_REVIEWS_CONFIG
from .ratings.aggregator import RatingAggregator
from .venues.registry import VenueRegistry
from .venues.store import JsonFileVenueStore

_registry: VenueRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> VenueRegistry:
    """Return the process-wide registry, loading the venue file on first call."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = VenueRegistry(
                JsonFileVenueStore(DEFAULT_REVIEWS_CONFIG.data_path),
                ranking_size=DEFAULT_REVIEWS_CONFIG.ranking_size,
            )
    return _registry


def get_aggregator(registry: VenueRegistry = Depends(get_registry)) -> RatingAggregator:
    return RatingAggregator(registry, cooldown_months=DEFAULT_REVIEWS_CONFIG.cooldown_months)


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def client_identifier(request: Request) -> str:
    """Return the submitter's network address.

    Behind a proxy the first ``X-Forwarded-For`` hop is the client.
    """
    if DEFAULT_REVIEWS_CONFIG.trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else "unknown"
