"""
Venue persistence.

The registry talks to a ``VenueStore``: ``load()`` returns the whole venue
collection and ``save()`` replaces it. Two implementations ship here, a JSON
file store used by the service and an in-memory store used by tests.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol, Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from ..errors import PersistenceError
from .models import Venue

logger = logging.getLogger(__name__)

_VENUE_LIST = TypeAdapter(list[Venue])


def dump_venues(venues: Sequence[Venue]) -> list[dict[str, Any]]:
    return _VENUE_LIST.dump_python(list(venues), mode="json", by_alias=True)


def parse_venues(data: Any) -> list[Venue]:
    return _VENUE_LIST.validate_python(data)


class VenueStore(Protocol):
    def load(self) -> list[Venue]:
        ...

    def save(self, venues: Sequence[Venue]) -> None:
        ...


class JsonFileVenueStore:
    """Stores the venue collection as one JSON array on disk."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> list[Venue]:
        if not self.path.exists():
            logger.info("No venue file at %s, starting with an empty collection", self.path)
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            venues = parse_venues(data)
        except (OSError, json.JSONDecodeError, SchemaError) as e:
            logger.error("Failed to load venues from %s", self.path, exc_info=True)
            raise PersistenceError(f"Could not load venues from {self.path}") from e

        logger.info("Loaded %d venues from %s", len(venues), self.path)
        return venues

    def save(self, venues: Sequence[Venue]) -> None:
        # Write to a temp file, then rename over the target
        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(dump_venues(venues), f, indent=2, ensure_ascii=False)
            os.replace(temp_path, self.path)
        except OSError as e:
            logger.error("Failed to save venues to %s", self.path, exc_info=True)
            if temp_path.exists():
                temp_path.unlink()
            raise PersistenceError(f"Could not save venues to {self.path}") from e

        logger.debug("Saved %d venues to %s", len(venues), self.path)


class InMemoryVenueStore:
    """Keeps the last saved snapshot in serialized form."""

    def __init__(self, venues: Sequence[Venue] | None = None):
        self.snapshot: list[dict[str, Any]] = dump_venues(venues or [])
        self.save_count = 0

    def load(self) -> list[Venue]:
        return parse_venues(self.snapshot)

    def save(self, venues: Sequence[Venue]) -> None:
        self.snapshot = dump_venues(venues)
        self.save_count += 1
