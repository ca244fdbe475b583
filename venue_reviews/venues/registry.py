"""
Venue Registry - owns the in-memory venue collection.

Venues are identified by their normalized (name, city, address) triple:
surrounding whitespace trimmed and lowercased. The stored values keep the
caller's casing.
"""
from __future__ import annotations

import logging
import threading
import uuid
from typing import Any

from ..errors import NotFoundError, ValidationError
from .models import Venue
from .store import VenueStore

logger = logging.getLogger(__name__)

DEFAULT_RANKING_SIZE = 5


def _normalize(value: str) -> str:
    return value.strip().lower()


def _identity(venue: Venue) -> tuple[str, str, str]:
    return _normalize(venue.name), _normalize(venue.city), _normalize(venue.address)


def _ranking_key(venue: Venue) -> float:
    # Unrated venues rank below every rated one
    return venue.average_rating if venue.average_rating is not None else float("-inf")


class VenueRegistry:
    """
    Create-or-find, lookup and ranking over the venue collection.

    ``lock`` guards every read-modify-write of the collection; the rating
    aggregator holds it across its cooldown check, append and save.
    """

    def __init__(self, store: VenueStore, ranking_size: int = DEFAULT_RANKING_SIZE):
        self.store = store
        self.ranking_size = ranking_size
        self.lock = threading.RLock()
        self._venues: list[Venue] = store.load()

    def all_venues(self) -> list[Venue]:
        with self.lock:
            return list(self._venues)

    def add_or_find(
        self,
        name: str | None,
        city: str | None,
        address: str | None,
    ) -> tuple[Venue, bool]:
        """
        Return the venue matching the normalized triple, creating it if needed.

        Returns:
            (venue, created) where created is False for an existing venue

        Raises:
            ValidationError: If any field is missing or blank
        """
        fields = {"name": name, "city": city, "address": address}
        missing = [k for k, v in fields.items() if not isinstance(v, str) or not v.strip()]
        if missing:
            raise ValidationError(f"Name, city and address are required (missing: {', '.join(missing)})")

        key = (_normalize(name), _normalize(city), _normalize(address))

        with self.lock:
            for venue in self._venues:
                if _identity(venue) == key:
                    return venue, False

            venue = Venue(
                id=str(uuid.uuid4()),
                name=name.strip(),
                city=city.strip(),
                address=address.strip(),
            )
            self._venues.append(venue)
            self.persist()

        logger.info("Created venue %s - '%s' (%s)", venue.id, venue.name, venue.city)
        return venue, True

    def find_by_id(self, venue_id: Any) -> Venue:
        with self.lock:
            for venue in self._venues:
                if venue.id == venue_id:
                    return venue
        raise NotFoundError("Place not found")

    def rankings(self, size: int | None = None) -> tuple[list[Venue], list[Venue]]:
        """
        Return (top, bottom) venue lists.

        Both come from one stable descending sort on average rating. ``bottom``
        is the tail of that order reversed, so the worst venue is first. With
        ``size`` or fewer venues the two lists hold the same venues.
        """
        size = self.ranking_size if size is None else size
        with self.lock:
            ordered = sorted(self._venues, key=_ranking_key, reverse=True)

        top = ordered[:size]
        bottom = list(reversed(ordered[-size:])) if size > 0 else []
        return top, bottom

    def persist(self) -> None:
        with self.lock:
            self.store.save(self._venues)
