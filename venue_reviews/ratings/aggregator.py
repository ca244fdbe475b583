"""
Rating Aggregator.

Accepts anonymous rating vectors for a venue and keeps its aggregates
current:

- ``averageRating`` is a weighted mean over every non-omitted score of every
  submission, using each category's weight, rounded to 2 decimals.
- The category breakdown is a plain mean per category, rounded to 1 decimal.
  Weights never apply there.

A submitter is only known by the SHA-256 of their network address, and may
rate a given venue once per cooldown window.
"""
from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Sequence

from ..errors import RateLimitError, ValidationError
from ..venues.models import RatingSubmission, Venue
from ..venues.registry import VenueRegistry
from .categories import CATEGORIES, CATEGORY_COUNT, MAX_SCORE, MIN_SCORE
from .cooldown import COOLDOWN_MONTHS, is_within_cooldown

logger = logging.getLogger(__name__)


def pseudonymize(raw_identifier: str) -> str:
    return hashlib.sha256(raw_identifier.encode()).hexdigest()


def _mean(total: int, count: int, places: str) -> float:
    # Exact ties round up: 9/8 gives 1.13, 2.25 gives 2.3
    quotient = Decimal(total) / Decimal(count)
    return float(quotient.quantize(Decimal(places), rounding=ROUND_HALF_UP))


def _is_score(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_SCORE <= value <= MAX_SCORE
    )


def validate_values(values: Any) -> tuple[int | None, ...]:
    """Check a rating vector and return it as a tuple.

    Raises:
        ValidationError: Wrong type or length, or a slot that is neither
            ``None`` nor an integer from 1 to 5
    """
    if not isinstance(values, (list, tuple)):
        raise ValidationError(f"Ratings must be a list of {CATEGORY_COUNT} values")
    if len(values) != CATEGORY_COUNT:
        raise ValidationError(
            f"Ratings must contain exactly {CATEGORY_COUNT} values, got {len(values)}"
        )
    for category, value in zip(CATEGORIES, values):
        if value is not None and not _is_score(value):
            raise ValidationError(
                f"Ratings must be integers between {MIN_SCORE} and {MAX_SCORE} "
                f"or null for omitted categories ({category.label}: {value!r})"
            )
    return tuple(values)


def weighted_average(ratings: Sequence[RatingSubmission]) -> float | None:
    total_score = 0
    total_weight = 0
    for submission in ratings:
        for category, value in zip(CATEGORIES, submission.values):
            if value is None:
                continue
            total_score += value * category.weight
            total_weight += category.weight

    if total_weight == 0:
        return None
    return _mean(total_score, total_weight, "0.01")


def category_breakdown(venue: Venue) -> tuple[list[dict[str, Any]], int]:
    """Return ([{category, average}, ...], total_votes) for a venue.

    The list is empty when the venue has no submissions. A category nobody
    scored gets ``None``.
    """
    total_votes = len(venue.ratings)
    if total_votes == 0:
        return [], 0

    breakdown: list[dict[str, Any]] = []
    for category, column in zip(CATEGORIES, zip(*(s.values for s in venue.ratings))):
        scores = [v for v in column if v is not None]
        average = _mean(sum(scores), len(scores), "0.1") if scores else None
        breakdown.append({"category": category.label, "average": average})

    return breakdown, total_votes


def has_recent_submission(
    venue: Venue,
    submitter_key: str,
    now: datetime,
    months: int = COOLDOWN_MONTHS,
) -> bool:
    return any(
        s.submitter_key == submitter_key and is_within_cooldown(s.submitted_at, now, months)
        for s in venue.ratings
    )


class RatingAggregator:
    def __init__(self, registry: VenueRegistry, cooldown_months: int = COOLDOWN_MONTHS):
        self.registry = registry
        self.cooldown_months = cooldown_months

    def submit(
        self,
        venue: Venue,
        raw_identifier: str,
        values: Any,
        now: datetime | None = None,
    ) -> Venue:
        """
        Record one rating vector for ``venue`` and refresh its average.

        The cooldown check, append, recompute and save run under the
        registry lock, so one submitter can never land two votes for the
        same venue inside the window.

        Raises:
            ValidationError: Malformed rating vector
            RateLimitError: Submitter already rated this venue within the window
            PersistenceError: The store failed to save (the vote stays in memory)
        """
        scores = validate_values(values)
        submitter_key = pseudonymize(raw_identifier)
        now = now or datetime.now(timezone.utc)

        with self.registry.lock:
            if has_recent_submission(venue, submitter_key, now, self.cooldown_months):
                logger.info("Rejected repeat rating for venue %s within cooldown", venue.id)
                raise RateLimitError(
                    f"You can only rate this place once every {self.cooldown_months} months"
                )

            venue.ratings.append(
                RatingSubmission(submitter_key=submitter_key, values=scores, submitted_at=now)
            )
            venue.average_rating = weighted_average(venue.ratings)
            self.registry.persist()

        logger.info(
            "Accepted rating for venue %s (%d votes, average %s)",
            venue.id,
            len(venue.ratings),
            venue.average_rating,
        )
        return venue
