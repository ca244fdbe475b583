from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RatingSubmission(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    submitter_key: str
    values: tuple[int | None, ...]
    submitted_at: datetime


class Venue(CamelModel):
    id: str
    name: str
    city: str
    address: str
    ratings: list[RatingSubmission] = Field(default_factory=list)
    average_rating: float | None = None


# ── API payloads ─────────────────────────────────────────────────────────


class AddPlaceRequest(BaseModel):
    name: str | None = None
    city: str | None = None
    address: str | None = None


class RatePlaceRequest(BaseModel):
    id: Any = None
    ratings: Any = Field(
        default=None,
        description="13 scores in category order, each 1-5 or null when omitted",
    )


class PlaceResponse(CamelModel):
    message: str
    place: Venue


class AddPlaceResponse(PlaceResponse):
    created: bool


class RankingResponse(CamelModel):
    top_places: list[Venue]
    bottom_places: list[Venue]


class CategoryAverage(BaseModel):
    category: str
    average: float | None


class PlaceDetailResponse(CamelModel):
    place: Venue
    averages_by_category: list[CategoryAverage]
    total_votes: int
