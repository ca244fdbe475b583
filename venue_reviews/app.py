from __future__ import annotations

import logging
import time
from datetime import datetime

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import DEFAULT_REVIEWS_CONFIG
from .dependencies import client_identifier, get_aggregator, get_now, get_registry
from .errors import PersistenceError, ReviewsError
from .ratings.aggregator import RatingAggregator, category_breakdown
from .venues.models import (
    AddPlaceRequest,
    AddPlaceResponse,
    PlaceDetailResponse,
    PlaceResponse,
    RankingResponse,
    RatePlaceRequest,
)
from .venues.registry import VenueRegistry

logger = logging.getLogger(__name__)

app = FastAPI(title="Anonymous Venue Reviews API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(DEFAULT_REVIEWS_CONFIG.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def access_log(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    elapsed_ms = (time.time() - start_time) * 1000
    logger.info(
        "%s %s %d %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.exception_handler(ReviewsError)
async def reviews_error_handler(request: Request, exc: ReviewsError) -> JSONResponse:
    if isinstance(exc, PersistenceError):
        logger.error("Storage failure while handling %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Anonymous reviews backend is running"


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Places ───────────────────────────────────────────────────────────────


@app.post("/api/places/add", response_model=AddPlaceResponse)
def add_place(
    body: AddPlaceRequest,
    response: Response,
    registry: VenueRegistry = Depends(get_registry),
) -> AddPlaceResponse:
    venue, created = registry.add_or_find(body.name, body.city, body.address)
    if not created:
        return AddPlaceResponse(message="Place already exists", created=False, place=venue)

    response.status_code = 201
    return AddPlaceResponse(message="Place added successfully", created=True, place=venue)


@app.post("/api/places/rate", response_model=PlaceResponse)
def rate_place(
    body: RatePlaceRequest,
    registry: VenueRegistry = Depends(get_registry),
    aggregator: RatingAggregator = Depends(get_aggregator),
    submitter: str = Depends(client_identifier),
    now: datetime = Depends(get_now),
) -> PlaceResponse:
    venue = registry.find_by_id(body.id)
    venue = aggregator.submit(venue, submitter, body.ratings, now=now)
    return PlaceResponse(message="Rating saved successfully", place=venue)


@app.get("/api/places/ranking", response_model=RankingResponse)
def ranking(registry: VenueRegistry = Depends(get_registry)) -> RankingResponse:
    top, bottom = registry.rankings()
    return RankingResponse(top_places=top, bottom_places=bottom)


@app.get("/api/places/{place_id}", response_model=PlaceDetailResponse)
def place_detail(
    place_id: str,
    registry: VenueRegistry = Depends(get_registry),
) -> PlaceDetailResponse:
    venue = registry.find_by_id(place_id)
    breakdown, total_votes = category_breakdown(venue)
    return PlaceDetailResponse(
        place=venue,
        averages_by_category=breakdown,
        total_votes=total_votes,
    )
