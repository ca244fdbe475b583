from __future__ import annotations

import logging

import uvicorn

from .config import DEFAULT_REVIEWS_CONFIG

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main() -> None:
    logging.basicConfig(level=DEFAULT_REVIEWS_CONFIG.log_level, format=LOG_FORMAT)
    uvicorn.run(
        "venue_reviews.app:app",
        host=DEFAULT_REVIEWS_CONFIG.host,
        port=DEFAULT_REVIEWS_CONFIG.port,
        workers=1,
        log_level=DEFAULT_REVIEWS_CONFIG.log_level.lower(),
    )


if __name__ == "__main__":
    main()
