from __future__ import annotations

from functools import lru_cache

from src.adapters.config import FeedRuntimeConfig
from src.adapters.persistence.local_feed_repository import LocalFeedRepository
from src.app.services.transit_map_service import TransitMapService


@lru_cache(maxsize=1)
def get_transit_map_service() -> TransitMapService:
    """Process-wide service, loaded on first use."""

    cfg = FeedRuntimeConfig.from_env()
    service = TransitMapService(
        feed_repository=LocalFeedRepository(base_path=cfg.data_dir),
        agencies_config=cfg.agencies(),
        timezone=cfg.timezone,
    )
    service.reload()
    return service
