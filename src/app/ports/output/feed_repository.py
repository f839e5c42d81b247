from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models.feed import Feed


class IFeedRepository(ABC):
    """Port for loading one agency's static GTFS tables into a Feed."""

    @abstractmethod
    def load_feed(self, agency: str) -> Feed:
        raise NotImplementedError
