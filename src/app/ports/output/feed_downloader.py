from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models.agency import AgencyConfig


class IFeedDownloader(ABC):
    """Port for refreshing the on-disk GTFS files of an agency."""

    @abstractmethod
    def download(self, agency: AgencyConfig) -> bool:
        """Fetch and unpack the agency feed. Returns False if it was skipped or failed."""
