from .feed_downloader import IFeedDownloader
from .feed_repository import IFeedRepository

__all__ = [
    "IFeedDownloader",
    "IFeedRepository",
]
