from .local_feed_repository import LocalFeedRepository

__all__ = [
    "LocalFeedRepository",
]
