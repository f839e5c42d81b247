from .transit import FeedNotLoaded, TransitError, UnknownAgency

__all__ = ["FeedNotLoaded", "TransitError", "UnknownAgency"]
