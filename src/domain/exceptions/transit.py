class TransitError(Exception):
    """Base exception for the departures service."""


class UnknownAgency(TransitError):
    """Raised when an agency is not part of the configured registry."""


class FeedNotLoaded(TransitError):
    """Raised when an agency is configured but its feed has not been loaded yet."""
