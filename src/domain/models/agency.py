from __future__ import annotations

from dataclasses import dataclass, field

from .policy import FilterPolicy


@dataclass(frozen=True, slots=True)
class AgencyConfig:
    """Per-agency display settings, resolved once at configuration time."""

    name: str
    title: str
    feed_url: str | None = None
    policy: FilterPolicy = field(default_factory=FilterPolicy)
    default_color: str | None = None  # hex without '#', for routes without one
