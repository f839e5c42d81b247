from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


def _as_set(values: Iterable[str] | None) -> frozenset[str] | None:
    if values is None:
        return None
    return frozenset(str(v).strip() for v in values)


@dataclass(frozen=True, slots=True)
class FilterPolicy:
    """Declarative allow-list deciding which routes of an agency are displayed.

    Each allow-list is optional; ``None`` leaves that field unconstrained. A
    route must satisfy every list that is set. ``FilterPolicy()`` lets every
    route through.
    """

    agency_ids: frozenset[str] | None = None
    route_ids: frozenset[str] | None = None
    route_short_names: frozenset[str] | None = None

    @classmethod
    def from_mapping(
        cls,
        *,
        agency_ids: Iterable[str] | None = None,
        route_ids: Iterable[str] | None = None,
        route_short_names: Iterable[str] | None = None,
    ) -> "FilterPolicy":
        return cls(
            agency_ids=_as_set(agency_ids),
            route_ids=_as_set(route_ids),
            route_short_names=_as_set(route_short_names),
        )

    @property
    def is_active(self) -> bool:
        return (
            self.agency_ids is not None
            or self.route_ids is not None
            or self.route_short_names is not None
        )
