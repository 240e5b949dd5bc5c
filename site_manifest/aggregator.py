# File: site_manifest/aggregator.py
"""site_manifest.aggregator: merges catalog routes and content identifiers into one manifest."""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional

from site_manifest.config import RoutePolicy
from site_manifest.logger import logger
from site_manifest.models import ContentIdentifier, RouteEntry, RouteGroup
from site_manifest.utils import remove_duplicates

__all__ = ["REMOTE_PREFIX", "EMBEDDED_PREFIX", "content_routes", "group_routes", "build_routes"]

REMOTE_PREFIX = "/movie/"
EMBEDDED_PREFIX = "/static-movie/"


def content_routes(
    ids: Iterable[ContentIdentifier],
    prefix: str,
    *,
    today: Optional[date] = None,
    policy: Optional[RoutePolicy] = None,
) -> List[RouteEntry]:
    """Maps identifiers to ``prefix + id`` routes; a repeated identifier keeps its last position."""
    policy = policy or RoutePolicy()
    stamp = today or date.today()
    unique = remove_duplicates(ids)
    return [
        RouteEntry(f"{prefix}{identifier}", policy.priority, policy.change_frequency, stamp)
        for identifier in unique
    ]


def group_routes(
    static_routes: Iterable[RouteEntry],
    remote_ids: Iterable[ContentIdentifier],
    embedded_ids: Iterable[ContentIdentifier],
    *,
    today: Optional[date] = None,
    policy: Optional[RoutePolicy] = None,
) -> Dict[RouteGroup, List[RouteEntry]]:
    """Builds each group separately, in manifest order."""
    groups = {
        RouteGroup.STATIC: remove_duplicates(static_routes, key=lambda route: route.path),
        RouteGroup.REMOTE: content_routes(remote_ids, REMOTE_PREFIX, today=today, policy=policy),
        RouteGroup.EMBEDDED: content_routes(
            embedded_ids, EMBEDDED_PREFIX, today=today, policy=policy
        ),
    }
    logger.debug(
        "Route groups: %s",
        ", ".join(f"{group.value}={len(routes)}" for group, routes in groups.items()),
    )
    return groups


def build_routes(
    static_routes: Iterable[RouteEntry],
    remote_ids: Iterable[ContentIdentifier],
    embedded_ids: Iterable[ContentIdentifier],
    *,
    today: Optional[date] = None,
    policy: Optional[RoutePolicy] = None,
) -> List[RouteEntry]:
    """Static routes, then ``/movie/<id>``, then ``/static-movie/<id>``."""
    groups = group_routes(static_routes, remote_ids, embedded_ids, today=today, policy=policy)
    return [route for routes in groups.values() for route in routes]
