# File: site_manifest/catalog.py
"""site_manifest.catalog: fixed application routes and their crawl policy."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Tuple

from site_manifest.models import ChangeFrequency, RouteEntry

__all__ = ("POLICY_TABLE", "STATIC_PATHS", "list_static_routes")

#: category -> (priority, change frequency)
POLICY_TABLE: Dict[str, Tuple[float, ChangeFrequency]] = {
    "home": (1.0, ChangeFrequency.DAILY),
    "auth": (0.8, ChangeFrequency.MONTHLY),
    "user_features": (0.9, ChangeFrequency.WEEKLY),
    "profile": (0.7, ChangeFrequency.MONTHLY),
    "account": (0.6, ChangeFrequency.MONTHLY),
    "admin": (0.5, ChangeFrequency.MONTHLY),
    "legal": (0.4, ChangeFrequency.YEARLY),
    "movies": (0.9, ChangeFrequency.WEEKLY),
}

#: (path, category) in manifest order
STATIC_PATHS: Tuple[Tuple[str, str], ...] = (
    ("/", "home"),
    ("/login", "auth"),
    ("/register", "auth"),
    ("/watchlist", "user_features"),
    ("/profile", "profile"),
    ("/change-password", "account"),
    ("/admin/login", "admin"),
    ("/terms", "legal"),
    ("/privacy", "legal"),
    ("/static-movie", "movies"),
)


def list_static_routes(today: Optional[date] = None) -> List[RouteEntry]:
    """Returns the application routes, stamped with ``today`` (defaults to the current date)."""
    stamp = today or date.today()
    routes: List[RouteEntry] = []
    for path, category in STATIC_PATHS:
        priority, frequency = POLICY_TABLE[category]
        routes.append(RouteEntry(path, priority, frequency, stamp))
    return routes
