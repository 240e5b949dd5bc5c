"""
Data models for site_manifest: route entries and the per-run generation result.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

__all__ = (
    "ContentIdentifier",
    "ChangeFrequency",
    "RouteGroup",
    "RouteEntry",
    "GenerationResult",
)

#: Opaque token naming one content item; only ever interpolated into a path.
ContentIdentifier = str


class ChangeFrequency(str, Enum):
    """Values allowed in a sitemap ``<changefreq>`` element."""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


class RouteGroup(str, Enum):
    """Origin of a route; also the order groups appear in the manifest."""

    STATIC = "static"
    REMOTE = "remote"
    EMBEDDED = "embedded"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One crawlable URL with its sitemap metadata."""

    path: str
    priority: float
    change_frequency: ChangeFrequency
    last_modified: date = field(default_factory=date.today)

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            raise ValueError(f"Route path must be root-relative: {self.path!r}")
        if not 0.0 <= self.priority <= 1.0:
            raise ValueError(f"Priority must be within [0.0, 1.0], got {self.priority}")
        if not isinstance(self.change_frequency, ChangeFrequency):
            object.__setattr__(self, "change_frequency", ChangeFrequency(self.change_frequency))


@dataclass(slots=True)
class GenerationResult:
    """Everything one run produced. Lives only until the documents are written."""

    groups: Dict[RouteGroup, List[RouteEntry]]
    sitemap: str
    robots: Optional[str] = None
    written: List[Path] = field(default_factory=list)

    @property
    def routes(self) -> List[RouteEntry]:
        """All routes in manifest order: static, remote, embedded."""
        return [route for group in RouteGroup for route in self.groups.get(group, [])]

    @property
    def counts(self) -> Dict[RouteGroup, int]:
        return {group: len(self.groups.get(group, [])) for group in RouteGroup}

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def summary(self) -> str:
        """``"13 (10 static + 2 movies + 1 static movies)"``"""
        return (
            f"{self.total} ({self.counts.get(RouteGroup.STATIC, 0)} static"
            f" + {self.counts.get(RouteGroup.REMOTE, 0)} movies"
            f" + {self.counts.get(RouteGroup.EMBEDDED, 0)} static movies)"
        )
