# File: site_manifest/engine.py
"""site_manifest.engine: orchestration of source collection, aggregation, rendering and writing."""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from site_manifest.aggregator import group_routes
from site_manifest.catalog import list_static_routes
from site_manifest.config import GeneratorConfig
from site_manifest.errors import ArtifactWriteError
from site_manifest.logger import logger
from site_manifest.models import ContentIdentifier, GenerationResult, RouteGroup
from site_manifest.render import render_robots_rules, render_sitemap
from site_manifest.sources import fetch_content_ids, load_embedded_ids
from site_manifest.utils import is_local_origin, join_url

__all__ = ["Engine", "SITEMAP_FILENAME", "ROBOTS_FILENAME"]

SITEMAP_FILENAME = "sitemap.xml"
ROBOTS_FILENAME = "robots.txt"

_GROUP_TITLES: Dict[RouteGroup, str] = {
    RouteGroup.STATIC: "Static Routes",
    RouteGroup.REMOTE: "Movie Routes",
    RouteGroup.EMBEDDED: "Static Movie Routes",
}


class Engine:
    """Facade for the CLI and tests: collects sources, builds and writes the documents."""

    def __init__(self, config: GeneratorConfig, today: Optional[date] = None) -> None:
        self.config = config
        self.today = today or date.today()

    async def _remote_ids(self) -> List[ContentIdentifier]:
        if not self.config.include_remote_routes:
            logger.info("Movie routes disabled in config")
            return []
        return await fetch_content_ids(
            self.config.api_base,
            collection=self.config.collection,
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
        )

    async def _embedded_ids(self) -> List[ContentIdentifier]:
        if not self.config.include_embedded_routes:
            logger.info("Static movie routes disabled in config")
            return []
        return await asyncio.to_thread(load_embedded_ids, self.config.embedded_source)

    async def collect_sources(self) -> Tuple[List[ContentIdentifier], List[ContentIdentifier]]:
        """Runs the API fetch and the bundled-file scan concurrently."""
        remote_ids, embedded_ids = await asyncio.gather(self._remote_ids(), self._embedded_ids())
        return remote_ids, embedded_ids

    async def abuild(self) -> GenerationResult:
        """Collects, aggregates and renders. Nothing is written."""
        logger.info("Starting sitemap generation for %s", self.config.base_url)
        remote_ids, embedded_ids = await self.collect_sources()

        groups = group_routes(
            list_static_routes(self.today),
            remote_ids,
            embedded_ids,
            today=self.today,
            policy=self.config.content_policy,
        )
        routes = [route for group in groups.values() for route in group]

        result = GenerationResult(
            groups=groups,
            sitemap=render_sitemap(routes, self.config.base_url),
            robots=(
                render_robots_rules(self.config.base_url, self.config.robots)
                if self.config.include_robots
                else None
            ),
        )
        logger.info("Total URLs: %s", result.summary())
        return result

    def build(self) -> GenerationResult:
        """Synchronous wrapper around :meth:`abuild`."""
        return asyncio.run(self.abuild())

    def write_artifacts(self, result: GenerationResult) -> List[Path]:
        """Writes sitemap.xml (and robots.txt when rendered). Failures are fatal."""
        output_dir = Path(self.config.output_dir)
        documents = [(output_dir / SITEMAP_FILENAME, result.sitemap)]
        if result.robots is not None:
            documents.append((output_dir / ROBOTS_FILENAME, result.robots))

        try:
            if not output_dir.is_dir():
                output_dir.mkdir(parents=True, exist_ok=True)
                logger.info("Created directory: %s", output_dir)
        except OSError as exc:
            logger.error("Cannot create output directory %s: %s", output_dir, exc)
            raise ArtifactWriteError(output_dir, exc) from exc

        for path, content in documents:
            try:
                path.write_text(content, encoding="utf-8")
            except OSError as exc:
                logger.error("Cannot write %s: %s", path, exc)
                raise ArtifactWriteError(path, exc) from exc
            logger.info("Generated %s", path)
            result.written.append(path)
        return result.written

    def generate(self) -> GenerationResult:
        """Full run: build the documents, then write them."""
        result = self.build()
        self.write_artifacts(result)
        if is_local_origin(self.config.base_url):
            logger.warning("base_url points at %s; set the production origin before deploying",
                           self.config.base_url)
        return result

    def preview(self, result: GenerationResult, limit: int = 5) -> List[str]:
        """Printable overview: every static route, the first ``limit`` routes of the other groups."""
        lines: List[str] = []
        for group, routes in result.groups.items():
            if not routes:
                continue
            shown = routes if group is RouteGroup.STATIC else routes[:limit]
            lines.append(f"{_GROUP_TITLES[group]}:")
            lines.extend(
                f"  {r.path} (Priority: {r.priority:.1f}, Change: {r.change_frequency.value})"
                for r in shown
            )
            if len(routes) > len(shown):
                lines.append(f"  ... and {len(routes) - len(shown)} more")

        lines.append(f"Sitemap URL: {join_url(self.config.base_url, SITEMAP_FILENAME)}")
        if result.robots is not None:
            lines.append(f"Robots URL: {join_url(self.config.base_url, ROBOTS_FILENAME)}")
        return lines
