"""site_manifest.render: pure renderers for sitemap.xml and robots.txt."""

from site_manifest.render.robots import render_robots_rules
from site_manifest.render.sitemap import render_sitemap

__all__ = ["render_sitemap", "render_robots_rules"]
