# File: site_manifest/render/robots.py
"""site_manifest.render.robots: robots.txt from the packaged Jinja2 template."""

from __future__ import annotations

from typing import Optional

from jinja2 import Environment, PackageLoader, StrictUndefined

from site_manifest.config import RobotsPolicy
from site_manifest.utils import join_url

__all__ = ["render_robots_rules"]

_env = Environment(
    loader=PackageLoader("site_manifest", "templates"),
    autoescape=False,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)


def _format_delay(delay: float) -> str:
    return str(int(delay)) if float(delay).is_integer() else str(delay)


def render_robots_rules(base_url: str, policy: Optional[RobotsPolicy] = None) -> str:
    """Renders robots.txt: allow-all default, private prefixes disallowed, sitemap pointer."""
    policy = policy or RobotsPolicy()
    template = _env.get_template("robots.txt.j2")
    return template.render(
        base_url=base_url.rstrip("/"),
        sitemap_url=join_url(base_url, "sitemap.xml"),
        policy=policy,
        crawl_delay=_format_delay(policy.crawl_delay) if policy.crawl_delay is not None else None,
    )
