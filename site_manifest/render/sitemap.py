# File: site_manifest/render/sitemap.py
"""site_manifest.render.sitemap: serializes routes into a sitemaps.org 0.9 document."""

from __future__ import annotations

from typing import Iterable

from lxml import etree

from site_manifest.models import RouteEntry
from site_manifest.utils import join_url

__all__ = ["SITEMAP_NS", "render_sitemap"]

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def render_sitemap(routes: Iterable[RouteEntry], base_url: str) -> str:
    """Renders ``routes`` as sitemap XML with absolute ``<loc>`` URLs.

    Args:
        routes: route entries in manifest order.
        base_url: site origin; a trailing slash is tolerated.

    Returns:
        The UTF-8 document as text, declaration included. Characters reserved
        in XML are escaped by the serializer.

    Example:
    ```python
    from site_manifest.catalog import list_static_routes
    from site_manifest.render.sitemap import render_sitemap

    xml = render_sitemap(list_static_routes(), "https://example.com")
    ```
    """
    urlset = etree.Element(f"{{{SITEMAP_NS}}}urlset", nsmap={None: SITEMAP_NS})
    for route in routes:
        url = etree.SubElement(urlset, f"{{{SITEMAP_NS}}}url")
        etree.SubElement(url, f"{{{SITEMAP_NS}}}loc").text = join_url(base_url, route.path)
        etree.SubElement(url, f"{{{SITEMAP_NS}}}lastmod").text = route.last_modified.isoformat()
        etree.SubElement(url, f"{{{SITEMAP_NS}}}changefreq").text = route.change_frequency.value
        etree.SubElement(url, f"{{{SITEMAP_NS}}}priority").text = f"{route.priority:.1f}"

    body = etree.tostring(urlset, encoding="UTF-8", xml_declaration=True, pretty_print=True)
    return body.decode("utf-8")
