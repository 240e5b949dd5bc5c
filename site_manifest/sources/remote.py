# site_manifest/sources/remote.py
"""
Remote content resolver: one GET against the content API, identifiers out.

Every failure (transport, timeout, non-2xx status, malformed payload) is
logged as a warning and turned into an empty result, so a missing backend
only shrinks the manifest.
"""
from __future__ import annotations

import asyncio
from typing import Any, List, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_manifest.errors import SourceUnavailable
from site_manifest.logger import logger
from site_manifest.models import ContentIdentifier
from site_manifest.utils import is_path_safe

__all__ = ["fetch_content_ids", "extract_identifier"]

_ID_FIELDS = ("id", "_id")


def extract_identifier(item: Any) -> Optional[ContentIdentifier]:
    """Returns ``item["id"]``, else ``item["_id"]``, or None when neither is usable."""
    if not isinstance(item, dict):
        return None
    for name in _ID_FIELDS:
        value = item.get(name)
        # bool is an int subclass
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str) and value.strip():
            candidate = value.strip()
            if not is_path_safe(candidate):
                logger.warning("Skipping content item with unusable %s %r", name, candidate)
                return None
            return candidate
    return None


async def _request_items(session: ClientSession, url: str) -> List[Any]:
    async with session.get(url, raise_for_status=False) as resp:
        if not 200 <= resp.status < 300:
            raise SourceUnavailable(url, f"API responded with status: {resp.status}")
        payload = await resp.json(content_type=None)
    if not isinstance(payload, list):
        raise SourceUnavailable(url, f"expected a JSON array, got {type(payload).__name__}")
    return payload


async def fetch_content_ids(
    api_base: str,
    *,
    collection: str = "movies",
    timeout: float = 10.0,
    user_agent: str = "SiteManifest/1.0",
) -> List[ContentIdentifier]:
    """
    Fetches ``{api_base}/{collection}`` and returns the identifiers found.

    Objects without a usable ``id``/``_id`` are skipped. Never raises: on any
    failure an empty list is returned.
    """
    url = f"{api_base.rstrip('/')}/{collection.strip('/')}"
    logger.info("Fetching content IDs from %s", url)
    try:
        async with ClientSession(
            timeout=ClientTimeout(total=timeout),
            headers={"User-Agent": user_agent},
        ) as session:
            items = await _request_items(session, url)
    except asyncio.TimeoutError:
        logger.warning("Could not fetch content IDs: no response within %s seconds", timeout)
        return []
    except SourceUnavailable as exc:
        logger.warning("Could not fetch content IDs: %s", exc.reason)
        return []
    except (ClientError, ValueError) as exc:
        # ValueError covers malformed JSON bodies
        logger.warning("Could not fetch content IDs: %s", exc)
        return []

    ids: List[ContentIdentifier] = []
    for position, item in enumerate(items):
        identifier = extract_identifier(item)
        if identifier is None:
            logger.debug("Skipping item #%d without id/_id", position)
            continue
        ids.append(identifier)

    logger.info("Found %d content items", len(ids))
    return ids
