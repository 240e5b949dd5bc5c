# site_manifest/sources/embedded.py
"""
Embedded content extractor: identifiers of the bundled fallback movies.

The bundled definition is a script module, so it is scanned, not executed:
every ``id: '<literal>'`` assignment contributes its literal. An unrelated
nested field that is also named ``id`` is picked up as well; that is a known
limitation of scanning. JSON resources are parsed structurally instead.
"""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, List, Optional, Union

from site_manifest.logger import logger
from site_manifest.models import ContentIdentifier
from site_manifest.utils import is_path_safe

__all__ = ["ID_PATTERN", "extract_embedded_ids", "load_embedded_ids"]

ID_PATTERN = re.compile(r"""(?<![\w$])(['"]?)id\1\s*:\s*(['"`])([^'"`]+)\2""")


def _usable(ids: List[ContentIdentifier]) -> List[ContentIdentifier]:
    usable: List[ContentIdentifier] = []
    for identifier in ids:
        if is_path_safe(identifier):
            usable.append(identifier)
        else:
            logger.warning("Skipping static movie with unusable id %r", identifier)
    return usable


def extract_embedded_ids(source_blob: str) -> List[ContentIdentifier]:
    """Returns every quoted literal assigned to an ``id`` field, in file order."""
    ids = _usable([match.group(3) for match in ID_PATTERN.finditer(source_blob)])
    if not ids:
        logger.warning("No static movie IDs found")
    return ids


def _ids_from_json(data: Any) -> Optional[List[ContentIdentifier]]:
    if not isinstance(data, list):
        return None
    ids: List[ContentIdentifier] = []
    for item in data:
        if isinstance(item, dict) and isinstance(item.get("id"), (str, int)):
            value = str(item["id"]).strip()
            if value:
                ids.append(value)
    return _usable(ids)


def load_embedded_ids(path: Union[str, Path]) -> List[ContentIdentifier]:
    """Reads the bundled definition at ``path`` and extracts its identifiers.

    Never raises: unreadable files and empty results both give ``[]``.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read static movies from %s: %s", p, exc)
        return []

    if p.suffix.lower() == ".json":
        try:
            ids = _ids_from_json(json.loads(text))
        except json.JSONDecodeError as exc:
            logger.debug("%s is not valid JSON (%s); scanning it instead", p, exc)
            ids = None
        if ids is not None:
            if not ids:
                logger.warning("No static movie IDs found")
            logger.info("Found %d static movies", len(ids))
            return ids

    ids = extract_embedded_ids(text)
    logger.info("Found %d static movies", len(ids))
    return ids
