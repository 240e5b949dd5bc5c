"""site_manifest.sources: content identifier providers. Neither provider raises."""

from site_manifest.sources.embedded import extract_embedded_ids, load_embedded_ids
from site_manifest.sources.remote import extract_identifier, fetch_content_ids

__all__ = ["extract_embedded_ids", "load_embedded_ids", "extract_identifier", "fetch_content_ids"]
