"""site_manifest.errors: exception hierarchy for manifest generation.

Two tiers: :class:`SourceUnavailable` is recoverable and never leaves the
source module that raised it; :class:`ArtifactWriteError` is fatal and ends
the run with a non-zero exit code.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

__all__ = ["ManifestError", "SourceUnavailable", "ArtifactWriteError"]


class ManifestError(Exception):
    """Base class for all site_manifest errors."""


class SourceUnavailable(ManifestError):
    """A content source could not deliver identifiers (bad status, payload, I/O)."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class ArtifactWriteError(ManifestError):
    """An output document could not be written to disk."""

    def __init__(self, path: Union[str, Path], cause: BaseException) -> None:
        super().__init__(f"Cannot write {path}: {cause}")
        self.path = Path(path)
        self.cause = cause
