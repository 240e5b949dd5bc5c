"""
Loading and validation of the site_manifest generator configuration.
The schema is described with Pydantic; files may be YAML or JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_manifest.models import ChangeFrequency
from site_manifest.utils import normalize_origin


class RoutePolicy(BaseModel):
    """Priority and change frequency applied to a family of routes."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    priority: float = Field(0.9, ge=0.0, le=1.0)
    change_frequency: ChangeFrequency = ChangeFrequency.WEEKLY


class RobotsPolicy(BaseModel):
    """Rules written to robots.txt."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field("*", min_length=1)
    disallow: List[str] = Field(default_factory=lambda: ["/admin/", "/api/"])
    allow: List[str] = Field(
        default_factory=lambda: [
            "/",
            "/movie/",
            "/static-movie/",
            "/watchlist",
            "/profile",
            "/terms",
            "/privacy",
        ]
    )
    crawl_delay: Optional[float] = Field(1, ge=0)


class Profile(BaseModel):
    """Named deployment target (e.g. ``production``) overriding origins and output."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: Optional[str] = None
    api_base: Optional[str] = None
    output_dir: Optional[Path] = None


class GeneratorConfig(BaseModel):
    """Configuration for one generation run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(..., description="Public origin of the site, no trailing slash.")
    api_base: str = Field(..., description="Origin plus prefix of the content API.")
    collection: str = Field("movies", min_length=1, description="Collection path under api_base.")
    output_dir: Path = Field(Path("dist"), description="Where sitemap.xml and robots.txt go.")
    embedded_source: Path = Field(
        Path("src/utils/staticMovies.js"), description="Bundled fallback-content definition."
    )
    timeout: float = Field(10.0, gt=0, description="Total timeout of the API request (seconds).")
    user_agent: str = Field("SiteManifest/1.0", min_length=1, description="User-Agent header.")

    include_robots: bool = True
    include_remote_routes: bool = True
    include_embedded_routes: bool = True

    content_policy: RoutePolicy = Field(default_factory=RoutePolicy)
    robots: RobotsPolicy = Field(default_factory=RobotsPolicy)
    profiles: Dict[str, Profile] = Field(default_factory=dict)

    @field_validator("base_url", "api_base", mode="before")
    def _validate_origin(cls, v: Any) -> Any:
        if isinstance(v, str):
            return normalize_origin(v)
        return v

    @field_validator("collection", mode="before")
    def _strip_collection(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip("/")
        return v

    @property
    def collection_url(self) -> str:
        return f"{self.api_base}/{self.collection}"

    def with_overrides(self, **overrides: Any) -> GeneratorConfig:
        """Returns a validated copy with the non-None overrides applied."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return GeneratorConfig(**data)

    def for_profile(self, name: str) -> GeneratorConfig:
        """Returns a copy with the named profile's values applied."""
        try:
            profile = self.profiles[name]
        except KeyError:
            raise KeyError(f"Unknown profile {name!r}; known: {sorted(self.profiles)}") from None
        return self.with_overrides(**profile.model_dump())


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None], profile: Optional[str] = None) -> GeneratorConfig:
    """
    Reads YAML or JSON and returns a validated GeneratorConfig.
    With ``profile`` set, that profile's overrides are applied on top.
    Raises FileNotFoundError when the config file does not exist.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    cfg = GeneratorConfig(**data)
    return cfg.for_profile(profile) if profile else cfg


__all__ = [
    "GeneratorConfig",
    "RoutePolicy",
    "RobotsPolicy",
    "Profile",
    "load_config",
]
