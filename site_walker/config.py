# === FILE: site_walker/config.py ===
"""
Loading and validation of the SiteWalker crawler configuration.
The schema is described with Pydantic; files may be YAML or JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_walker.crawler.limiter import DEFAULT_CAPACITY


class CrawlerConfig(BaseModel):
    """Configuration of one crawl invocation."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seeds: List[str] = Field(default_factory=list, description="Seed URLs, crawled in addition to CLI arguments.")
    concurrency: int = Field(DEFAULT_CAPACITY, ge=1, description="Maximum number of fetches in flight.")
    timeout: float = Field(10.0, gt=0, description="Timeout of a single request (seconds).")
    user_agent: str = Field("SiteWalker/1.0", min_length=1, description="User-Agent header.")
    retry_times: int = Field(0, ge=0, description="Retries per URL on transport errors and 5xx/429.")
    retry_backoff: float = Field(1.0, ge=0, description="Base delay of the exponential retry backoff.")
    max_urls: Optional[int] = Field(None, ge=1, description="Stop scheduling after this many URLs.")
    max_depth: Optional[int] = Field(None, ge=0, description="Do not follow links deeper than this.")

    @field_validator("seeds", mode="before")
    def _split_seeds(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.split()
        return v

    def with_overrides(self, **overrides: Any) -> CrawlerConfig:
        """Return a copy with every non-None override applied and re-validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return CrawlerConfig(**{**self.model_dump(), **changes})


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


def load_config(path: Union[str, Path, None] = None) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.

    Without *path* the default ``configs/default.yaml`` is used when it
    exists, built-in defaults otherwise. An explicit path that does not exist
    raises FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlerConfig()
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

    return CrawlerConfig(**data)
