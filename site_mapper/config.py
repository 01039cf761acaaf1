# === FILE: site_mapper/config.py ===
"""
Loading and validation of the SiteMapper crawl configuration.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CrawlerConfig(BaseModel):
    """Settings for one crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    concurrency: int = Field(10, ge=1, description="Maximum number of fetches in flight.")
    max_pages: Optional[int] = Field(
        10_000, ge=1, description="Hard cap on claimed pages; None disables the cap."
    )
    timeout: float = Field(10.0, gt=0, description="Per-request timeout (seconds).")
    retry_times: int = Field(0, ge=0, description="Retries after a transport failure.")
    user_agent: str = Field("SiteMapperBot/1.0", min_length=1, description="User-Agent header.")

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


DEFAULT_CFG = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None], **overrides: Any) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.

    With *path* None the default file is used when it exists, otherwise the
    built-in defaults. Keyword *overrides* whose value is not None replace
    the values read from the file.
    """
    if path is None:
        data = _read_file(DEFAULT_CFG) if DEFAULT_CFG.is_file() else {}
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlerConfig(**data)


def _read_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path)
    if suffix == ".json":
        return _read_json(path)
    raise ValueError(f"Unsupported config format: {suffix}")
