"""Optional tool configuration file (YAML or JSON).

Example ``stl2png.yaml``::

    reporter: rich
    verbose: 1
    chunk_size: 65536
    force: false
    manifest: true

Command line flags take precedence over file values.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any
import json

import yaml

from .packing.constants import DEFAULT_CHUNK_SIZE
from .packing.errors import ConfigError, E_CONFIG

__all__ = ["ToolConfig", "REPORTERS", "load_config", "config_from_dict"]

REPORTERS = ("plain", "rich", "json", "silent")


@dataclass(slots=True)
class ToolConfig:
    reporter: str = "plain"
    verbose: int = 0
    chunk_size: int = DEFAULT_CHUNK_SIZE
    force: bool = False
    # Emit <output>.manifest.json next to every packed artifact.
    manifest: bool = False


def _config_error(message: str, **context: Any) -> ConfigError:
    return ConfigError(code=E_CONFIG, message=message, context=context or None)


def config_from_dict(data: dict[str, Any]) -> ToolConfig:
    known = {f.name for f in fields(ToolConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise _config_error(f"Unknown config keys: {unknown}", keys=unknown)
    cfg = ToolConfig()
    for key, value in data.items():
        expected = type(getattr(cfg, key))
        # bool is an int subclass; reject it for numeric keys.
        if not isinstance(value, expected) or (
            expected is int and isinstance(value, bool)
        ):
            raise _config_error(
                f"Config key {key!r} must be {expected.__name__}, got {type(value).__name__}",
                key=key,
            )
        setattr(cfg, key, value)
    if cfg.reporter not in REPORTERS:
        raise _config_error(
            f"Unknown reporter {cfg.reporter!r}; expected one of {list(REPORTERS)}",
            key="reporter",
        )
    if cfg.chunk_size <= 0:
        raise _config_error("chunk_size must be positive", key="chunk_size")
    if cfg.verbose < 0:
        raise _config_error("verbose must not be negative", key="verbose")
    return cfg


def load_config(path: str | Path) -> ToolConfig:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise _config_error(
            f"Cannot read config file {str(p)!r}: {exc.strerror or exc}",
            path=str(p),
        ) from exc
    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            data: Any = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise _config_error(
            f"Cannot parse config file {str(p)!r}: {exc}", path=str(p)
        ) from exc
    if data is None:
        return ToolConfig()
    if not isinstance(data, dict):
        raise _config_error(
            "Root of config file must be a mapping", path=str(p)
        )
    return config_from_dict(data)
