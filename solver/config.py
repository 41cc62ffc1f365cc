from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import yaml

DEFAULTS: Dict[str, Any] = {
    "depth": 2,
    "strategy": "optimal",
    "workers": 1,
    "max_literal_depth": 4,
}

class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__

def load_yaml(path: str | Path) -> DotDict:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return DotDict(data)

def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    for k, v in overrides.items():
        if v is None:
            continue
        cfg[k] = v
    return cfg

def load_config(path: str | Path | None = None, **overrides) -> DotDict:
    """Defaults <- YAML file <- non-None overrides, then checked."""
    cfg = DotDict(DEFAULTS)
    if path is not None:
        cfg.update(load_yaml(path))
    merge_overrides(cfg, **overrides)
    check_config(cfg)
    return cfg

def check_config(cfg: Dict[str, Any]) -> None:
    for key in ("depth", "workers", "max_literal_depth"):
        v = cfg.get(key)
        if not isinstance(v, int) or isinstance(v, bool) or v < 0:
            raise ValueError(f"config key {key!r} must be a non-negative integer, got {v!r}")
    if cfg["workers"] < 1:
        raise ValueError(f"config key 'workers' must be >= 1, got {cfg['workers']!r}")
    if cfg.get("strategy") not in ("optimal", "horizontal"):
        raise ValueError(f"config key 'strategy' must be 'optimal' or 'horizontal', got {cfg.get('strategy')!r}")
