from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict

import yaml


class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__


DEFAULTS: Dict[str, Any] = {
    "default_difficulty": "medium",
    # target clue count (inclusive) and score multiplier per tier
    "difficulty": {
        "easy": {"clues": [36, 42], "multiplier": 1},
        "medium": {"clues": [30, 36], "multiplier": 2},
        "hard": {"clues": [26, 30], "multiplier": 4},
        "expert": {"clues": [22, 26], "multiplier": 8},
        "master": {"clues": [17, 22], "multiplier": 16},
    },
    "history": {"max_nodes": 100, "prune_slack": 10},
    "game": {"auto_fill": True},
}


def _dotted(data: Any) -> Any:
    if isinstance(data, dict):
        return DotDict({k: _dotted(v) for k, v in data.items()})
    if isinstance(data, list):
        return [_dotted(v) for v in data]
    return data


def _deep_merge(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    for k, v in extra.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def load_yaml(path: str | Path) -> DotDict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must hold a mapping at top level")
    return _dotted(data)


def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    for k, v in overrides.items():
        if v is None:
            continue
        cfg[k] = v
    return cfg


def load_config(path: str | Path | None = None, **overrides) -> DotDict:
    """Defaults, deep-merged with an optional YAML file, then keyword overrides."""
    cfg = copy.deepcopy(DEFAULTS)
    if path is not None:
        _deep_merge(cfg, load_yaml(path))
    merge_overrides(cfg, **overrides)
    return _dotted(cfg)


def default_config() -> DotDict:
    return _dotted(copy.deepcopy(DEFAULTS))
