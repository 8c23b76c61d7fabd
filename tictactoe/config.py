"""YAML configuration for the game window and logging."""
from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .controller import SortOrder

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "game": {
        "sort_order": "ascending",
    },
    "gui": {
        "title": "Tic-Tac-Toe",
        "cell_size": 96,
        "padding": 16,
        "colors": {
            "background": "#f8f8f8",
            "grid": "#444444",
            "x": "#1a4b8c",
            "o": "#b53d00",
            "winning": "#ffe082",
            "hover": "#4caf50",
        },
    },
    "logging": {
        "level": "INFO",
    },
}


def _merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Dict[str, Any]]:
    """Read ``path`` (or the bundled ``config.yaml``) over the defaults."""

    config_path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    if not config_path.exists():
        if path is None:
            return copy.deepcopy(DEFAULT_CONFIG)
        raise FileNotFoundError(f"configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as fh:
        loaded = yaml.safe_load(fh)
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, Mapping):
        raise ValueError(f"{config_path} must contain a mapping at the top level")
    return _merge(DEFAULT_CONFIG, loaded)


def sort_order_from_config(config: Mapping[str, Any]) -> SortOrder:
    game_cfg = config.get("game", {}) or {}
    return SortOrder.parse(game_cfg.get("sort_order", "ascending"))


__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "sort_order_from_config",
]
