"""Configuration loading (YAML) with built-in defaults."""

from __future__ import annotations

import pathlib
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "board_width": 10,
    "board_height": 20,
    "garbage_rows": 2,
    "max_garbage_rows": 10,
    "tick_ms": 600,
    "grant_min": 1,
    "grant_max": 3,
    "cell_size": 30,
    "fps": 60,
    "focus_len": 25,
    "break_len": 5,
    "long_break_len": 15,
    "cycles_for_long_break": 4,
    "data_path": "data/sparkplug.json",
    "weights": {"impact": 0.4, "urgency": 0.3, "energy_fit": 0.2, "complexity": 0.1},
}


def load_config(config_path: str | pathlib.Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file, filling gaps from DEFAULT_CONFIG.

    Args:
        config_path: Path to the YAML config file, or None for defaults only.

    Returns:
        Dict of configuration key-value pairs.

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    config = dict(DEFAULT_CONFIG)
    if config_path is None:
        return config
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        loaded = yaml.safe_load(f) or {}
    config.update(loaded)
    config["garbage_rows"] = max(0, min(config["max_garbage_rows"], int(config["garbage_rows"])))
    return config
