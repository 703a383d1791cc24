# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Configuration loading.

Configuration lives in a YAML file (see configs/game_config.yaml). Values
missing from the file fall back to DEFAULT_CONFIG.
"""

import copy
import logging
from pathlib import Path
from typing import Dict, Optional, Union

import yaml

from .rules import GameVariant

logger = logging.getLogger(__name__)

PLACEMENT_MODES = ("random", "manual")
OPPONENTS = ("heuristic", "random")

DEFAULT_CONFIG: Dict = {
    "game": {
        "variant": None,
        "seed": None,
        "placement": "random",
    },
    "logging": {
        "level": "WARNING",
        "action_log": "log.txt",
    },
    "evaluation": {
        "num_games": 100,
        "seeds": None,
        "max_rounds": 300,
        "variant": "classic",
        "opponent": "random",
    },
}


def _merge(base: Dict, override: Dict) -> Dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(config: Dict) -> Dict:
    """
    Check configuration values.

    Raises:
        ValueError: If a value is not one the game understands.
    """
    if config["game"]["variant"] is not None:
        GameVariant.from_name(config["game"]["variant"])
    GameVariant.from_name(config["evaluation"]["variant"])

    if config["game"]["placement"] not in PLACEMENT_MODES:
        raise ValueError(
            f"Invalid placement '{config['game']['placement']}'. "
            f"Must be one of: {', '.join(PLACEMENT_MODES)}"
        )
    if config["evaluation"]["opponent"] not in OPPONENTS:
        raise ValueError(
            f"Invalid opponent '{config['evaluation']['opponent']}'. "
            f"Must be one of: {', '.join(OPPONENTS)}"
        )
    if int(config["evaluation"]["num_games"]) < 1:
        raise ValueError("evaluation.num_games must be at least 1")
    level = config["logging"]["level"]
    if not isinstance(logging.getLevelName(str(level).upper()), int):
        raise ValueError(f"Invalid logging level '{level}'")
    return config


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML file. None returns the defaults.

    Returns:
        Configuration dictionary with defaults filled in.
    """
    if config_path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")

    config = validate_config(_merge(DEFAULT_CONFIG, loaded))
    logger.debug(f"Loaded configuration from {config_path}")
    return config
