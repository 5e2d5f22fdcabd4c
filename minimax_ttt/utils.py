"""Helpers shared by the command line tools and the GUI."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"
DEFAULT_DEPTH = 4


def parse_depth(text: Optional[str], default: int = DEFAULT_DEPTH) -> int:
    """Turn free-form depth input into a search depth of at least one ply."""

    try:
        value = int(str(text).strip())
    except ValueError:
        return max(default, 1)
    return max(value, 1)


def load_config(path: Union[str, Path, None] = None) -> Dict[str, Any]:
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    with config_path.open("r", encoding="utf-8") as fh:
        config = yaml.safe_load(fh)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"{config_path} must contain a mapping at the top level")
    return config


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_DEPTH",
    "configure_logging",
    "load_config",
    "parse_depth",
]
