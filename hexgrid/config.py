"""
Engine configuration loaded from YAML.

The packaged ``configs/default.yaml`` provides the defaults; a user file may
override any subset of its keys.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

import yaml

from .constants import MAX_GRID_DISK_K

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "configs" / "default.yaml"


@dataclass
class GridConfig:
    """Settings for disk traversal limits and command line logging."""

    max_grid_disk_k: int = MAX_GRID_DISK_K
    log_level: str = "INFO"
    log_format: str = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

    def __post_init__(self):
        if isinstance(self.max_grid_disk_k, bool) or not isinstance(self.max_grid_disk_k, int):
            raise ValueError(f"max_grid_disk_k must be an integer, got {self.max_grid_disk_k!r}")
        if self.max_grid_disk_k < 0:
            raise ValueError(f"max_grid_disk_k must be non-negative, got {self.max_grid_disk_k}")
        self.log_level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")


def load_config(path: Optional[Union[str, Path]] = None) -> GridConfig:
    """
    Load a GridConfig from a YAML file.

    Args:
        path: YAML file; the packaged default is used when omitted

    Returns:
        GridConfig with the file's values over the dataclass defaults

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file holds unknown keys or invalid values
    """
    path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must hold a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(GridConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {unknown}")

    logger.debug(f"Loaded config from {path}")
    return GridConfig(**raw)


_config: Optional[GridConfig] = None


def get_config() -> GridConfig:
    """Process-wide configuration, loaded from the packaged default on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: GridConfig) -> None:
    """Replace the process-wide configuration."""
    global _config
    if not isinstance(config, GridConfig):
        raise TypeError(f"Expected a GridConfig, got {type(config).__name__}")
    _config = config
