"""
Settings loaded from YAML.

gridknot/data/settings.yaml holds the defaults: the world-space frame used
when a knot path is converted to 3D vertices, and the default log level for
the command line. load_settings() reads that file (or any other with the same
layout) into frozen dataclasses and rejects out-of-range values at load time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, cast

import yaml

_DATA_DIR = Path(__file__).parent / "data"
DEFAULT_SETTINGS_PATH = _DATA_DIR / "settings.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class PathSettings:
    """
    World-space frame for knot paths.

    Attributes:
        width: Extent of the grid along x.
        height: Extent of the grid along y.
        crossing_lift: z offset given to the over-strand at each crossing.
        refine_segment_length: Target segment length when subdividing paths.
    """

    width: float = 1.0
    height: float = 1.0
    crossing_lift: float = 0.1
    refine_segment_length: float = 0.05

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive, got {self.height}")
        if self.crossing_lift < 0:
            raise ValueError(f"crossing_lift cannot be negative, got {self.crossing_lift}")
        if self.refine_segment_length <= 0:
            raise ValueError(
                f"refine_segment_length must be positive, got {self.refine_segment_length}"
            )


@dataclass(frozen=True)
class Settings:
    path: PathSettings = field(default_factory=PathSettings)
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        level = self.log_level.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    @property
    def log_level_number(self) -> int:
        return cast(int, getattr(logging, self.log_level))


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Settings file not found: {path}") from None
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse settings file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    return cast(dict[str, Any], data)


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from *path*, or from the packaged defaults."""
    path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    data = _load_yaml(path)
    path_data = data.get("path", {}) or {}
    try:
        path_settings = PathSettings(
            width=float(path_data.get("width", 1.0)),
            height=float(path_data.get("height", 1.0)),
            crossing_lift=float(path_data.get("crossing_lift", 0.1)),
            refine_segment_length=float(path_data.get("refine_segment_length", 0.05)),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid path settings in {path}: {exc}") from exc
    logging_data = data.get("logging", {}) or {}
    return Settings(path=path_settings, log_level=str(logging_data.get("level", "INFO")))
