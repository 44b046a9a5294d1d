"""Configuration loading for the roster import engine (JSON or YAML)."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ConfigError


# Layout thresholds in PDF points, tuned against existing roster PDFs.
ROW_TOLERANCE = 15.0
DATE_WINDOW_X = 50.0
FIRST_COLUMN_WIDTH = 100.0
SHIFT_WINDOW_Y = 30.0
REMARKS_MIN_COLUMNS = 7

DEFAULT_STRATEGY_ORDER = ["list", "box"]
DEFAULT_EDITOR_NAME = "PDF Import"
DEFAULT_DB_URL = "sqlite:///roster.db"


@dataclass
class LayoutConfig:
    row_tolerance: float = ROW_TOLERANCE
    date_window_x: float = DATE_WINDOW_X
    first_column_width: float = FIRST_COLUMN_WIDTH
    shift_window_y: float = SHIFT_WINDOW_Y
    remarks_min_columns: int = REMARKS_MIN_COLUMNS


@dataclass
class ImportConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    strategy_order: List[str] = field(default_factory=lambda: list(DEFAULT_STRATEGY_ORDER))
    merge_multiline_remarks: bool = True
    target_year: Optional[int] = None
    target_month: Optional[int] = None
    generate_reserve_variants: bool = True
    editor_name: str = DEFAULT_EDITOR_NAME
    db_url: str = DEFAULT_DB_URL

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _check_keys(section: str, data: Dict[str, Any], allowed: set) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigError(f"Unknown {section} keys: {', '.join(unknown)}")


def config_from_dict(data: Dict[str, Any] | None) -> ImportConfig:
    """Build an ImportConfig from a plain mapping, validating keys and values."""
    data = dict(data or {})
    _check_keys("config", data, {f.name for f in fields(ImportConfig)})

    layout_data = data.pop("layout", None) or {}
    if not isinstance(layout_data, dict):
        raise ConfigError("'layout' must be a mapping")
    _check_keys("layout", layout_data, {f.name for f in fields(LayoutConfig)})

    try:
        layout = LayoutConfig(**{k: type(getattr(LayoutConfig, k))(v) for k, v in layout_data.items()})
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid layout value: {e}") from e

    cfg = ImportConfig(layout=layout, **data)

    if not cfg.strategy_order:
        raise ConfigError("strategy_order must name at least one strategy")
    for name in ("target_year", "target_month"):
        value = getattr(cfg, name)
        if value is None:
            continue
        try:
            setattr(cfg, name, int(value))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{name} must be an integer, got {value!r}") from e
    if cfg.target_month is not None and not 1 <= cfg.target_month <= 12:
        raise ConfigError(f"target_month out of range: {cfg.target_month}")
    if (cfg.target_month is None) != (cfg.target_year is None):
        raise ConfigError("target_year and target_month must be set together")
    return cfg


def load_config(path: str | Path | None = None) -> ImportConfig:
    """
    Load import configuration from a YAML or JSON file.

    Args:
        path: Path to a .yaml/.yml/.json file. None returns defaults.

    Returns:
        ImportConfig

    Raises:
        ConfigError: If the file cannot be parsed or holds unknown keys
    """
    if path is None:
        return ImportConfig()

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse config {path}: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    return config_from_dict(data)
