"""
Configuration loading and validation for the pricedash application.

This module uses standard library dataclasses for configuration objects and
explicit, pure validation functions, keeping the configuration process
transparent and easy to debug.
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Dict, Any, Type, cast

__all__ = ["load_config", "default_config", "Config"]


# §1. Nested Configuration Dataclasses
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class RunConfig:
    name: str = "pricedash"
    seed: Optional[int] = None


@dataclass(frozen=True)
class SeriesConfig:
    length: int = 121
    window: int = 14


@dataclass(frozen=True)
class ForecastConfig:
    horizon_months: int = 6


@dataclass(frozen=True)
class DashboardConfig:
    default_symbol: str = "AAPL"
    watchlist: List[str] = field(default_factory=list)
    refresh_seconds: float = 5.0
    history_limit: int = 50


# §2. Top-Level Configuration
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class Config:
    """The root configuration object, composing all nested sections."""
    run: RunConfig = field(default_factory=RunConfig)
    series: SeriesConfig = field(default_factory=SeriesConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)


def default_config() -> Config:
    """A configuration with every section at its default."""
    return Config()


# §3. Validation and Loading
# --------------------------------------------------------------------------------------


def _from_dict(data_class: Type[Any], data: Any) -> Any:
    """Recursively creates nested dataclasses from a dictionary."""
    if isinstance(data, dict) and hasattr(data_class, "__dataclass_fields__"):
        field_types = {f.name: f.type for f in data_class.__dataclass_fields__.values()}

        kwargs = {}
        for k, v in data.items():
            field_type = field_types.get(k)
            # Unknown keys are passed through; the dataclass constructor raises
            # a TypeError for them, which load_config reports.
            kwargs[k] = _from_dict(field_type, v) if field_type else v
        return data_class(**kwargs)

    if isinstance(data, int) and not isinstance(data, bool) and data_class is float:
        return float(data)
    return data


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_positive(section: Dict[str, Any], key: str, label: str) -> None:
    if key in section and not (_is_number(section[key]) and section[key] > 0):
        raise ValueError(f"{label} must be positive.")


def _require_positive_int(section: Dict[str, Any], key: str, label: str) -> None:
    if key not in section:
        return
    value = section[key]
    if not (isinstance(value, int) and not isinstance(value, bool) and value > 0):
        raise ValueError(f"{label} must be a positive integer.")


def _validate_config(cfg: Any) -> None:
    """
    Performs simple, explicit validation checks on the raw config dictionary.
    Fail fast on any logical inconsistencies.
    """
    if not isinstance(cfg, dict):
        raise ValueError("Configuration must be a YAML object.")

    for name in ("run", "series", "forecast", "dashboard"):
        if name in cfg and not isinstance(cfg[name], dict):
            raise ValueError(f"Section '{name}' must be a mapping.")

    series = cfg.get("series", {})
    _require_positive_int(series, "length", "series.length")
    _require_positive_int(series, "window", "series.window")

    _require_positive_int(cfg.get("forecast", {}), "horizon_months", "forecast.horizon_months")

    dashboard = cfg.get("dashboard", {})
    _require_positive(dashboard, "refresh_seconds", "dashboard.refresh_seconds")
    _require_positive_int(dashboard, "history_limit", "dashboard.history_limit")
    if "default_symbol" in dashboard:
        symbol = dashboard["default_symbol"]
        if not isinstance(symbol, str) or not symbol.strip():
            raise ValueError("dashboard.default_symbol must be a non-empty string.")
    if "watchlist" in dashboard:
        watchlist = dashboard["watchlist"]
        if not isinstance(watchlist, list) or not all(
            isinstance(s, str) and s.strip() for s in watchlist
        ):
            raise ValueError("dashboard.watchlist must be a list of non-empty strings.")


# impure
def load_config(config_path: Path) -> Config:
    """
    Loads and validates a YAML configuration file into a Config object.
    Missing sections and keys fall back to their defaults.
    #impure: Reads from the filesystem.
    """
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in {config_path}: {e}") from e

    # An empty file means "all defaults"
    if raw_config is None:
        raw_config = {}

    _validate_config(raw_config)

    try:
        return cast(Config, _from_dict(Config, raw_config))
    except (TypeError, KeyError) as e:
        raise ValueError(f"Configuration validation failed: missing or invalid key. Details: {e}") from e
