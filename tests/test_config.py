"""Tests for configuration loading and validation."""
import copy
from pathlib import Path
from typing import Dict, Any

import pytest
import yaml

from pricedash.config import Config, DashboardConfig, load_config, _from_dict, default_config

# A complete and valid dictionary that can be used to construct a Config object.
FULL_CONFIG_DICT: Dict[str, Any] = {
    "run": {"name": "test_run", "seed": 42},
    "series": {"length": 60, "window": 10},
    "forecast": {"horizon_months": 3},
    "dashboard": {
        "default_symbol": "TEST", "watchlist": ["TEST", "DEMO"],
        "refresh_seconds": 2, "history_limit": 20,
    },
}


def _write(tmp_path: Path, data: Any, name: str = "config.yaml") -> Path:
    config_path = tmp_path / name
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f)
    return config_path


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Pytest fixture to create a temporary, valid config file."""
    return _write(tmp_path, copy.deepcopy(FULL_CONFIG_DICT))


def test_load_valid_config(temp_config_file: Path) -> None:
    """Test loading a valid configuration file returns a Config object."""
    config = load_config(temp_config_file)
    assert isinstance(config, Config)
    assert config.run.name == "test_run"
    assert config.run.seed == 42
    assert config.series.window == 10
    assert config.forecast.horizon_months == 3
    assert config.dashboard.watchlist == ["TEST", "DEMO"]
    # Integers are accepted for float fields
    assert config.dashboard.refresh_seconds == 2.0
    assert isinstance(config.dashboard.refresh_seconds, float)


def test_load_example_config_file() -> None:
    """Test that the main example config file is valid."""
    config = load_config(Path(__file__).parent.parent / "config" / "example.yaml")
    assert isinstance(config, Config)
    assert config.series.length == 121


def test_partial_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, {"series": {"window": 5}}))
    assert config.series.window == 5
    assert config.series.length == 121
    assert config.dashboard == DashboardConfig()


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")
    assert load_config(config_path) == default_config()


def test_missing_config_file() -> None:
    """Test error handling for missing config file."""
    with pytest.raises(FileNotFoundError):
        load_config(Path("nonexistent.yaml"))


def test_invalid_yaml_syntax(tmp_path: Path) -> None:
    """Test error handling for invalid YAML syntax."""
    config_path = tmp_path / "invalid.yaml"
    config_path.write_text("run: { name: test")
    with pytest.raises(ValueError, match="Invalid YAML syntax"):
        load_config(config_path)


def test_non_mapping_config(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="must be a YAML object"):
        load_config(_write(tmp_path, ["not", "a", "mapping"]))


@pytest.mark.parametrize(
    "section, key, value, message",
    [
        ("series", "length", 0, "series.length must be a positive integer"),
        ("series", "length", 2.5, "series.length must be a positive integer"),
        ("series", "window", -2, "series.window must be a positive integer"),
        ("series", "window", 2.5, "series.window must be a positive integer"),
        ("series", "window", True, "series.window must be a positive integer"),
        ("forecast", "horizon_months", 0, "forecast.horizon_months must be a positive integer"),
        ("forecast", "horizon_months", 6.0, "forecast.horizon_months must be a positive integer"),
        ("dashboard", "refresh_seconds", 0, "dashboard.refresh_seconds must be positive"),
        ("dashboard", "refresh_seconds", True, "dashboard.refresh_seconds must be positive"),
        ("dashboard", "history_limit", "ten", "dashboard.history_limit must be a positive integer"),
        ("dashboard", "default_symbol", " ", "dashboard.default_symbol must be a non-empty string"),
        ("dashboard", "watchlist", "AAPL", "dashboard.watchlist must be a list of non-empty strings"),
        ("dashboard", "watchlist", ["AAPL", 123], "dashboard.watchlist must be a list of non-empty strings"),
        ("dashboard", "watchlist", ["AAPL", ""], "dashboard.watchlist must be a list of non-empty strings"),
    ],
)
def test_validation_fails(tmp_path: Path, section: str, key: str, value: Any, message: str) -> None:
    invalid_config = copy.deepcopy(FULL_CONFIG_DICT)
    invalid_config[section][key] = value
    with pytest.raises(ValueError, match=message):
        load_config(_write(tmp_path, invalid_config))


def test_unknown_key_fails(tmp_path: Path) -> None:
    invalid_config = copy.deepcopy(FULL_CONFIG_DICT)
    invalid_config["series"]["colour"] = "blue"
    with pytest.raises(ValueError, match="missing or invalid key"):
        load_config(_write(tmp_path, invalid_config))


def test_from_dict_conversion() -> None:
    """Tests the internal _from_dict helper for creating nested dataclasses."""
    config = _from_dict(Config, copy.deepcopy(FULL_CONFIG_DICT))
    assert isinstance(config, Config)
    assert isinstance(config.dashboard, DashboardConfig)
    assert config.dashboard.default_symbol == "TEST"
