"""Configuration file management for etpayroll."""

import math
import os
import tomllib
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

import tomli_w

from etpayroll.domain.payroll import InvalidRateError, RateConfig

DEFAULT_CURRENCY = "ETB"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "etpayroll" / "config.toml"


def default_config() -> dict[str, Any]:
    """Build the default configuration dictionary."""
    return {
        "currency": DEFAULT_CURRENCY,
        "rates": asdict(RateConfig()),
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config(), f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_rate_config(config: dict[str, Any]) -> RateConfig:
    """Build a RateConfig from a config dictionary.

    Missing keys fall back to the defaults, unknown keys are ignored.

    Args:
        config: Configuration dictionary, as returned by load_config.

    Returns:
        RateConfig with the configured rates.

    Raises:
        ValueError: If a configured rate is not a number.
        InvalidRateError: If a configured rate is NaN or infinite.
    """
    rates = config.get("rates", {})
    values: dict[str, Any] = {}

    for field in fields(RateConfig):
        if field.name not in rates:
            continue
        value = rates[field.name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Rate '{field.name}' must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidRateError(f"Rate '{field.name}' must be a finite number, got {value}")
        values[field.name] = int(value) if field.type is int else float(value)

    return RateConfig(**values)


def get_rates(config_path: Path | None = None) -> RateConfig:
    """Get configured rates, or the defaults when no config file exists.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        RateConfig from the config file.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return RateConfig()
    return load_rate_config(config)


def set_rates(rates: RateConfig, config_path: Path | None = None) -> None:
    """Store rates in the config file, keeping other settings.

    Args:
        rates: Rates to store.
        config_path: Path to config file. If None, uses default location.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = default_config()

    config["rates"] = asdict(rates)
    save_config(config, config_path)


def get_currency(config_path: Path | None = None) -> str:
    """Get the configured currency code, defaulting to ETB."""
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return DEFAULT_CURRENCY
    return str(config.get("currency", DEFAULT_CURRENCY))
