"""Persisted CLI defaults (digit count and TOTP period)."""

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

from platformdirs import user_data_dir

from otp_calc.truncate import MAX_DIGITS, MIN_DIGITS


APP_NAME = "otp-calc"
APP_AUTHOR = "otp-calc"
CONFIG_FILE = "config.json"
CONFIG_DIR_ENV = "OTP_CALC_CONFIG_DIR"


@dataclass(frozen=True)
class Settings:
    """Defaults applied when the command line does not say otherwise."""

    digits: int = 6
    period: int = 30


def get_config_dir() -> Path:
    """
    Get the directory holding the configuration file.

    ``OTP_CALC_CONFIG_DIR`` takes precedence over the per-user data directory.

    Returns:
        Path to the configuration directory.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path(user_data_dir(APP_NAME, APP_AUTHOR))


def get_config_path() -> Path:
    """Get the path of the configuration file."""
    return get_config_dir() / CONFIG_FILE


def _check(settings: Settings) -> Settings:
    if not MIN_DIGITS <= settings.digits <= MAX_DIGITS:
        raise ValueError(
            f"Invalid configuration: digits must be {MIN_DIGITS} to {MAX_DIGITS}, "
            f"got {settings.digits}"
        )
    if settings.period <= 0:
        raise ValueError(
            f"Invalid configuration: period must be positive, got {settings.period}"
        )
    return settings


def load_settings() -> Settings:
    """
    Load CLI defaults from disk.

    Returns:
        The stored settings, or the built-in defaults if no file exists.

    Raises:
        ValueError: If the file is not valid JSON or holds unusable values.
    """
    config_path = get_config_path()
    if not config_path.exists():
        return Settings()

    try:
        data: Dict[str, Any] = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid configuration file format: {e}") from e

    defaults = Settings()
    try:
        settings = Settings(
            digits=int(data.get("digits", defaults.digits)),
            period=int(data.get("period", defaults.period)),
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise ValueError(f"Invalid configuration value: {e}") from e

    return _check(settings)


def save_settings(settings: Settings) -> Path:
    """
    Save CLI defaults to disk.

    Args:
        settings: The settings to store.

    Returns:
        Path of the written file.

    Raises:
        ValueError: If the settings hold unusable values.
    """
    _check(settings)

    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Write atomically using a temporary file
    temp_path = config_path.with_suffix(".tmp")
    temp_path.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
    temp_path.replace(config_path)
    return config_path
