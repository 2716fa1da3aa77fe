"""Configuration loading for TradeJournal.

Settings live in ``~/.config/tradejournal/config.toml``. The directory can
be moved with the ``TRADEJOURNAL_HOME`` environment variable.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_HOME_ENV = "TRADEJOURNAL_HOME"

DEFAULT_CONFIG = {
    "journal": {
        "db_path": "",  # Leave empty to use tradejournal.db in the config dir
        "currency_symbol": "$",
    },
}


def get_config_dir() -> Path:
    """Get the configuration directory."""
    override = os.environ.get(CONFIG_HOME_ENV)
    if override:
        return Path(override)
    return Path.home() / ".config" / "tradejournal"


def get_config_path() -> Path:
    """Get the configuration file path."""
    return get_config_dir() / "config.toml"


def load_config() -> dict:
    """Load configuration, falling back to defaults.

    Returns:
        Config dict with every default section present.

    Raises:
        ValueError: If the config file exists but is not valid TOML.
    """
    config_path = get_config_path()
    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}

    if not config_path.exists():
        return config

    try:
        loaded = toml.load(config_path)
    except toml.TomlDecodeError as e:
        raise ValueError(f"Invalid config file {config_path}: {e}") from e

    for section, values in loaded.items():
        if isinstance(values, dict):
            config.setdefault(section, {}).update(values)
        else:
            config[section] = values

    logger.debug("Loaded config from %s", config_path)
    return config


def get_db_path(config: Optional[dict] = None) -> Path:
    """Get the database path from config.

    Args:
        config: Loaded config. Loaded from disk if None.

    Returns:
        Path to the SQLite database file.
    """
    if config is None:
        config = load_config()

    db_path = config.get("journal", {}).get("db_path", "")
    if db_path:
        return Path(db_path).expanduser()
    return get_config_dir() / "tradejournal.db"


def create_template_config() -> Path:
    """Create a template configuration file.

    Returns:
        Path to the written config file.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    logger.info("Wrote config template to %s", config_path)
    return config_path
