"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores preferences that must be known before opening the record store
(db_folder, backend choice, log level). Config lives in
~/.fintrack/config.json to avoid a bootstrapping problem.
"""
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".fintrack"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULTS = {
    "db_folder": None,
    "backend": "sqlite",
    "seed_file": None,
    "alert_poll_interval_ms": 30_000,
    "log_level": "INFO",
}


def load_config(path: Path | None = None) -> dict:
    """Returns DEFAULTS merged with the file; never raises."""
    config = dict(DEFAULTS)
    try:
        with open(path or CONFIG_FILE, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return config
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable config file %s", path or CONFIG_FILE)
        return config
    if isinstance(stored, dict):
        config.update(stored)
    return config


def save_config(config: dict, path: Path | None = None) -> None:
    """Creates the config dir if needed; atomic write via .tmp + os.replace()."""
    target = Path(path or CONFIG_FILE)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, target)
    except OSError:
        logger.exception("Could not save config to %s", target)
        tmp.unlink(missing_ok=True)


def get_db_folder() -> str | None:
    """Return config["db_folder"] or None if not set."""
    return load_config().get("db_folder")


def set_db_folder(path: str | None) -> None:
    """Update db_folder in config and save."""
    config = load_config()
    config["db_folder"] = path
    save_config(config)
