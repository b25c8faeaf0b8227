"""Configuration management for orgcal."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

ORGCAL_HOME = Path(os.environ.get("ORGCAL_HOME", Path.home() / "orgcal"))
CONFIG_FILE = ORGCAL_HOME / "config" / "orgcal.conf"


@dataclass
class Config:
    """orgcal configuration."""

    org_dir: str = ""
    ignore_before_days: int = 0
    ignore_after_days: int = 0
    output: str = ""
    todo_keywords: list[str] = field(default_factory=lambda: ["TODO", "DONE"])
    keep_going: bool = False


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}, using {default}")
        return default


def load_config() -> Config:
    """Load configuration from orgcal.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value.startswith('"') or value.startswith("'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "org_dir":
                config.org_dir = value
            case "ignore_before_days":
                config.ignore_before_days = _parse_int(key, value, config.ignore_before_days)
            case "ignore_after_days":
                config.ignore_after_days = _parse_int(key, value, config.ignore_after_days)
            case "output":
                config.output = value
            case "todo_keywords":
                config.todo_keywords = [k.strip() for k in value.split(",") if k.strip()]
            case "keep_going":
                config.keep_going = value.lower() in ("1", "true", "yes", "on")
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
