"""Configuration management for vaultmatter."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


def get_env_list(key: str, default: list[str]) -> list[str]:
    """Get a comma separated environment variable as a list."""
    value = os.getenv(key)
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


# Vault root scanned by the CLI `check` command
VAULT_DIR = Path(
    get_env("VAULT_DIR", os.path.expanduser("~/notes")) or os.path.expanduser("~/notes")
).expanduser()

# Keys written first, in this order, when frontmatter is rendered
FRONTMATTER_KEY_ORDER = get_env_list("FRONTMATTER_KEY_ORDER", ["id", "aliases", "tags"])

# Treat notes without frontmatter as failures in `vaultmatter check`
CHECK_STRICT = get_env_bool("CHECK_STRICT")

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure and return logger."""
    level_name = (level or LOG_LEVEL or "INFO").upper()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return logging.getLogger("vaultmatter")
