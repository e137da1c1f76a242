import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .transport import DEFAULT_APPLICATION_NAME, DEFAULT_TIMEOUT

DEFAULT_CONFIG_PATH = "google_analytics_feeds.yaml"
CONFIG_SECTION = "google_analytics"

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Session settings, read from GA_FEEDS_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="GA_FEEDS_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Service account credentials
    service_account: Optional[str] = Field(default=None)
    key_file: Optional[str] = Field(default=None)

    # Client configuration
    application_name: str = Field(default=DEFAULT_APPLICATION_NAME)
    timeout: int = Field(default=DEFAULT_TIMEOUT, gt=0)
    api_version: str = Field(default="v3")


def resolve_config_path() -> str:
    return (
        os.getenv("GA_FEEDS_CONFIG_PATH")
        or os.getenv("CONFIG_PATH")
        or DEFAULT_CONFIG_PATH
    )


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from the environment, overlaid with a YAML config file.

    Values come from the ``google_analytics`` section of the file, when the
    file exists; a missing file is not an error.

    Args:
        path: Config file path (defaults to resolve_config_path())

    Returns:
        Settings
    """
    cfg_path = path or resolve_config_path()
    overrides: Dict[str, Any] = {}

    if os.path.exists(cfg_path):
        with open(cfg_path, "r") as f:
            cfg = yaml.safe_load(f) or {}
        overrides = cfg.get(CONFIG_SECTION) or {}
        logger.info(f"[GA Config] Loaded {CONFIG_SECTION} settings from {cfg_path}")
    else:
        logger.info(f"[GA Config] Config not found: {cfg_path}")

    return Settings(**overrides)
