"""
Configuration loader for the premium API (rate store, rate matrix, quoting).

Values come from config/premium_config.yml and may be overridden by
environment variables (a .env file is honoured):

  REDIS_URL          full redis:// URL
  REDIS_SVC          Redis host name, port from REDIS_PORT (default 6379)
  REDIS_PORT
  RATE_MATRIX_PATH   path of the rate matrix workbook
  RATE_MATRIX_SHEET  worksheet holding the matrix
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional
from urllib.parse import urlparse

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "premium_config.yml"


class StoreConfig(BaseModel):
    redis_url: Optional[str] = None
    redis_host: Optional[str] = None
    redis_port: int = Field(default=6379, ge=1, le=65535)
    socket_timeout: float = Field(default=5.0, gt=0)

    @property
    def url(self) -> Optional[str]:
        if self.redis_url:
            return self.redis_url
        if self.redis_host:
            return f"redis://{self.redis_host}:{self.redis_port}"
        return None

    @property
    def redacted_url(self) -> str:
        """URL with any password masked, for logging."""
        url = self.url or ""
        parsed = urlparse(url)
        if parsed.password:
            return url.replace(parsed.password, "***")
        return url


class MatrixConfig(BaseModel):
    path: str = "premium_tables.xlsx"
    sheet: str = "matrix"


class QuoteConfig(BaseModel):
    age_basis: Literal["day_of_month", "anniversary"] = "day_of_month"
    strict_date_of_birth: bool = False


class PremiumConfig(BaseModel):
    store: StoreConfig = Field(default_factory=StoreConfig)
    matrix: MatrixConfig = Field(default_factory=MatrixConfig)
    quote: QuoteConfig = Field(default_factory=QuoteConfig)


def _env(key: str) -> Optional[str]:
    v = os.getenv(key)
    return v if v is not None and v != "" else None


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    store = dict(data.get("store") or {})
    matrix = dict(data.get("matrix") or {})

    if _env("REDIS_URL"):
        store["redis_url"] = _env("REDIS_URL")
    if _env("REDIS_SVC"):
        store["redis_host"] = _env("REDIS_SVC")
    if _env("REDIS_PORT"):
        store["redis_port"] = _env("REDIS_PORT")
    if _env("RATE_MATRIX_PATH"):
        matrix["path"] = _env("RATE_MATRIX_PATH")
    if _env("RATE_MATRIX_SHEET"):
        matrix["sheet"] = _env("RATE_MATRIX_SHEET")

    return {**data, "store": store, "matrix": matrix}


def load_premium_config(config_path: Optional[Path] = None) -> PremiumConfig:
    """
    Load and validate the premium configuration.

    Args:
        config_path: Path to config file. Defaults to config/premium_config.yml;
            a missing default file means built-in defaults.

    Returns:
        Validated PremiumConfig object

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    load_dotenv()

    data: Dict[str, Any] = {}
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            logger.info("No config file at %s, using defaults", config_path)
            config_path = None
    elif not config_path.exists():
        raise FileNotFoundError(f"Premium config file not found: {config_path}")

    if config_path is not None:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    try:
        cfg = PremiumConfig(**_apply_env_overrides(data))
        logger.info("Successfully loaded premium config from %s", config_path or "defaults")
        return cfg
    except ValidationError as e:
        logger.error("Premium config validation failed: %s", e)
        raise
