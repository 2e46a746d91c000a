"""
Configuration loader for the short drama gateway
"""

import os
import yaml
from pathlib import Path
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "gateway_config.yml"


class UpstreamConfig(BaseModel):
    """Upstream short drama API configuration (immutable once built)"""

    model_config = ConfigDict(frozen=True)

    base_url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout_seconds: float = Field(default=5.0, gt=0.0, le=300.0)
    path_timeouts: Dict[str, float] = Field(default_factory=dict)

    def timeout_for(self, path: str) -> float:
        """Timeout ceiling for a sub-path; falls back to the shared ceiling"""
        return self.path_timeouts.get(path, self.timeout_seconds)


class ThemeDefaults(BaseModel):
    """Theme values used whenever admin storage has nothing usable"""

    model_config = ConfigDict(frozen=True)

    default_theme: str = "default"
    custom_css: str = ""
    allow_user_customization: bool = True
    available_themes: List[str] = Field(default_factory=lambda: ["default", "minimal", "warm", "fresh"])


class GatewayConfig(BaseModel):
    """Complete gateway configuration"""

    upstream: UpstreamConfig
    theme: ThemeDefaults = Field(default_factory=ThemeDefaults)
    admin_config_redis_url: Optional[str] = None


def _apply_env_overrides(config_data: dict) -> dict:
    upstream = dict(config_data.get("upstream") or {})

    base_url = os.getenv("SHORTDRAMA_API_BASE_URL")
    if base_url:
        upstream["base_url"] = base_url

    timeout = os.getenv("SHORTDRAMA_API_TIMEOUT")
    if timeout:
        upstream["timeout_seconds"] = float(timeout)

    config_data["upstream"] = upstream

    redis_url = os.getenv("ADMIN_CONFIG_REDIS_URL")
    if redis_url:
        config_data["admin_config_redis_url"] = redis_url

    return config_data


def load_gateway_config(config_path: Optional[Path] = None) -> GatewayConfig:
    """
    Load and validate gateway configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to config/gateway_config.yml

    Returns:
        Validated GatewayConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    config_data = _apply_env_overrides(config_data)

    try:
        config = GatewayConfig(**config_data)
        logger.info("Successfully loaded gateway config from %s", config_path)
        return config
    except ValidationError as e:
        logger.error("Gateway config validation failed: %s", e)
        raise
