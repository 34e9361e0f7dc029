"""Configuration models using Pydantic for validation."""
import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .client import DEFAULT_BASE_URL, project_resource

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Environment variable -> config field
ENV_OVERRIDES = {
    "BRIDGE_PROJECT_ID": "project_id",
    "BRIDGE_LISTEN_ADDRESS": "listen_address",
    "BRIDGE_API_BASE_URL": "api_base_url",
    "BRIDGE_ACCESS_TOKEN": "access_token",
    "BRIDGE_TIMEOUT": "timeout",
    "BRIDGE_PAGE_SIZE": "page_size",
    "LOG_LEVEL": "log_level",
}


class BridgeConfig(BaseModel):
    """Process configuration for the read bridge."""
    project_id: str
    listen_address: str = ":9201"
    api_base_url: str = DEFAULT_BASE_URL
    access_token: Optional[str] = None
    timeout: int = Field(default=30, gt=0)
    page_size: Optional[int] = Field(default=None, gt=0)
    log_level: str = "INFO"

    @field_validator('project_id')
    @classmethod
    def validate_project_id(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("project_id must not be empty")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return v

    @property
    def project_resource(self) -> str:
        return project_resource(self.project_id)


def load_config(**overrides) -> BridgeConfig:
    """Build configuration from environment variables, with explicit overrides taking precedence."""
    raw_config = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        if env_value := os.getenv(env_name):
            raw_config[field_name] = env_value

    raw_config.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return BridgeConfig(**raw_config)
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed: {e}") from e


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging for the bridge process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
