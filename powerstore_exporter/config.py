# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Configuration management for the PowerStore exporter.

The YAML file is the primary source. Values it leaves unset for the
``exporter`` and ``log`` sections can come from environment variables,
e.g. ``POWERSTORE_EXPORTER__PORT=9010`` or ``POWERSTORE_LOG__LEVEL=debug``.
"""

import logging
import os
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from powerstore_exporter.errors import ConfigError

LOG = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yml"
DEFAULT_API_LIMIT = 5000
DEFAULT_REQ_LIMIT = 50
DEFAULT_WORKERS = 16
DEFAULT_PORT = 9010


class StorageConfig(BaseModel):
    """One monitored array (a target)."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    ip: str
    user: str
    password: str
    api_version: str = Field(alias="apiVersion")
    api_limit: int = Field(default=DEFAULT_API_LIMIT, alias="apiLimit", gt=0)
    tls_validation: Literal["none", "normal", "strict"] = Field(default="none", alias="tlsValidation")
    tls_ca: Optional[str] = Field(default=None, alias="tlsCa")

    @field_validator("ip", "user", "password", "api_version")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not str(value).strip():
            raise ValueError("must not be empty")
        return str(value).strip()


class ExporterConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    port: int = Field(default=DEFAULT_PORT, gt=0, lt=65536)
    req_limit: int = Field(default=DEFAULT_REQ_LIMIT, alias="reqLimit", gt=0)
    workers: int = Field(default=DEFAULT_WORKERS, gt=0)


class LogConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = "logfmt"
    path: Optional[str] = None
    level: str = "info"


class Settings(BaseSettings):
    """Root configuration object."""
    model_config = SettingsConfigDict(
        env_prefix="POWERSTORE_",
        env_nested_delimiter="__",
        populate_by_name=True,
        case_sensitive=False,
        extra="ignore",
    )

    exporter: ExporterConfig = Field(default_factory=ExporterConfig)
    storage_list: List[StorageConfig] = Field(default_factory=list, alias="storageList")
    log: LogConfig = Field(default_factory=LogConfig)

    @model_validator(mode="after")
    def _unique_targets(self):
        seen = set()
        for storage in self.storage_list:
            if storage.ip in seen:
                raise ValueError(f"duplicate storage ip {storage.ip}")
            seen.add(storage.ip)
        return self


def load_settings(config_file: str = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Load and validate the YAML configuration file.

    Args:
        config_file: Path to the YAML file

    Returns:
        Validated Settings

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    if not os.path.isfile(config_file):
        raise ConfigError(f"Configuration file not found: {config_file}")

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Error reading configuration file {config_file}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {config_file} must contain a mapping")

    try:
        settings = Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e

    if not settings.storage_list:
        LOG.warning(f"No storage arrays configured in {config_file}")
    LOG.debug(f"Loaded configuration from {config_file}: {len(settings.storage_list)} arrays")
    return settings
