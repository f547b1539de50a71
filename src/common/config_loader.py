"""
Configuration loader supporting YAML files and environment variables.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GCPConfig(BaseModel):
    """GCP-specific configuration."""

    project_id: str = Field(default="", description="GCP project ID")
    region: str = Field(default="europe-west1", description="GCP region")


class BigQueryConfig(BaseModel):
    """BigQuery record store configuration."""

    curated_dataset: str = Field(default="curated", description="Dataset holding delivery records")
    deliveries_table: str = Field(default="deliveries", description="Delivery records table")
    delivery_logs_table: str = Field(default="delivery_logs", description="Delivery status log table")
    zones_table: str = Field(default="zones", description="Zone table")
    query_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-query result timeout")


class AnalyticsConfig(BaseModel):
    """Analytics engine configuration."""

    timezone: str = Field(default="UTC", description="IANA timezone used for hour-of-day bucketing")
    max_concurrent_zones: int = Field(default=8, ge=1, description="Worker limit for per-zone fan-out")


class ApiConfig(BaseModel):
    """HTTP API configuration."""

    cors_origins: list[str] = Field(default_factory=list, description="Allowed CORS origins")


class MonitoringConfig(BaseModel):
    """Cloud Monitoring configuration."""

    enabled: bool = Field(default=False, description="Publish engine timings as custom metrics")


class Config(BaseSettings):
    """Main configuration class."""

    model_config = SettingsConfigDict(env_prefix="", env_nested_delimiter="__")

    environment: str = Field(default="dev", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    gcp: GCPConfig = Field(default_factory=GCPConfig)
    bigquery: BigQueryConfig = Field(default_factory=BigQueryConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)


class ConfigLoader:
    """Loads configuration from YAML files with environment overrides."""

    def __init__(self, config_dir: str | Path | None = None):
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"
        self.config_dir = Path(config_dir)
        self._config: Config | None = None

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        """Load a YAML file."""
        filepath = self.config_dir / filename
        if not filepath.exists():
            return {}
        with open(filepath) as f:
            return yaml.safe_load(f) or {}

    def _substitute_env_vars(self, config: dict) -> dict:
        """Substitute ${VAR} and ${VAR:-default} placeholders, including inside lists."""
        result = {}
        for key, value in config.items():
            if isinstance(value, dict):
                result[key] = self._substitute_env_vars(value)
            elif isinstance(value, list):
                result[key] = [self._substitute_value(item) for item in value]
            else:
                result[key] = self._substitute_value(value)
        return result

    def _substitute_value(self, value: Any) -> Any:
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            default = None
            if ":-" in env_var:
                env_var, default = env_var.split(":-", 1)
            return os.environ.get(env_var, default)
        return value

    def load(self, environment: str | None = None) -> Config:
        """Load configuration for the specified environment."""
        if environment is None:
            environment = os.environ.get("ENVIRONMENT", "dev")

        base_config = self._load_yaml("base.yaml")
        env_config = self._load_yaml(f"{environment}.yaml")

        merged = self._deep_merge(base_config, env_config)
        merged = self._substitute_env_vars(merged)
        merged["environment"] = environment

        self._config = Config(**merged)
        return self._config

    @property
    def config(self) -> Config:
        """Get the loaded configuration."""
        if self._config is None:
            return self.load()
        return self._config


# Global config loader instance
_config_loader: ConfigLoader | None = None


def get_config(environment: str | None = None, config_dir: str | Path | None = None) -> Config:
    """Get the global configuration instance."""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader(config_dir)
    return _config_loader.load(environment)
