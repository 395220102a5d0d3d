"""Configuration management for ECS pre-destroy.

Provides validated run configuration built from command-line flags,
an optional YAML file, or ``PREDESTROY_*`` environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigurationError

DEFAULT_CDK_APP_FILE = "app.ts"
ALLOWED_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class PreDestroyConfig(BaseModel):
    """Settings for a single pre-destroy run."""

    # Target
    stack: str = Field(..., description="CloudFormation stack name")
    profile: str | None = Field(None, description="AWS shared config profile")
    region: str | None = Field(None, description="AWS region override")

    # CDK app
    cdk_app_root: str = Field(".", description="Directory the CDK CLI runs in")
    cdk_app_file: str | None = Field(None, description="Entry file relative to cdk_app_root")
    cdk_app_path: str | None = Field(None, description="Full path of the entry file")
    cdk_executable: str = Field("cdk", description="CDK CLI program name")

    # Behaviour
    dry_run: bool = Field(False, description="Log mutating calls instead of issuing them")
    log_level: str = Field("INFO", description="Logging level")

    # services_stable waiter, 15s x 40 = 10 minutes per service
    service_wait_delay_seconds: int = Field(15, ge=1, description="Seconds between stability polls")
    service_wait_max_attempts: int = Field(40, ge=1, description="Stability polls before giving up")

    @field_validator("stack")
    @classmethod
    def validate_stack(cls, v: str) -> str:
        """Reject blank stack names."""
        v = v.strip()
        if not v:
            raise ValueError("stack name must not be empty")
        return v

    @field_validator("profile", "region", "cdk_app_file", "cdk_app_path")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank optional strings as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level values."""
        if v.upper() not in ALLOWED_LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {ALLOWED_LOG_LEVELS}")
        return v.upper()

    @model_validator(mode="after")
    def check_entry_options(self) -> "PreDestroyConfig":
        if self.cdk_app_file and self.cdk_app_path:
            raise ValueError("cdk_app_file and cdk_app_path are mutually exclusive")
        return self

    @property
    def entry_path(self) -> str:
        """Path of the CDK app entry file as handed to ts-node."""
        if self.cdk_app_path:
            return self.cdk_app_path
        # cdk runs inside cdk_app_root, so the file stays relative to it
        return os.path.normpath(self.cdk_app_file or DEFAULT_CDK_APP_FILE)

    @classmethod
    def from_env(cls) -> "PreDestroyConfig":
        """Load configuration from environment variables."""
        config_data = {
            "stack": os.environ.get("PREDESTROY_STACK", ""),
            "profile": os.environ.get("PREDESTROY_PROFILE"),
            "region": os.environ.get("PREDESTROY_REGION"),
            "cdk_app_root": os.environ.get("PREDESTROY_CDK_APP_ROOT", "."),
            "cdk_app_path": os.environ.get("PREDESTROY_CDK_APP_PATH"),
            "dry_run": os.environ.get("PREDESTROY_DRY_RUN", "false").lower() in ("1", "true", "yes"),
        }
        return build_config(config_data)

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> "PreDestroyConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file
            **overrides: Values that win over the file; ``None`` values are ignored

        Returns:
            PreDestroyConfig instance loaded from the file

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}", config_key="config")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}", config_key="config") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping in {config_path}", config_key="config")

        # Accept dashed keys so the file can mirror the flag names
        data = {str(k).replace("-", "_"): v for k, v in data.items()}
        return build_config(data, **overrides)


def build_config(data: dict[str, Any] | None = None, **overrides: Any) -> PreDestroyConfig:
    """Validate ``data`` merged with non-``None`` ``overrides``.

    Raises:
        ConfigurationError: If the merged values do not validate
    """
    merged = dict(data or {})
    merged.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return PreDestroyConfig(**merged)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(p) for p in first.get("loc", ())) or None
        raise ConfigurationError(f"Invalid configuration: {first.get('msg')}", config_key=key) from e


def load_config(config_path: Path | None = None, **overrides: Any) -> PreDestroyConfig:
    """Load configuration for a run.

    Args:
        config_path: Optional YAML file supplying defaults
        **overrides: Values from the command line

    Returns:
        Loaded configuration object
    """
    if config_path is None:
        return build_config(**overrides)
    return PreDestroyConfig.from_yaml(config_path, **overrides)
