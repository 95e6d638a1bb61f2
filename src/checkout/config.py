"""Typed settings for preparing a checkout workspace."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_CONFIG_NAME = "checkout.yaml"

__all__ = [
    "CheckoutConfig",
    "ConfigError",
    "DEFAULT_CONFIG_NAME",
    "GitSettings",
    "LoggingSettings",
    "RepositorySettings",
    "WorkspaceSettings",
    "load_config",
]


class ConfigError(ValueError):
    """Raised when the configuration file cannot be loaded or validated."""


class SettingsModel(BaseModel):
    """Base Pydantic model with strict field handling."""

    model_config = ConfigDict(extra="forbid")


class RepositorySettings(SettingsModel):
    url: Optional[str] = None
    valid_urls: List[str] = Field(default_factory=list)


class WorkspaceSettings(SettingsModel):
    path: Optional[Path] = None
    clean: bool = True


class GitSettings(SettingsModel):
    path: str = "git"


class LoggingSettings(SettingsModel):
    level: str = "INFO"


class CheckoutConfig(SettingsModel):
    """Top-level configuration document."""

    repository: RepositorySettings = Field(default_factory=RepositorySettings)
    workspace: WorkspaceSettings = Field(default_factory=WorkspaceSettings)
    git: GitSettings = Field(default_factory=GitSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, source: str = "<config>") -> "CheckoutConfig":
        try:
            return cls.model_validate(dict(data))
        except ValidationError as error:
            raise ConfigError(f"Invalid configuration in {source}: {error}") from error


def load_config(config_path: Path | str) -> CheckoutConfig:
    """Load YAML configuration from disk; a missing file yields defaults.

    Relative ``workspace.path`` values are resolved against the directory that
    holds the configuration file.
    """

    path = Path(config_path)
    if not path.exists():
        return CheckoutConfig()

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as error:
        raise ConfigError(f"Failed to parse {path}: {error}") from error

    if not isinstance(data, Mapping):
        raise ConfigError(f"Expected mapping at top level of {path}")

    config = CheckoutConfig.from_mapping(data, source=path.as_posix())
    workspace_path = config.workspace.path
    if workspace_path is not None and not workspace_path.is_absolute():
        config.workspace.path = (path.parent / workspace_path).resolve()
    return config
