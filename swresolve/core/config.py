"""Configuration management for swresolve."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from swresolve.core.exceptions import ConfigurationError


class FlagNames(BaseModel):
    """
    Logical role → command-line flag name.

    These names are the contract with the surrounding CLI: resolvers only
    read and overwrite flags by these names, they never declare them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_id: str = Field(default="service-id", description="Primary service id flag")
    service_name: str = Field(default="service-name", description="Primary service name flag")
    dest_service_id: str = Field(
        default="dest-service-id", description="Destination service id flag"
    )
    dest_service_name: str = Field(
        default="dest-service-name", description="Destination service name flag"
    )

    instance_id: str = Field(default="instance-id", description="Primary instance id flag")
    instance_name: str = Field(default="instance-name", description="Primary instance name flag")
    dest_instance_id: str = Field(
        default="dest-instance-id", description="Destination instance id flag"
    )
    dest_instance_name: str = Field(
        default="dest-instance-name", description="Destination instance name flag"
    )
    instance_id_list: str = Field(
        default="instance-id-list", description="Comma-separated instance ids flag"
    )
    instance_name_list: str = Field(
        default="instance-name-list", description="Comma-separated instance names flag"
    )

    @field_validator("*")
    @classmethod
    def validate_flag_name(cls, v: str) -> str:
        """Flag names are used bare, without leading dashes."""
        v = v.strip()
        if not v or v.startswith("-"):
            raise ValueError(f"invalid flag name: {v!r}")
        return v


_DEFAULT_FLAGS = FlagNames()

INSTANCE_ID_LIST_FLAG = _DEFAULT_FLAGS.instance_id_list


class ResolverConfig(BaseSettings):
    """
    Configuration for the identifier resolvers.

    Can be loaded from:
    - Environment variables (prefix: SWRESOLVE_, nested with "__")
    - YAML file
    - Direct initialization

    Example:
        >>> config = ResolverConfig(floats_enabled=True)
        >>> config = ResolverConfig.from_yaml("swresolve.yaml")
        >>> config.flags.instance_id
        'instance-id'
    """

    model_config = SettingsConfigDict(
        env_prefix="SWRESOLVE_",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    flags: FlagNames = Field(
        default_factory=FlagNames,
        description="Flag names read and written by the resolvers",
    )
    id_separator: str = Field(
        default="_",
        description="Separator between service id and encoded instance name",
    )
    list_separator: str = Field(
        default=",",
        description="Separator between entries of list flags",
    )
    floats_enabled: bool = Field(
        default=False,
        description="Collect float events (True=tests/debug, False=production)",
    )

    @field_validator("id_separator", "list_separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        """Separators must be a single character outside the base64 alphabet."""
        if len(v) != 1:
            raise ValueError(f"separator must be a single character, got {v!r}")
        if v.isalnum() or v in "+/=":
            raise ValueError(f"separator {v!r} collides with the base64 alphabet")
        return v

    @model_validator(mode="after")
    def validate_distinct_separators(self) -> ResolverConfig:
        if self.id_separator == self.list_separator:
            raise ValueError("id_separator and list_separator must differ")
        return self

    @classmethod
    def find_config_yaml(cls) -> Path | None:
        """
        Search for a config file in standard locations.

        Search order:
        1. ./swresolve.yaml
        2. ~/.swresolve/config.yaml

        Returns:
            Path to the config file if found, None otherwise
        """
        search_paths = [
            Path.cwd() / "swresolve.yaml",
            Path.home() / ".swresolve" / "config.yaml",
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> ResolverConfig:
        """
        Load configuration from YAML file.

        Environment variables take precedence over values in the file.

        Args:
            path: Path to YAML configuration file. If None, searches standard locations.

        Returns:
            ResolverConfig instance

        Raises:
            FileNotFoundError: If no file is found
            ConfigurationError: If the file is not a YAML mapping with string keys
        """
        if path is None:
            path = cls.find_config_yaml()
            if path is None:
                raise FileNotFoundError(
                    "Config file not found. Searched:\n"
                    "  1. ./swresolve.yaml\n"
                    "  2. ~/.swresolve/config.yaml"
                )
        else:
            path = Path(path)
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(yaml_data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {path}")

        env_keys = {k.upper() for k in os.environ}
        result_data = {}
        for key, value in yaml_data.items():
            if not isinstance(key, str):
                raise ConfigurationError(f"Config keys must be strings, got {key!r}: {path}")

            env_key = f"SWRESOLVE_{key.upper()}"
            if env_key in env_keys:
                continue
            if isinstance(value, dict):
                # SWRESOLVE_FLAGS__INSTANCE_ID overrides only flags.instance_id
                value = {
                    sub: v
                    for sub, v in value.items()
                    if f"{env_key}__{str(sub).upper()}" not in env_keys
                }
            result_data[key] = value

        return cls(**result_data)

    def to_yaml(self, path: Path | str) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save YAML configuration
        """
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    def __repr__(self) -> str:
        return (
            f"ResolverConfig(id_separator={self.id_separator!r}, "
            f"list_separator={self.list_separator!r}, floats_enabled={self.floats_enabled})"
        )


_config: ResolverConfig | None = None


def get_config() -> ResolverConfig:
    """Get the process-wide default configuration, built on first use."""
    global _config
    if _config is None:
        _config = ResolverConfig()
    return _config


def set_config(config: ResolverConfig | None) -> None:
    """Replace the process-wide default configuration (None resets it)."""
    global _config
    _config = config
