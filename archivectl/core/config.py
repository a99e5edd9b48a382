"""Configuration management for archivectl.

Supports YAML profiles and environment variable overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from archivectl.core.exceptions import ConfigurationError, ProfileNotFoundError, ValidationError
from archivectl.core.validation import validate_part_size, validate_positive, validate_workers
from archivectl.uploaders.constants import (
    DEFAULT_CLIENT_LIFE,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PART_SIZE,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_UPLOAD_WORKERS,
)

# =============================================================================
# Constants
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "archivectl"
CONFIG_FILE = CONFIG_DIR / "config.yaml"
DEFAULT_PROFILE_NAME = "default"

# Environment variable names
ENV_PROFILE = "ARCHIVECTL_PROFILE"
ENV_AWS_PROFILE = "ARCHIVECTL_AWS_PROFILE"
ENV_PART_SIZE = "ARCHIVECTL_PART_SIZE"
ENV_WORKERS = "ARCHIVECTL_WORKERS"


# =============================================================================
# Profile
# =============================================================================


@dataclass
class Profile:
    """Upload settings for one environment."""

    aws_profile: Optional[str] = None
    part_size: int = DEFAULT_PART_SIZE
    upload_workers: int = DEFAULT_UPLOAD_WORKERS
    client_life: int = DEFAULT_CLIENT_LIFE
    max_retries: int = DEFAULT_MAX_RETRIES
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    read_timeout: int = DEFAULT_READ_TIMEOUT

    def __post_init__(self) -> None:
        """Validate settings."""
        try:
            validate_part_size(self.part_size)
            validate_workers(self.upload_workers)
            validate_positive(self.client_life, "client_life")
            validate_positive(self.max_retries, "max_retries")
            validate_positive(self.connect_timeout, "connect_timeout")
            validate_positive(self.read_timeout, "read_timeout")
        except ValidationError as e:
            raise ConfigurationError(e.message, field=e.field, value=e.value) from e

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "part_size": self.part_size,
            "upload_workers": self.upload_workers,
            "client_life": self.client_life,
            "max_retries": self.max_retries,
            "connect_timeout": self.connect_timeout,
            "read_timeout": self.read_timeout,
        }
        if self.aws_profile:
            data = {"aws_profile": self.aws_profile, **data}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create from dictionary."""
        return cls(
            aws_profile=data.get("aws_profile"),
            part_size=data.get("part_size", DEFAULT_PART_SIZE),
            upload_workers=data.get("upload_workers", DEFAULT_UPLOAD_WORKERS),
            client_life=data.get("client_life", DEFAULT_CLIENT_LIFE),
            max_retries=data.get("max_retries", DEFAULT_MAX_RETRIES),
            connect_timeout=data.get("connect_timeout", DEFAULT_CONNECT_TIMEOUT),
            read_timeout=data.get("read_timeout", DEFAULT_READ_TIMEOUT),
        )

    def client_options(self) -> dict[str, int]:
        """Settings passed through to GlacierClient."""
        return {
            "max_retries": self.max_retries,
            "connect_timeout": self.connect_timeout,
            "read_timeout": self.read_timeout,
        }


# =============================================================================
# Config
# =============================================================================


@dataclass
class Config:
    """Application configuration."""

    default_profile: str = DEFAULT_PROFILE_NAME
    output_format: str = "table"
    profiles: dict[str, Profile] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load config from file.

        Priority (highest to lowest):
        1. Environment variables
        2. Config file
        3. Defaults

        Args:
            config_path: Optional path to config file.

        Returns:
            Loaded configuration.
        """
        path = config_path or CONFIG_FILE
        config = cls()

        if path.exists():
            try:
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

                config.default_profile = data.get("default_profile", DEFAULT_PROFILE_NAME)
                config.output_format = data.get("output_format", "table")

                for name, pdata in (data.get("profiles") or {}).items():
                    config.profiles[name] = Profile.from_dict(pdata or {})
            except ConfigurationError:
                raise
            except (OSError, yaml.YAMLError, AttributeError, TypeError) as e:
                raise ConfigurationError(f"Failed to load config: {e}") from e

        if profile := os.getenv(ENV_PROFILE):
            config.default_profile = profile

        return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save config to file.

        Args:
            config_path: Optional path to config file.
        """
        path = config_path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "default_profile": self.default_profile,
            "output_format": self.output_format,
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get_profile(self, name: Optional[str] = None) -> Profile:
        """Get profile by name or default.

        The default profile falls back to built-in settings when it is not
        defined in the file. Environment overrides are applied last.

        Args:
            name: Profile name. If None, uses default_profile.

        Returns:
            Profile configuration.

        Raises:
            ProfileNotFoundError: If a named profile doesn't exist.
        """
        name = name or self.default_profile
        if name in self.profiles:
            profile = self.profiles[name]
        elif name == DEFAULT_PROFILE_NAME:
            profile = Profile()
        else:
            raise ProfileNotFoundError(name)
        return apply_env_overrides(profile)

    def has_profile(self, name: str) -> bool:
        """Check if profile exists."""
        return name in self.profiles

    def add_profile(self, name: str, profile: Profile) -> Profile:
        """Add or update a profile."""
        self.profiles[name] = profile
        return profile

    def set_default_profile(self, name: str) -> None:
        """Set the default profile.

        Raises:
            ProfileNotFoundError: If profile doesn't exist.
        """
        if name not in self.profiles:
            raise ProfileNotFoundError(name)
        self.default_profile = name


def _int_env(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer", field=name, value=value) from e


def apply_env_overrides(profile: Profile) -> Profile:
    """Return a copy of the profile with environment overrides applied."""
    overrides: dict[str, Any] = {}
    if aws_profile := os.getenv(ENV_AWS_PROFILE):
        overrides["aws_profile"] = aws_profile
    if (part_size := _int_env(ENV_PART_SIZE)) is not None:
        overrides["part_size"] = part_size
    if (workers := _int_env(ENV_WORKERS)) is not None:
        overrides["upload_workers"] = workers
    if not overrides:
        return profile
    return replace(profile, **overrides)
