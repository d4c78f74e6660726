"""Configuration management for dnspair."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILE_NAMES = ("dnspair.yaml", "dnspair.yml")


class ReverseZoneConfig(BaseModel):
    """A reverse zone and the network it covers."""

    cidr: str
    zone_name: str


class DnspairConfig(BaseModel):
    """Main configuration for dnspair."""

    # Order matters: the first network containing an address wins
    reverse_zones: list[ReverseZoneConfig] = Field(default_factory=list)


class EnvironmentSettings(BaseSettings):
    """Environment variables for AWS access."""

    model_config = SettingsConfigDict(env_prefix="DNSPAIR_", env_file=".env")

    aws_profile: str | None = None
    aws_region: str = "us-east-1"


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find dnspair.yaml in current or parent directories."""
    search_path = start_path or Path.cwd()

    for path in [search_path, *search_path.parents]:
        for name in CONFIG_FILE_NAMES:
            config_file = path / name
            if config_file.exists():
                return config_file

    return None


def load_config(config_path: Path | None = None) -> DnspairConfig:
    """Load configuration from YAML file."""
    if config_path is None:
        config_path = find_config_file()

    if config_path is None or not config_path.exists():
        raise FileNotFoundError(
            "No dnspair.yaml found. Create one or pass --conf."
        )

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return DnspairConfig.model_validate(data or {})


def load_env_settings() -> EnvironmentSettings:
    """Load environment settings from .env and environment variables."""
    return EnvironmentSettings()
