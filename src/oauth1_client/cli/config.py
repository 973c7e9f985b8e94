"""CLI configuration with XDG-compliant paths and environment variable overrides."""

import json
import os
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from oauth1_client.config import ProviderConfig
from oauth1_client.exceptions import ConfigurationError


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _default_config_dir() -> Path:
    """Get XDG-compliant config directory for provider profiles.

    Uses XDG_CONFIG_HOME if set, otherwise ~/.config/oauth1-cli.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "oauth1-cli"
    return Path.home() / ".config" / "oauth1-cli"


def _default_data_dir() -> Path:
    """Get XDG-compliant data directory for tokens.

    Uses XDG_DATA_HOME if set, otherwise ~/.local/share/oauth1-cli.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / "oauth1-cli"
    return Path.home() / ".local" / "share" / "oauth1-cli"


@dataclass
class CLIConfig:
    """Configuration passed through Typer context.

    Attributes:
        profile: Name of the provider profile to use.
        verbose: Enable verbose output.
        config_dir: Directory for provider profiles (credentials, endpoints).
        data_dir: Directory for data files (tokens).

    Directory Structure:
        config_dir/
        ├── default.json        # Default provider profile
        └── <profile>.json      # Other providers

        data_dir/
        ├── default-token.json      # Access token for the default profile
        └── <profile>-token.json
    """

    profile: str = "default"
    verbose: bool = False
    config_dir: Path = field(default_factory=_default_config_dir)
    data_dir: Path = field(default_factory=_default_data_dir)

    @property
    def token_path(self) -> Path:
        """Token file path for the current profile (in XDG_DATA_HOME)."""
        return self.data_dir / f"{self.profile}-token.json"

    @property
    def provider_path(self) -> Path:
        """Provider profile path (in XDG_CONFIG_HOME)."""
        return self.config_dir / f"{self.profile}.json"

    def load_provider_data(self) -> dict[str, Any]:
        """Read the raw profile file, or an empty dict if there is none."""
        if not self.provider_path.exists():
            return {}
        try:
            with self.provider_path.open() as f:
                data: dict[str, Any] = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigurationError(f"Failed to read {self.provider_path}: {e}") from e
        return data

    def load_provider_config(self) -> ProviderConfig:
        """Load the provider profile with environment variable overrides.

        Loading priority:
        1. Load from the profile file (<config_dir>/<profile>.json)
        2. Override credentials with environment variables if set

        Environment variables:
        - OAUTH1_CONSUMER_KEY: Overrides consumer_key from file
        - OAUTH1_CONSUMER_SECRET: Overrides consumer_secret from file

        Raises:
            ConfigurationError: If the profile is missing or incomplete
        """
        data = self.load_provider_data()

        if env_key := os.environ.get("OAUTH1_CONSUMER_KEY"):
            data["consumer_key"] = env_key
        if env_secret := os.environ.get("OAUTH1_CONSUMER_SECRET"):
            data["consumer_secret"] = env_secret

        required = ("consumer_key", "request_token_url", "authorize_url", "access_token_url")
        missing = [name for name in required if not data.get(name)]
        if missing:
            msg = (
                f"Missing provider settings: {', '.join(missing)}. "
                f"Run 'oauth1-cli provider save' or edit {self.provider_path}"
            )
            raise ConfigurationError(msg, field=missing[0])

        return ProviderConfig.from_dict(data)

    def save_provider_data(self, data: dict[str, Any]) -> None:
        """Save the provider profile file.

        Args:
            data: Settings accepted by ProviderConfig.from_dict
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)

        with self.provider_path.open("w") as f:
            json.dump(data, f, indent=2)

        # Set restrictive permissions (owner read/write only)
        self.provider_path.chmod(0o600)
