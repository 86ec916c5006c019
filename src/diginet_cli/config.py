"""
CLI Configuration

Handles configuration loading and management.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from diginet_dns.xml_builder import API_ENDPOINT


# Default config locations
DEFAULT_CONFIG_PATHS = [
    Path.home() / ".diginet" / "config.yaml",
    Path.home() / ".diginet" / "config.yml",
    Path("/etc/diginet/config.yaml"),
    Path("diginet_config.yaml"),
]

USERNAME_ENV = "DIGINET_USERNAME"
PASSWORD_ENV = "DIGINET_PASSWORD_B64"


@dataclass
class APIConfig:
    """DNS API endpoint configuration."""
    endpoint: str = API_ENDPOINT
    timeout: int = 30
    verify: bool = True


@dataclass
class CredentialsConfig:
    """Credentials configuration."""
    username: Optional[str] = None
    password_b64: Optional[str] = field(default=None, repr=False)


@dataclass
class CLIConfig:
    """Complete CLI configuration."""
    api: APIConfig = field(default_factory=APIConfig)
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
    profile: str = "default"

    @classmethod
    def from_dict(cls, data: dict, profile: str = "default") -> "CLIConfig":
        """
        Create config from dictionary.

        Args:
            data: Configuration dictionary
            profile: Profile name to use

        Returns:
            CLIConfig instance
        """
        # Get profile-specific config or use root
        profiles = data.get("profiles") or {}
        if profile in profiles:
            profile_data = profiles[profile] or {}
        else:
            profile_data = data

        api_data = profile_data.get("api") or {}
        api = APIConfig(
            endpoint=api_data.get("endpoint", API_ENDPOINT),
            timeout=int(api_data.get("timeout", 30)),
            verify=bool(api_data.get("verify", True)),
        )

        creds_data = profile_data.get("credentials") or {}
        password = creds_data.get("password_b64")
        credentials = CredentialsConfig(
            username=creds_data.get("username"),
            password_b64=str(password) if password is not None else None,
        )

        return cls(api=api, credentials=credentials, profile=profile)

    @classmethod
    def from_file(cls, path: Path, profile: str = "default") -> "CLIConfig":
        """
        Load config from YAML file.

        Args:
            path: Path to config file
            profile: Profile name to use

        Returns:
            CLIConfig instance
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {}, profile)

    @classmethod
    def find_and_load(cls, profile: str = "default") -> Optional["CLIConfig"]:
        """
        Find and load config from default locations.

        Args:
            profile: Profile name to use

        Returns:
            CLIConfig instance or None if not found
        """
        for path in DEFAULT_CONFIG_PATHS:
            if path.exists():
                return cls.from_file(path, profile)
        return None


def resolve_credentials(
    username: Optional[str],
    password_b64: Optional[str],
    config: Optional[CLIConfig],
) -> tuple:
    """
    Pick credentials: command line first, then config file, then environment.

    Returns:
        (username, password_b64), either may be None
    """
    if config:
        username = username or config.credentials.username
        password_b64 = password_b64 or config.credentials.password_b64

    username = username or os.environ.get(USERNAME_ENV)
    password_b64 = password_b64 or os.environ.get(PASSWORD_ENV)

    return username, password_b64


def create_sample_config() -> str:
    """
    Generate sample configuration YAML.

    Returns:
        Sample config as YAML string
    """
    return f"""# DIGINET DNS API Client Configuration
# Copy to ~/.diginet/config.yaml

# Default profile
api:
  endpoint: {API_ENDPOINT}
  timeout: 30
  verify: true

credentials:
  username: your_username
  # password_b64: base64_encoded_password  # Or set {PASSWORD_ENV}

# Multiple profiles example
profiles:
  production:
    api:
      endpoint: {API_ENDPOINT}
    credentials:
      username: prod_user

  staging:
    api:
      endpoint: https://staging.example.com/API/Beta/DNSAPI.asmx
      verify: false
    credentials:
      username: staging_user
"""
