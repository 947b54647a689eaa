"""Configuration management for the StatCounter client.

Loads credentials from environment variables or a YAML file.
The config object exposes a `.configured` property that returns True
only when both username and password are present.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_BASE_URL = "https://api.statcounter.com"
DEFAULT_VERSION = "3"


@dataclass(frozen=True)
class Credentials:
    """Account credentials. The password is only ever used as the signing secret."""

    username: str
    password: str = ""  # allow-secret

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass
class StatCounterConfig:
    """StatCounter API configuration."""

    username: str = ""
    password: str = field(default="", repr=False)  # allow-secret
    base_url: str = DEFAULT_BASE_URL
    version: str = DEFAULT_VERSION
    timeout: float = 30

    @property
    def configured(self) -> bool:
        return bool(self.username and self.password)

    @property
    def credentials(self) -> Credentials:
        return Credentials(username=self.username, password=self.password)  # allow-secret

    @classmethod
    def from_env(cls) -> "StatCounterConfig":
        return cls(
            username=os.environ.get("STATCOUNTER_USERNAME", ""),
            password=os.environ.get("STATCOUNTER_PASSWORD", ""),  # allow-secret
            base_url=os.environ.get("STATCOUNTER_BASE_URL", DEFAULT_BASE_URL),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "StatCounterConfig":
        path = Path(path)
        if not path.exists():
            return cls()
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(
            username=str(data.get("username", "")),
            password=str(data.get("password", "")),  # allow-secret
            base_url=data.get("base_url", DEFAULT_BASE_URL),
            version=str(data.get("version", DEFAULT_VERSION)),
            timeout=float(data.get("timeout", 30)),
        )
