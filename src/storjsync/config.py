"""
Client configuration for storjsync
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlparse

from .error import ConfigurationException

DEFAULT_ENDPOINT = "https://gateway.storjshare.io"
DEFAULT_REGION = "us1"
DEFAULT_VERSION = "latest"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass
class Credentials:
    """Access key pair for the S3-compatible gateway."""
    key: str
    secret: str

    def __repr__(self) -> str:
        return f"Credentials(key={self.key!r}, secret='***')"


@dataclass
class StorageConfig:
    """
    Settings used to build a StorjClient.

    Defaults target the Storj S3-compatible gateway, which needs path-style
    addressing. The gateway exposes the regions eu1, us1 and ap1.
    """
    credentials: Credentials
    region: str = DEFAULT_REGION
    version: str = DEFAULT_VERSION
    endpoint: str = DEFAULT_ENDPOINT
    use_path_style_endpoint: bool = True
    timeout: float = 30
    extra: dict = field(default_factory=dict)

    def validate(self) -> "StorageConfig":
        """Raise ConfigurationException unless every required field is usable."""
        if self.credentials is None:
            raise ConfigurationException("Credentials are required.", field="credentials")
        if not self.credentials.key:
            raise ConfigurationException("Credentials key must not be empty.", field="credentials.key")
        if not self.credentials.secret:
            raise ConfigurationException("Credentials secret must not be empty.", field="credentials.secret")
        if not self.region:
            raise ConfigurationException("Region must not be empty.", field="region")
        if not self.version:
            raise ConfigurationException("Version must not be empty.", field="version")

        parsed = urlparse(self.endpoint or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationException(
                f"Endpoint '{self.endpoint}' must be an absolute http(s) URL.",
                field="endpoint",
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationException("Timeout must be positive.", field="timeout")
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StorageConfig":
        """
        Build a config from a plain mapping.

        Accepts the layout of a classic S3 SDK access file::

            {
                "region": "eu1",
                "version": "latest",
                "endpoint": "https://gateway.storjshare.io",
                "use_path_style_endpoint": true,
                "credentials": {"key": "...", "secret": "..."}
            }
        """
        if not isinstance(data, Mapping):
            raise ConfigurationException("Configuration must be a mapping.")

        creds = data.get("credentials")
        if not isinstance(creds, Mapping):
            raise ConfigurationException("Configuration is missing a 'credentials' mapping.", field="credentials")

        known = {
            "credentials",
            "region",
            "version",
            "endpoint",
            "use_path_style_endpoint",
            "timeout",
        }
        config = cls(
            credentials=Credentials(key=creds.get("key", ""), secret=creds.get("secret", "")),
            region=data.get("region", DEFAULT_REGION),
            version=data.get("version", DEFAULT_VERSION),
            endpoint=data.get("endpoint", DEFAULT_ENDPOINT),
            use_path_style_endpoint=_to_bool(data.get("use_path_style_endpoint", True), "use_path_style_endpoint"),
            timeout=data.get("timeout", 30),
            extra={k: v for k, v in data.items() if k not in known},
        )
        return config.validate()

    @classmethod
    def from_env(cls, prefix: str = "STORJ_", environ: Optional[Mapping[str, str]] = None) -> "StorageConfig":
        """Build a config from ``<prefix>ACCESS_KEY``, ``<prefix>SECRET_KEY`` and friends."""
        env = os.environ if environ is None else environ
        data = {
            "credentials": {
                "key": env.get(f"{prefix}ACCESS_KEY", ""),
                "secret": env.get(f"{prefix}SECRET_KEY", ""),
            },
            "region": env.get(f"{prefix}REGION", DEFAULT_REGION),
            "version": env.get(f"{prefix}VERSION", DEFAULT_VERSION),
            "endpoint": env.get(f"{prefix}ENDPOINT", DEFAULT_ENDPOINT),
            "use_path_style_endpoint": env.get(f"{prefix}USE_PATH_STYLE_ENDPOINT", "true"),
        }
        timeout = env.get(f"{prefix}TIMEOUT")
        if timeout:
            try:
                data["timeout"] = float(timeout)
            except ValueError:
                raise ConfigurationException(f"Invalid timeout '{timeout}'.", field="timeout")
        return cls.from_mapping(data)


def load_config(path: Union[str, Path]) -> StorageConfig:
    """Load and validate a JSON configuration file."""
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as ex:
        raise ConfigurationException(f"Cannot read configuration file '{config_path}': {ex}")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as ex:
        raise ConfigurationException(f"Configuration file '{config_path}' is not valid JSON: {ex}")

    return StorageConfig.from_mapping(data)


def _to_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationException(f"Invalid boolean value '{value}' for {name}.", field=name)
