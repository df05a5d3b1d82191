# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for the GitHub Actions event receiver.

Configuration precedence (highest to lowest):
1. Code arguments (explicit values passed to ReceiverConfig)
2. Environment variables (GHA_RECEIVER_*, OTEL_*)
3. YAML config file (ghactions_receiver.yaml or specified path)
4. Built-in defaults
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "0.0.0.0:19418"
DEFAULT_PATH = "/events"


@dataclass
class ReceiverConfig:
    """Configuration for the webhook receiver and its trace export.

    Example::

        >>> config = ReceiverConfig(
        ...     secret="s3cr3t",
        ...     service_name_prefix="ci-",
        ... )

        >>> # Or load from YAML
        >>> config = ReceiverConfig.from_yaml("config/ghactions_receiver.yaml")
    """

    # HTTP listener
    endpoint: Optional[str] = None
    path: Optional[str] = None

    # Webhook authentication ("" disables verification)
    secret: Optional[str] = None
    require_signature: Optional[bool] = None

    # service.name derivation
    custom_service_name: Optional[str] = None
    service_name_prefix: Optional[str] = None
    service_name_suffix: Optional[str] = None

    # OTLP exporter configuration
    otlp_endpoint: Optional[str] = None
    otlp_headers: Optional[Dict[str, str]] = None
    export_timeout_seconds: float = 10.0

    # Config file path (for tracking where config was loaded from)
    _config_file: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Apply environment variable defaults."""
        if self.endpoint is None:
            self.endpoint = os.getenv("GHA_RECEIVER_ENDPOINT", DEFAULT_ENDPOINT)

        if self.path is None:
            self.path = os.getenv("GHA_RECEIVER_PATH", DEFAULT_PATH)

        if self.secret is None:
            self.secret = os.getenv("GHA_RECEIVER_SECRET", "")

        if self.require_signature is None:
            env_require = os.getenv("GHA_RECEIVER_REQUIRE_SIGNATURE", "false")
            self.require_signature = env_require.lower() in ("true", "1", "yes")

        if self.custom_service_name is None:
            self.custom_service_name = os.getenv("GHA_RECEIVER_CUSTOM_SERVICE_NAME", "")

        if self.service_name_prefix is None:
            self.service_name_prefix = os.getenv("GHA_RECEIVER_SERVICE_NAME_PREFIX", "")

        if self.service_name_suffix is None:
            self.service_name_suffix = os.getenv("GHA_RECEIVER_SERVICE_NAME_SUFFIX", "")

        if self.otlp_endpoint is None:
            env_endpoint = os.getenv("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT")
            if env_endpoint:
                self.otlp_endpoint = env_endpoint
            else:
                base = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")
                self.otlp_endpoint = f"{base.rstrip('/')}/v1/traces"

    def validate(self) -> None:
        """Check the listener settings.

        Raises:
            ValueError: If the endpoint is empty or not ``host:port``, or the
                path is not absolute.
        """
        if not self.endpoint:
            raise ValueError("missing a receiver endpoint")
        _, sep, port = self.endpoint.rpartition(":")
        if not sep or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"receiver endpoint must be host:port: {self.endpoint!r}")
        if not self.path or not self.path.startswith("/"):
            raise ValueError(f"receiver path must start with '/': {self.path!r}")

    @property
    def host(self) -> str:
        host, _, _ = (self.endpoint or DEFAULT_ENDPOINT).rpartition(":")
        return host or "0.0.0.0"

    @property
    def port(self) -> int:
        _, _, port = (self.endpoint or DEFAULT_ENDPOINT).rpartition(":")
        return int(port)

    # ------------------------------------------------------------------
    # YAML loading
    # ------------------------------------------------------------------

    @classmethod
    def from_yaml(cls, path: Optional[str] = None) -> ReceiverConfig:
        """Load configuration from a YAML file.

        Supports environment variable interpolation using ``${VAR_NAME}`` syntax,
        which keeps the webhook secret out of the file.

        Args:
            path: Path to YAML config file.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValueError: If YAML is malformed.
        """
        if path is None:
            raise FileNotFoundError("No config file path provided")

        resolved = Path(path)
        if not resolved.exists():
            raise FileNotFoundError(f"Config file not found: {resolved}")

        with open(resolved) as fh:
            raw_content = fh.read()

        content = _interpolate_env_vars(raw_content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {resolved}: {exc}") from exc

        if data is None:
            data = {}

        return cls._from_dict(data, config_file=str(resolved))

    @classmethod
    def from_file_or_env(cls, path: Optional[str] = None) -> ReceiverConfig:
        """Load config from file if exists, otherwise use environment variables.

        Search order:
        1. Explicit *path* argument
        2. ``GHA_RECEIVER_CONFIG_FILE`` env var
        3. ``./ghactions_receiver.yaml``
        4. ``./config/ghactions_receiver.yaml``
        5. Falls back to env-only config
        """
        search_paths: List[Path] = []

        if path:
            search_paths.append(Path(path))

        env_path = os.getenv("GHA_RECEIVER_CONFIG_FILE")
        if env_path:
            search_paths.append(Path(env_path))

        search_paths.extend(
            [
                Path("ghactions_receiver.yaml"),
                Path("ghactions_receiver.yml"),
                Path("config/ghactions_receiver.yaml"),
                Path("config/ghactions_receiver.yml"),
            ]
        )

        for candidate in search_paths:
            if candidate.exists():
                logger.info("Loading config from: %s", candidate)
                return cls.from_yaml(str(candidate))

        logger.debug("No config file found, using environment variables only")
        return cls()

    @classmethod
    def _from_dict(
        cls,
        data: Dict[str, Any],
        config_file: Optional[str] = None,
    ) -> ReceiverConfig:
        """Create config from dictionary (parsed YAML)."""
        server = data.get("server", {})
        service_name = data.get("service_name", {})
        otlp = data.get("otlp", {})

        return cls(
            endpoint=server.get("endpoint"),
            path=server.get("path"),
            secret=server.get("secret"),
            require_signature=server.get("require_signature"),
            custom_service_name=service_name.get("custom"),
            service_name_prefix=service_name.get("prefix"),
            service_name_suffix=service_name.get("suffix"),
            otlp_endpoint=otlp.get("endpoint"),
            otlp_headers=otlp.get("headers"),
            export_timeout_seconds=otlp.get("timeout_seconds", 10.0),
            _config_file=config_file,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary.  The secret is masked."""
        return {
            "server": {
                "endpoint": self.endpoint,
                "path": self.path,
                "secret": "***" if self.secret else "",
                "require_signature": self.require_signature,
            },
            "service_name": {
                "custom": self.custom_service_name,
                "prefix": self.service_name_prefix,
                "suffix": self.service_name_suffix,
            },
            "otlp": {
                "endpoint": self.otlp_endpoint,
                "headers": self.otlp_headers,
                "timeout_seconds": self.export_timeout_seconds,
            },
        }


def _interpolate_env_vars(content: str) -> str:
    """Interpolate ``${VAR_NAME}`` and ``${VAR_NAME:-default}`` in *content*."""
    pattern = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

    def _replace(match: re.Match) -> str:  # type: ignore[type-arg]
        var_name = match.group(1)
        default = match.group(2)
        value = os.getenv(var_name)
        if value is not None:
            return value
        if default is not None:
            return default
        return match.group(0)

    return pattern.sub(_replace, content)
