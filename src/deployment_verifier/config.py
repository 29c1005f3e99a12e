"""
Configuration Module

Runtime settings read from environment variables. Command line flags override
individual values after loading.
"""

import os
from typing import Mapping, Optional

from .errors import FatalConfigurationError

BACKENDS = ('hardhat', 'etherscan')

DEFAULT_API_URL = "https://api.etherscan.io/v2/api"


def _get_float(environ: Mapping[str, str], name: str, default: str) -> float:
    raw = environ.get(name, default)
    try:
        value = float(raw)
    except ValueError:
        raise FatalConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise FatalConfigurationError(f"{name} must not be negative, got {raw!r}")
    return value


def _get_int(environ: Mapping[str, str], name: str, default: str) -> int:
    raw = environ.get(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise FatalConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise FatalConfigurationError(f"{name} must be at least 1, got {raw!r}")
    return value


def _get_optional_float(environ: Mapping[str, str], name: str) -> Optional[float]:
    if not environ.get(name):
        return None
    return _get_float(environ, name, "0")


def _get_bool(environ: Mapping[str, str], name: str, default: str) -> bool:
    return environ.get(name, default).lower() in ("1", "true", "yes")


class Settings:
    """Deployment verifier settings."""

    def __init__(self,
                 network: Optional[str] = None,
                 hardhat_network: Optional[str] = None,
                 backend: str = 'hardhat',
                 table_path: Optional[str] = None,
                 project_root: str = '.',
                 etherscan_api_key: Optional[str] = None,
                 etherscan_api_url: str = DEFAULT_API_URL,
                 poll_interval: float = 5.0,
                 max_polls: int = 12,
                 request_timeout: float = 30.0,
                 hardhat_timeout: Optional[float] = None,
                 log_level: str = 'INFO',
                 log_json: bool = True):
        self.network = network
        self.hardhat_network = hardhat_network
        self.backend = backend
        self.table_path = table_path
        self.project_root = project_root
        self.etherscan_api_key = etherscan_api_key
        self.etherscan_api_url = etherscan_api_url
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self.request_timeout = request_timeout
        self.hardhat_timeout = hardhat_timeout
        self.log_level = log_level
        self.log_json = log_json

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Load settings from environment variables."""
        env = os.environ if environ is None else environ

        return cls(
            network=env.get("VERIFIER_NETWORK") or None,
            hardhat_network=env.get("VERIFIER_HARDHAT_NETWORK") or None,
            backend=env.get("VERIFIER_BACKEND", "hardhat"),
            table_path=env.get("VERIFIER_TABLE_PATH") or None,
            project_root=env.get("VERIFIER_PROJECT_ROOT", "."),
            etherscan_api_key=env.get("ETHERSCAN_API_KEY") or None,
            etherscan_api_url=env.get("ETHERSCAN_API_URL", DEFAULT_API_URL),
            poll_interval=_get_float(env, "VERIFIER_POLL_INTERVAL", "5"),
            max_polls=_get_int(env, "VERIFIER_MAX_POLLS", "12"),
            request_timeout=_get_float(env, "VERIFIER_REQUEST_TIMEOUT", "30"),
            hardhat_timeout=_get_optional_float(env, "VERIFIER_HARDHAT_TIMEOUT"),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_json=_get_bool(env, "LOG_JSON", "true"),
        )

    def override(self, **values) -> 'Settings':
        """Apply non-None overrides, typically from command line flags."""
        for key, value in values.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            if value is not None:
                setattr(self, key, value)
        return self

    def validate(self) -> None:
        if self.backend not in BACKENDS:
            raise FatalConfigurationError(
                f"Unknown backend '{self.backend}' (expected one of: {', '.join(BACKENDS)})"
            )
        if self.backend == 'etherscan' and not self.etherscan_api_key:
            raise FatalConfigurationError("ETHERSCAN_API_KEY is required for the etherscan backend")
