"""Configuration management for ecourtlookup.

This module provides access to runtime configuration through environment
variables. It acts as the central configuration hub for the API session layer
and the command-line interface.

Nothing here is secret: the backend issues bearer credentials on demand, so the
only settings are where the backend lives, where the issued credential is
cached between runs, and how long to wait on the network.

Environment Variable Setup:
    Create a .env file in the project root with any of these variables:
    ```
    ECOURTS_API_BASE_URL=http://localhost:8000
    ECOURTS_TOKEN_CACHE=~/.cache/ecourtlookup/credentials.json
    ECOURTS_REQUEST_TIMEOUT=30
    ECOURTS_ISSUANCE_TIMEOUT=15
    ECOURTS_BULK_DELAY=0.5
    ```

Python Learning Notes:
    - os.getenv() safely reads environment variables without raising errors
    - dataclass field(default_factory=...) reads the environment at construction
      time rather than at import time, so tests can monkeypatch variables
    - ValueError is raised for invalid configuration to fail fast
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TOKEN_CACHE = "~/.cache/ecourtlookup/credentials.json"


def get_api_base_url() -> str:
    """Get the eCourts backend base URL from environment variables.

    Returns:
        str: The value of ECOURTS_API_BASE_URL without a trailing slash,
            or http://localhost:8000 when the variable is unset or empty.

    Example Usage:
        ```python
        from ecourtlookup.utils.config import get_api_base_url

        url = f"{get_api_base_url()}/court/states"
        ```
    """
    base_url = os.getenv("ECOURTS_API_BASE_URL", "").strip()
    if not base_url:
        return DEFAULT_BASE_URL
    return base_url.rstrip("/")


def get_token_cache_path() -> Optional[Path]:
    """Get the durable credential cache location from environment variables.

    The cache file holds the last issued bearer credential so that a new
    process (a fresh CLI invocation) can reuse it without another issuance call.

    Setting ECOURTS_TOKEN_CACHE to an empty string, "none" or "off" disables the
    durable cache entirely; credentials are then kept in memory only.

    Returns:
        Optional[Path]: Expanded path to the JSON cache file, or None when the
            durable cache is disabled.
    """
    raw = os.getenv("ECOURTS_TOKEN_CACHE")
    if raw is None:
        raw = DEFAULT_TOKEN_CACHE
    raw = raw.strip()
    if raw.lower() in ("", "none", "off"):
        return None
    return Path(raw).expanduser()


def _float_env(name: str, default: str) -> float:
    value = os.getenv(name, default)
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


@dataclass
class ClientConfig:
    """
    Configuration settings for CourtLookupClient.

    Every field has a default read from the environment, so ClientConfig() is
    usually all a caller needs. Individual fields can be overridden through
    constructor arguments, which is how the CLI applies --base-url and
    --token-cache.

    Attributes:
        base_url: Root URL of the eCourts backend.
        token_cache_path: JSON file holding the durable credential, or None
            for an in-memory credential only.
        request_timeout: Seconds to wait on ordinary backend calls.
        issuance_timeout: Seconds to wait on the credential issuance call
            before every waiter receives an IssuanceError.
        bulk_request_delay: Pause in seconds between courts during a bulk
            cause-list fetch.
        user_agent: User-Agent header sent with every request.

    Example:
        >>> config = ClientConfig(base_url="https://ecourts.example.org")
        >>> config.validate()
    """

    base_url: str = field(default_factory=get_api_base_url)
    token_cache_path: Optional[Path] = field(default_factory=get_token_cache_path)
    request_timeout: float = field(
        default_factory=lambda: _float_env("ECOURTS_REQUEST_TIMEOUT", "30")
    )
    issuance_timeout: float = field(
        default_factory=lambda: _float_env("ECOURTS_ISSUANCE_TIMEOUT", "15")
    )
    bulk_request_delay: float = field(
        default_factory=lambda: _float_env("ECOURTS_BULK_DELAY", "0.5")
    )
    user_agent: str = "ecourtlookup/0.1.0"

    def validate(self) -> None:
        """
        Check the configuration for values the client cannot work with.

        Raises:
            ValueError: If the base URL is not an http(s) URL, a timeout is
                not positive, or the bulk delay is negative.
        """
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(
                f"Base URL must start with http:// or https://, got {self.base_url!r}"
            )
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.issuance_timeout <= 0:
            raise ValueError("issuance_timeout must be positive")
        if self.bulk_request_delay < 0:
            raise ValueError("bulk_request_delay cannot be negative")
