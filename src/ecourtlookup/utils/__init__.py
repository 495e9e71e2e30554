"""Utility modules for ecourtlookup.

This package contains shared utilities that support the API session layer
and the command-line interface:

- config.py: Environment variable management for the backend URL, credential
  cache location and timeouts
- __init__.py: Centralized logging setup and the get_logger() helper

Integration Points:
    - The config module is read by CourtLookupClient and the CLI at startup
    - The logger utility ensures consistent log formatting across all modules

Python Learning Notes:
    - This __init__.py file serves as a package initializer and public API
    - The __all__ list at the bottom controls what gets imported with "from utils import *"
    - The logging configuration follows Python's standard logging module patterns
"""

import logging
import logging.config
from pathlib import Path
from typing import Optional

import yaml

from .config import ClientConfig, get_api_base_url, get_token_cache_path

# Global flag to track if logging has been configured
_logging_configured = False


def setup_logging(config_path: Optional[Path] = None) -> None:
    """Set up logging configuration from YAML file.

    This function configures the entire logging system using a YAML configuration
    file. It should be called once at application startup, typically by the CLI
    group callback. Loggers created earlier at module import are picked up
    because the configuration keeps existing loggers enabled.

    The logging configuration includes:
    - Rotating file handlers for info, debug and error logs under logs/
    - A console handler on stderr so CLI output on stdout stays clean
    - Module-specific logging levels (the auth and apis packages log at DEBUG)

    When no explicit path is given and the project's logging_config.yaml is not
    shipped alongside the package (a non-editable install), logging falls back
    to a basic stderr configuration instead of failing at import time.

    Args:
        config_path (Optional[Path]): Path to the logging configuration YAML file.
            If None, defaults to 'logging_config.yaml' in the project root.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
        yaml.YAMLError: If the YAML configuration file is malformed.

    Example Usage:
        ```python
        from ecourtlookup.utils import setup_logging

        setup_logging()  # Uses default config
        ```
    """
    global _logging_configured

    if _logging_configured:
        return

    explicit = config_path is not None
    if config_path is None:
        # Default to logging_config.yaml in project root
        project_root = Path(__file__).parent.parent.parent.parent
        config_path = project_root / "logging_config.yaml"

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Logging config file not found: {config_path}")
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        _logging_configured = True
        return

    # Ensure logs directory exists
    logs_dir = Path("logs")
    if not logs_dir.exists():
        logs_dir.mkdir(parents=True, exist_ok=True)

    # Load and apply YAML configuration
    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    logging.config.dictConfig(config)
    _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance using the centralized logging configuration.

    Returning a logger has no side effects. Handlers and log files are only
    set up by setup_logging(), which the CLI calls at startup; a program using
    the package as a library keeps its own logging configuration.

    Args:
        name (Optional[str]): Logger name to use. If None, defaults to the utils
            module's __name__. For module-specific logging, pass __name__ explicitly.

    Returns:
        logging.Logger: The named logger.

    Example Usage:
        ```python
        from ecourtlookup.utils import get_logger

        logger = get_logger(__name__)
        logger.debug("Attaching credential to request")
        ```
    """
    return logging.getLogger(name or __name__)


__all__ = [
    "ClientConfig",
    "get_api_base_url",
    "get_token_cache_path",
    "setup_logging",
    "get_logger",
]
