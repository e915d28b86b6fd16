#!/usr/bin/env python3
"""
Configuration management for the ranking web service.

The service shares the YAML + environment loader with the CLI; this module
only caches it for the lifetime of the process.
"""

from pathlib import Path
from functools import lru_cache

from core.config_loader import AppConfig, load_config


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.

    Loads from the project-root config.yaml and applies environment variable
    overrides. Result is cached for performance.

    Returns:
        AppConfig: The application configuration.
    """
    return load_config(str(get_project_root() / 'config.yaml'))


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent
