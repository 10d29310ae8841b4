"""
Configuration management for the SuiSense backend.

Loads settings from environment variables and the optional project-root
.env file. Exposes a single source of truth for service configuration.
"""

from backend_suisense.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
