"""Configuration management for envolvechat.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for the API key.
"""

from envolvechat.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
