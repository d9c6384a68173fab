"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
Each settings class maps its own environment variable prefix.
"""

from invoice_extractor.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
