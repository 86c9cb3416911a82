"""
Configuration module for ReleaseHub.

Provides centralized configuration for the version naming contract and
the binary storage backend (S3 bucket or local directory).
"""

from releasehub.config.settings import BinarySettings, get_settings

__all__ = [
    "BinarySettings",
    "get_settings",
]
