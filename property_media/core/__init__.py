"""Core: config, exception handlers, and application bootstrap.

Single place for settings and app wiring.
"""

from property_media.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
