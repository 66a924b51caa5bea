# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for eeshim.
"""

from core.config.defaults import (
    RegistryDefaults,
    ImageDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "RegistryDefaults",
    "ImageDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
