# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for shim resolution and image processing
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the shim registry and the image library adapter.
These can be overridden via environment variables; per-call shim
parameters override them again.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on", "y")


@dataclass(frozen=True)
class RegistryDefaults:
    """
    Defaults for shim resolution.

    prefix is the conventional marker on canonical shim names
    ("crop" is registered as "eeshim_crop"). shim_package is the
    package searched for shim modules on first use. preload lists the
    shims loaded at application startup.
    """
    prefix: str = "eeshim_"
    shim_package: str = "shims"
    preload: tuple = ("crop", "jsonResponse")

    @classmethod
    def from_env(cls) -> "RegistryDefaults":
        """Create from environment variables."""
        return cls(
            prefix=os.getenv("SHIM_PREFIX", "eeshim_"),
            shim_package=os.getenv("SHIM_PACKAGE", "shims"),
            preload=tuple(
                name.strip()
                for name in os.getenv("PRELOAD_SHIMS", "crop,jsonResponse").split(",")
                if name.strip()
            ),
        )


@dataclass(frozen=True)
class ImageDefaults:
    """
    Defaults for the image library adapter.

    These become the crop shim's default parameters. root is the
    directory every source and destination image must resolve inside.
    """
    root: str = "."
    library: str = "GD2"
    quality: int = 80
    create_thumb: bool = False
    maintain_ratio: bool = True
    thumb_marker: str = "_thumb"

    # Library names accepted by the adapter (case-insensitive)
    supported_libraries: tuple = ("GD", "GD2", "Pillow")

    def as_shim_params(self) -> Dict[str, Any]:
        """Parameter mapping in the shape the crop shim reads."""
        return {
            "image_library": self.library,
            "quality": self.quality,
            "create_thumb": self.create_thumb,
            "maintain_ratio": self.maintain_ratio,
        }

    @classmethod
    def from_env(cls) -> "ImageDefaults":
        """Create from environment variables."""
        return cls(
            library=os.getenv("IMAGE_LIBRARY", "GD2"),
            quality=int(os.getenv("IMAGE_QUALITY", 80)),
            create_thumb=_env_bool("IMAGE_CREATE_THUMB", False),
            maintain_ratio=_env_bool("IMAGE_MAINTAIN_RATIO", True),
            thumb_marker=os.getenv("IMAGE_THUMB_MARKER", "_thumb"),
            root=os.getenv("IMAGE_ROOT", "."),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    registry: RegistryDefaults = field(default_factory=RegistryDefaults)
    image: ImageDefaults = field(default_factory=ImageDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            registry=RegistryDefaults.from_env(),
            image=ImageDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


__all__ = [
    "RegistryDefaults",
    "ImageDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
