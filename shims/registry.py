# ============================================================================
# SHIM REGISTRY
# ============================================================================
# STATUS: Core - Shim registration, loading and lookup
# PURPOSE: Resolve shim names to classes and build instances per call
# CREATED: 19 OCT 2026
# ============================================================================
"""
Shim Registry

Central registry for shim classes. Callers resolve a shim by name and
get a fresh instance built with their parameters and callbacks.

Design:
- Registry is a simple dict (canonical name -> shim class)
- Canonical names carry the configured prefix: "crop" -> "eeshim_crop";
  a prefix already present on the requested name is stripped first
- Shim classes register explicitly via @register_shim, or are loaded on
  first use from the conventional module <shim_package>.<snake_case name>
- resolve() never raises: an unknown shim resolves to None

Usage:
    from shims.registry import resolve

    shim = resolve("crop", {"in": "raw.jpg", "out": "cropped.jpg", "scale": 50})
    if shim is not None:
        shim.execute()
"""

import importlib
import inspect
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Set, Type

from core.config import get_defaults
from core.errors import DuplicateShimError, ShimNotFoundError
from shims.base import FailCallback, Shim, SuccessCallback

logger = logging.getLogger(__name__)

# Global registry
_shims: Dict[str, Type[Shim]] = {}
_shim_metadata: Dict[str, Dict[str, Any]] = {}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


# ============================================================================
# NAMES
# ============================================================================

def bare_name(name: str) -> str:
    """Strip the registry prefix from a shim name, if present."""
    prefix = get_defaults().registry.prefix
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def canonical_name(name: str) -> str:
    """Registry key for a shim name: "crop" and "eeshim_crop" -> "eeshim_crop"."""
    return f"{get_defaults().registry.prefix}{bare_name(name)}"


def module_name_for(name: str) -> str:
    """Conventional module for a shim: "jsonResponse" -> "shims.json_response"."""
    package = get_defaults().registry.shim_package
    return f"{package}.{_CAMEL_BOUNDARY.sub('_', bare_name(name)).lower()}"


# ============================================================================
# REGISTRATION
# ============================================================================

def register_shim(cls: Type[Shim]) -> Type[Shim]:
    """
    Class decorator to register a shim.

    Registering the same class twice is a no-op (module reloads);
    registering a different class under a taken name raises.

    Example:
        @register_shim
        class Crop(Shim):
            name = "crop"
    """
    if not (inspect.isclass(cls) and issubclass(cls, Shim)) or not cls.name:
        raise TypeError(f"{cls!r} is not a named Shim subclass")

    key = canonical_name(cls.name)
    existing = _shims.get(key)
    if existing is not None:
        if _same_class(existing, cls):
            return cls
        raise DuplicateShimError(key)

    _shims[key] = cls
    _shim_metadata[key] = {
        "name": key,
        "shim": bare_name(cls.name),
        "description": cls.description or (inspect.getdoc(cls) or "").split("\n")[0],
        "class": cls.__name__,
        "module": cls.__module__,
        "defaults": dict(cls.defaults),
        "registered_at": datetime.now(timezone.utc).isoformat(),
    }

    logger.debug(f"Registered shim: {key} ({cls.__module__}.{cls.__name__})")
    return cls


def _same_class(a: Type[Shim], b: Type[Shim]) -> bool:
    return a is b or (a.__module__ == b.__module__ and a.__qualname__ == b.__qualname__)


def _rollback(known: Set[str]) -> None:
    """Forget registrations made since `known` was taken."""
    for key in set(_shims) - known:
        _shims.pop(key, None)
        _shim_metadata.pop(key, None)
        logger.debug(f"Rolled back registration of {key}")


def _load_shim_class(name: str) -> Optional[Type[Shim]]:
    """
    Import the conventional module for a shim and register its class.

    Importing a module runs its @register_shim decorators; if the module
    turns out not to declare the requested shim, those registrations are
    undone so a failed lookup leaves the registry unchanged.
    """
    bare = bare_name(name)
    if not bare.isidentifier():
        logger.debug(f"Not a loadable shim name: {name!r}")
        return None

    module_name = module_name_for(bare)
    known = set(_shims)
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if e.name and module_name.startswith(e.name):
            logger.debug(f"No shim module {module_name}")
        else:
            logger.warning(f"Shim module {module_name} has a missing dependency: {e}")
        _rollback(known)
        return None
    except Exception as e:
        logger.exception(f"Failed to import shim module {module_name}: {e}")
        _rollback(known)
        return None

    for _, candidate in inspect.getmembers(module, inspect.isclass):
        if (
            issubclass(candidate, Shim)
            and candidate is not Shim
            and candidate.__module__ == module.__name__
            and candidate.name == bare
        ):
            register_shim(candidate)
            logger.info(f"Loaded shim {canonical_name(bare)} from {module_name}")
            return candidate

    logger.warning(f"Module {module_name} declares no shim named {bare!r}")
    _rollback(known)
    return None


# ============================================================================
# LOOKUP
# ============================================================================

def get_shim_class(name: str) -> Optional[Type[Shim]]:
    """
    Get a shim class by name, loading it on first use.

    Returns:
        Shim class or None if it cannot be found or loaded
    """
    if not isinstance(name, str):
        logger.debug(f"Not a shim name: {name!r}")
        return None
    cls = _shims.get(canonical_name(name))
    if cls is not None:
        return cls
    return _load_shim_class(name)


def get_shim_class_or_raise(name: str) -> Type[Shim]:
    """
    Get a shim class by name, raising if not found.

    Raises:
        ShimNotFoundError if the shim cannot be found or loaded
    """
    cls = get_shim_class(name)
    if cls is None:
        raise ShimNotFoundError(canonical_name(name) if isinstance(name, str) else repr(name))
    return cls


def resolve(
    name: str,
    params: Optional[Mapping] = None,
    on_success: Optional[SuccessCallback] = None,
    on_fail: Optional[FailCallback] = None,
    *,
    content: Optional[str] = None,
) -> Optional[Shim]:
    """
    Build a new shim instance by name.

    Args:
        name: Shim name, with or without the registry prefix
        params: Parameters merged over the shim's defaults
        on_success: Optional callback for success(data)
        on_fail: Optional callback for fail(errors, data)
        content: Raw body text for shims that take free-form content

    Returns:
        A fresh shim instance, or None if the shim is unknown
    """
    cls = get_shim_class(name)
    if cls is None:
        logger.info(f"Shim not found: {name}")
        return None
    return cls(params, on_success, on_fail, content=content)


def list_shims() -> List[Dict[str, Any]]:
    """
    List all registered shims with metadata.

    Returns:
        List of shim metadata dicts
    """
    return list(_shim_metadata.values())


def get_shim_metadata(name: str) -> Optional[Dict[str, Any]]:
    """Get metadata for a registered shim."""
    if not isinstance(name, str):
        return None
    return _shim_metadata.get(canonical_name(name))


def is_registered(name: str) -> bool:
    """Check the cache only; never triggers loading."""
    return isinstance(name, str) and canonical_name(name) in _shims


def preload_shims(names: Optional[List[str]] = None) -> List[str]:
    """
    Load shims ahead of first use.

    Args:
        names: Shim names (defaults to RegistryDefaults.preload)

    Returns:
        Names that could not be loaded
    """
    if names is None:
        names = list(get_defaults().registry.preload)
    missing = [name for name in names if get_shim_class(name) is None]
    if missing:
        logger.warning(f"Could not preload shims: {missing}")
    return missing


def clear_shims() -> None:
    """
    Clear all registered shims.

    Primarily for testing.
    """
    _shims.clear()
    _shim_metadata.clear()
    logger.debug("Cleared all shims")


__all__ = [
    "bare_name",
    "canonical_name",
    "module_name_for",
    "register_shim",
    "get_shim_class",
    "get_shim_class_or_raise",
    "resolve",
    "list_shims",
    "get_shim_metadata",
    "is_registered",
    "preload_shims",
    "clear_shims",
]
