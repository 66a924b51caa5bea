# ============================================================================
# SHIMS
# ============================================================================
# STATUS: Core - Shim base class, registry and shim modules
# PURPOSE: Named operations with a uniform success/fail protocol
# CREATED: 19 OCT 2026
# ============================================================================
"""
Shims

Shim modules in this package are imported on first use by the registry,
so this package only exports the base class and registry API.

Usage:
    from shims import resolve

    shim = resolve("crop", {"in": "raw.jpg", "out": "out.jpg", "scale": 50})
    shim.execute()
"""

from shims.base import Shim, merge_params
from shims.registry import (
    bare_name,
    canonical_name,
    register_shim,
    get_shim_class,
    get_shim_class_or_raise,
    resolve,
    list_shims,
    get_shim_metadata,
    is_registered,
    preload_shims,
    clear_shims,
)

__all__ = [
    "Shim",
    "merge_params",
    "bare_name",
    "canonical_name",
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
