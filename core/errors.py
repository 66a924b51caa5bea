# ============================================================================
# SHIM EXCEPTIONS
# ============================================================================
# STATUS: Core - Exception hierarchy
# PURPOSE: Errors raised by explicit registry helpers
# CREATED: 19 OCT 2026
# ============================================================================
"""
Shim Exceptions

Shim-level failures are reported through the success/fail protocol and
never raised. These exceptions cover registry misuse only.
"""


class ShimError(Exception):
    """Base exception for shim errors."""
    pass


class ShimNotFoundError(ShimError):
    """Raised when a shim cannot be resolved by name."""
    def __init__(self, shim_name: str):
        self.shim_name = shim_name
        super().__init__(f"Shim not found: {shim_name}")


class DuplicateShimError(ShimError):
    """Raised when a different class is registered under a taken name."""
    def __init__(self, shim_name: str):
        self.shim_name = shim_name
        super().__init__(f"Shim already registered: {shim_name}")


__all__ = [
    "ShimError",
    "ShimNotFoundError",
    "DuplicateShimError",
]
