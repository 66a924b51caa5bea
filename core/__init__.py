# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export result contracts and exceptions
# CREATED: 19 OCT 2026
# ============================================================================

from core.contracts import (
    ShimStatus,
    ShimSuccess,
    ShimFailure,
    ShimResult,
    ShimResponse,
)
from core.errors import ShimError, ShimNotFoundError, DuplicateShimError

__all__ = [
    # Enums
    "ShimStatus",
    # Models
    "ShimSuccess",
    "ShimFailure",
    "ShimResult",
    "ShimResponse",
    # Errors
    "ShimError",
    "ShimNotFoundError",
    "DuplicateShimError",
]
