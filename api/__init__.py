# ============================================================================
# API MODULE
# ============================================================================
# STATUS: Core - FastAPI routes
# PURPOSE: HTTP API for shim invocation
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Module

FastAPI routes for eeshim.
"""

from .routes import router
from .schemas import (
    ShimInfo,
    ShimInvocationResponse,
    ShimListResponse,
    ErrorResponse,
)

__all__ = [
    "router",
    "ShimInfo",
    "ShimInvocationResponse",
    "ShimListResponse",
    "ErrorResponse",
]
