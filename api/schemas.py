# ============================================================================
# API SCHEMAS
# ============================================================================
# STATUS: Core - Request/Response schemas
# PURPOSE: Pydantic models for API validation
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Schemas

Response models for the shim API.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from core.contracts import ShimStatus


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class ShimInvocationResponse(BaseModel):
    """Outcome of a shim that completed through success()/fail()."""
    shim: str
    status: ShimStatus
    success: bool
    data: Any = Field(default_factory=dict)
    errors: List[str] = Field(default_factory=list)
    error_data: Any = Field(default_factory=dict)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shim": "eeshim_crop",
                    "status": "succeeded",
                    "success": True,
                    "data": {"path": "images/cropped.jpg"},
                    "errors": [],
                    "error_data": {},
                }
            ]
        }
    }


class ShimInfo(BaseModel):
    """A registered shim."""
    name: str
    shim: str
    description: str = ""
    module: str
    defaults: Dict[str, Any] = Field(default_factory=dict)
    registered_at: Optional[str] = None


class ShimListResponse(BaseModel):
    """List of registered shims."""
    shims: List[ShimInfo]
    total: int


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None
    shim: Optional[str] = None
