# ============================================================================
# RESULT CONTRACTS
# ============================================================================
# STATUS: Foundation - Shim status enum and result models
# PURPOSE: Tagged result union for the success/fail protocol
# CREATED: 19 OCT 2026
# EXPORTS: ShimStatus, ShimSuccess, ShimFailure, ShimResult, ShimResponse
# DEPENDENCIES: enum, pydantic
# ============================================================================
"""
Result contracts for shims.

A shim completes in exactly one of two ways:
- ShimSuccess: carries the success payload
- ShimFailure: carries an ordered list of error messages plus a payload

A shim may instead short-circuit the whole response (ShimResponse), in
which case no success/fail result is recorded.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShimStatus(str, Enum):
    """
    Shim result states.

    State transitions:
        PENDING -> SUCCEEDED
                -> FAILED
    A later success()/fail() call replaces the earlier outcome.
    """
    PENDING = "pending"          # No result call yet
    SUCCEEDED = "succeeded"      # success() was the last result call
    FAILED = "failed"            # fail() was the last result call


def normalize_errors(errors: Any) -> List[str]:
    """
    Normalize an error report to a list of strings.

    A single string becomes a one-element list; None becomes empty.
    """
    if errors is None:
        return []
    if isinstance(errors, str):
        return [errors]
    if isinstance(errors, (list, tuple)):
        return [str(e) for e in errors]
    return [str(errors)]


class ShimSuccess(BaseModel):
    """Successful completion."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    data: Any = Field(default_factory=dict)


class ShimFailure(BaseModel):
    """Failed completion."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    errors: List[str] = Field(default_factory=list)
    data: Any = Field(default_factory=dict)

    @field_validator("errors", mode="before")
    @classmethod
    def _normalize_errors(cls, value: Any) -> List[str]:
        return normalize_errors(value)


ShimResult = Union[ShimSuccess, ShimFailure]


class ShimResponse(BaseModel):
    """
    Terminal response produced by a shim.

    Replaces whatever the caller would otherwise render: the body is sent
    as-is with the given status and headers.
    """
    model_config = ConfigDict(frozen=True)

    body: str
    status_code: int = 200
    headers: Dict[str, str] = Field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )

    @property
    def media_type(self) -> str:
        return self.headers.get("Content-Type", "application/json")


__all__ = [
    "ShimStatus",
    "ShimSuccess",
    "ShimFailure",
    "ShimResult",
    "ShimResponse",
    "normalize_errors",
]
