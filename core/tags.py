# ============================================================================
# TAG INVOCATION
# ============================================================================
# STATUS: Core - Template-tag style entry point
# PURPOSE: Run a shim from already-parsed tag attributes and body
# CREATED: 19 OCT 2026
# ============================================================================
"""
Tag Invocation

Runs a shim the way a template tag would:

    {exp:eeshim:crop in="raw.jpg" out="cropped.jpg" scale="50"}

All attributes arrive as strings and become the shim's parameters
verbatim; the tag body (if any) becomes the shim's content. Parsing the
tag itself is the caller's job.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from core.contracts import ShimResponse, ShimStatus
from core.logging import log_context
from shims.base import FailCallback, SuccessCallback
from shims.registry import canonical_name, resolve

logger = logging.getLogger(__name__)


class TagInvocation(BaseModel):
    """A parsed template tag."""
    name: str = Field(..., min_length=1)
    params: Dict[str, str] = Field(default_factory=dict)
    content: Optional[str] = None


class TagOutput(BaseModel):
    """
    Outcome of a tag invocation.

    Either `response` is set (the shim replaced the whole response) or the
    result fields describe how the shim completed.
    """
    shim: str
    status: ShimStatus = ShimStatus.PENDING
    response: Optional[ShimResponse] = None
    success_data: Any = Field(default_factory=dict)
    errors: List[str] = Field(default_factory=list)
    error_data: Any = Field(default_factory=dict)
    return_value: Any = None

    @property
    def terminated(self) -> bool:
        """True if the shim produced a terminal response."""
        return self.response is not None


def invoke_tag(
    invocation: TagInvocation,
    on_success: Optional[SuccessCallback] = None,
    on_fail: Optional[FailCallback] = None,
    request_id: Optional[str] = None,
) -> Optional[TagOutput]:
    """
    Resolve and run the shim named by a tag.

    Log records emitted while the shim runs carry the shim name and,
    when given, the request_id of the caller.

    Returns:
        TagOutput, or None if no shim has that name
    """
    shim_name = canonical_name(invocation.name)
    content = invocation.content.strip() if invocation.content else None

    with log_context(shim=shim_name, operation="tag", request_id=request_id):
        shim = resolve(
            invocation.name,
            dict(invocation.params),
            on_success,
            on_fail,
            content=content or None,
        )
        if shim is None:
            return None

        value = shim.execute()

        if isinstance(value, ShimResponse):
            logger.info(f"Shim {shim_name} returned a terminal response ({value.status_code})")
            return TagOutput(shim=shim_name, status=shim.status, response=value)

        return TagOutput(
            shim=shim_name,
            status=shim.status,
            success_data=shim.get_success_data(),
            errors=shim.get_errors(),
            error_data=shim.get_error_data(),
            return_value=value,
        )


__all__ = [
    "TagInvocation",
    "TagOutput",
    "invoke_tag",
]
