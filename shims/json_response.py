# ============================================================================
# JSON RESPONSE SHIM
# ============================================================================
# STATUS: Shim - JSON echo
# PURPOSE: Replace the response with a JSON document
# CREATED: 19 OCT 2026
# ============================================================================
"""
JSON Response Shim

Outputs a JSON document as the whole response.

- With body content, the content is parsed as JSON and re-emitted.
- Without body content, the parameters are emitted as a JSON object.

This shim does not call success() or fail(): run() returns a
ShimResponse and the caller sends it in place of anything else.

Template tags:
    {exp:eeshim:jsonResponse addon-name="EE Shim" shim="jsonResponse"}

    {exp:eeshim:jsonResponse}
        {"addon-name": "EE Shim", "shim-info": {"name": "jsonResponse"}}
    {/exp:eeshim:jsonResponse}
"""

import json
import logging

from core.contracts import ShimResponse
from shims.base import Shim
from shims.registry import register_shim

logger = logging.getLogger(__name__)


@register_shim
class JsonResponse(Shim):
    """Echo body content or parameters as a JSON response."""

    name = "jsonResponse"

    def run(self) -> ShimResponse:
        if self.content:
            try:
                output = json.loads(self.content)
            except json.JSONDecodeError as e:
                logger.warning(f"Body content is not valid JSON, emitting null: {e}")
                output = None
        else:
            output = self.params

        return ShimResponse(
            body=json.dumps(output, default=str),
            status_code=200,
            headers={"Content-Type": "application/json"},
        )


__all__ = ["JsonResponse"]
