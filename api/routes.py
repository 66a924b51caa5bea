# ============================================================================
# API ROUTES
# ============================================================================
# STATUS: Core - FastAPI route definitions
# PURPOSE: HTTP endpoints for invoking and listing shims
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Routes

FastAPI routes for eeshim.

Invoking a shim over HTTP mirrors a template tag: query parameters are
the tag attributes and the request body is the tag content.
"""

import logging
import uuid

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from core.contracts import ShimStatus
from core.tags import TagInvocation, invoke_tag
from shims.registry import canonical_name, list_shims
from .schemas import (
    ShimInfo,
    ShimInvocationResponse,
    ShimListResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

REQUEST_ID_HEADER = "X-Request-ID"


# ============================================================================
# SHIM ENDPOINTS
# ============================================================================

@router.get("/shims", response_model=ShimListResponse)
async def get_shims():
    """List shims loaded into the registry."""
    shims = [ShimInfo(**meta) for meta in list_shims()]
    return ShimListResponse(shims=shims, total=len(shims))


@router.api_route(
    "/shims/{name}",
    methods=["GET", "POST"],
    response_model=ShimInvocationResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ShimInvocationResponse}},
)
async def invoke_shim(name: str, request: Request, response: Response):
    """
    Run a shim.

    A shim that produces a terminal response (e.g. jsonResponse) has that
    response returned as-is. Otherwise the shim's result is returned, with
    status 422 if it failed. The caller's X-Request-ID (or a generated
    one) is attached to the shim's log records and echoed back.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    body = await request.body()
    invocation = TagInvocation(
        name=name,
        params=dict(request.query_params),
        content=body.decode("utf-8", errors="replace") if body else None,
    )

    output = await run_in_threadpool(invoke_tag, invocation, request_id=request_id)
    headers = {REQUEST_ID_HEADER: request_id}
    if output is None:
        shim_name = canonical_name(name)
        error = ErrorResponse(
            error="shim_not_found",
            detail=f"Shim not found: {shim_name}",
            shim=shim_name,
        )
        return JSONResponse(status_code=404, content=error.model_dump(), headers=headers)

    if output.response is not None:
        return Response(
            content=output.response.body,
            status_code=output.response.status_code,
            headers={**headers, **output.response.headers},
        )

    result = ShimInvocationResponse(
        shim=output.shim,
        status=output.status,
        success=output.status == ShimStatus.SUCCEEDED,
        data=output.success_data,
        errors=output.errors,
        error_data=output.error_data,
    )
    if output.status == ShimStatus.FAILED:
        logger.info(f"Shim {output.shim} failed: {output.errors}")
        return JSONResponse(
            status_code=422, content=result.model_dump(mode="json"), headers=headers
        )
    response.headers[REQUEST_ID_HEADER] = request_id
    return result
