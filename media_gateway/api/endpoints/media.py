"""Media endpoints: presigned upload and signed read.

The handlers hand the raw Authorization header and body to the gateway
core so token checks run before the body is parsed; FastAPI's own body
validation is not used. Once the body is read, the flow races the ASGI
disconnect message and is cancelled if the client goes away first.
"""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from media_gateway.api.dependencies import MediaGatewayDep
from media_gateway.application.use_cases import GatewayResponse, MediaGateway
from media_gateway.domain.exceptions import BadRequestException
from media_gateway.schemas.media import (
    ErrorResponse,
    PresignUploadResponse,
    SignedReadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed request or policy violation"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Not a member, or key outside the family"},
    500: {"model": ErrorResponse, "description": "Signer or internal failure"},
}


def _to_response(result: GatewayResponse) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


async def _wait_for_disconnect(request: Request) -> None:
    # Only valid after the body has been fully read.
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return


async def run_until_disconnect(
    request: Request, flow: Awaitable[GatewayResponse]
) -> GatewayResponse | None:
    """Await flow, cancelling it if the client disconnects first.

    Returns None when the flow was abandoned.
    """
    flow_task = asyncio.ensure_future(flow)
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        await asyncio.wait({flow_task, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        watcher.cancel()
        if not flow_task.done():
            flow_task.cancel()
        for task in (flow_task, watcher):
            with contextlib.suppress(asyncio.CancelledError):
                await task
    if flow_task.cancelled():
        return None
    return flow_task.result()


async def _respond(
    request: Request, gateway: MediaGateway, flow: Awaitable[GatewayResponse]
) -> JSONResponse:
    result = await run_until_disconnect(request, flow)
    if result is None:
        logger.info("Client disconnected; abandoned %s", request.url.path)
        result = gateway.error_response(
            BadRequestException("Bad request: client disconnected")
        )
    return _to_response(result)


@router.post(
    "/presignUpload",
    response_model=PresignUploadResponse,
    responses=_ERROR_RESPONSES,
)
async def presign_upload(request: Request, gateway: MediaGatewayDep) -> JSONResponse:
    """Issue a short-lived presigned PUT URL for a new family media object."""
    body = await request.body()
    return await _respond(
        request,
        gateway,
        gateway.presign_upload(request.headers.get("authorization"), body),
    )


@router.post(
    "/signedRead",
    response_model=SignedReadResponse,
    responses=_ERROR_RESPONSES,
)
async def signed_read(request: Request, gateway: MediaGatewayDep) -> JSONResponse:
    """Issue a presigned GET URL for an object owned by the caller's family."""
    body = await request.body()
    return await _respond(
        request,
        gateway,
        gateway.signed_read(request.headers.get("authorization"), body),
    )
