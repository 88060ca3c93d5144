import logging

from fastapi import APIRouter, Request

from orgchat.core.dependencies import CurrentIdentityDep, RelayServiceDep
from orgchat.schemas.common import (
    ErrorResponse,
    StatusResponse,
    create_status_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Relay"])


@router.post(
    "/relay",
    response_model=StatusResponse,
    summary="Post a chat message",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def relay_message(
    request: Request,
    identity: CurrentIdentityDep,
    relay_service: RelayServiceDep,
) -> StatusResponse:
    try:
        payload = await request.json()
    except ValueError:
        logger.debug("Relay body from %s is not JSON", identity.id)
        payload = None

    await relay_service.relay(identity, payload)
    return create_status_response()
