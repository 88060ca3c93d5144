import logging
from uuid import uuid4

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from orgchat.constants.enums import ResponseStatus

logger = logging.getLogger(__name__)


class StatusResponse(BaseModel):
    status: str = ResponseStatus.OK.value


class ErrorResponse(BaseModel):
    error: str


def create_status_response(status: ResponseStatus = ResponseStatus.OK) -> StatusResponse:
    return StatusResponse(status=status.value)


def create_error_response(
    code: str, message: str, status_code: int = 400
) -> JSONResponse:
    request_id = str(uuid4())
    logger.warning(
        "Error response [%s] status=%d code=%s message=%s",
        request_id,
        status_code,
        code,
        message,
    )
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(mode="json"),
        headers={"X-Request-ID": request_id},
    )
