import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from orgchat.api.routes import api_router
from orgchat.auth.cookies import set_session_cookies
from orgchat.constants.chat_errors import CHAT_ERROR_MESSAGES, ChatErrorCode
from orgchat.constants.enums import ResponseStatus
from orgchat.core.exceptions import AppException
from orgchat.core.lifespan import lifespan
from orgchat.core.settings import settings
from orgchat.schemas.common import create_error_response

logger = logging.getLogger(__name__)


def _keep_refreshed_session(request: Request, response: JSONResponse) -> JSONResponse:
    session = getattr(request.state, "refreshed_session", None)
    if session is not None:
        set_session_cookies(response, session)
    return response


def _chat_error(
    request: Request, code: ChatErrorCode, status_code: int
) -> JSONResponse:
    response = create_error_response(
        code=code.value,
        message=CHAT_ERROR_MESSAGES[code],
        status_code=status_code,
    )
    return _keep_refreshed_session(request, response)


async def handle_app_exception(request: Request, exc: AppException) -> JSONResponse:
    logger.warning(
        "%s %s failed: code=%s message=%s",
        request.method,
        request.url.path,
        exc.code,
        exc.message,
    )
    response = create_error_response(
        code=exc.code, message=exc.message, status_code=exc.status_code
    )
    return _keep_refreshed_session(request, response)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(
        "Rejected body on %s %s: %s", request.method, request.url.path, exc.errors()
    )
    return _chat_error(request, ChatErrorCode.INVALID_REQUEST, 400)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _chat_error(request, ChatErrorCode.INTERNAL_ERROR, 500)


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    application.add_exception_handler(AppException, handle_app_exception)
    application.add_exception_handler(RequestValidationError, handle_validation_error)
    application.add_exception_handler(Exception, handle_unexpected_error)

    # cookies are only sent cross-origin with explicit origins, never "*"
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    application.include_router(api_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": ResponseStatus.HEALTHY.value}

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "orgchat.main:app",
        host="localhost",
        port=8000,
        reload=settings.debug,
    )
