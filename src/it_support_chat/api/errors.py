"""
Exception handlers mapping the error taxonomy onto HTTP responses.

Every error body has the shape '{"error": "<short message>"}'. Upstream and
unexpected failures get a generic message; their cause is only logged.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from it_support_chat.errors import ConversationNotFoundError, SupportChatError, ValidationError

GENERIC_ERROR_MESSAGE = "Internal server error"


def _status_code_for(exc: SupportChatError) -> int:
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ConversationNotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def support_chat_error_handler(request: Request, exc: SupportChatError) -> JSONResponse:
    status_code = _status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}")
    return JSONResponse(status_code=status_code, content={"error": exc.message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "Invalid request"
    errors = exc.errors()
    if errors:
        location = ".".join(str(item) for item in errors[0].get("loc", ()) if item != "body")
        detail = " ".join(filter(None, [location, errors[0].get("msg", "")]))
        message = f"{message}: {detail}"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": GENERIC_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SupportChatError, support_chat_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
