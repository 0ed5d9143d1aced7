import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.encoders import jsonable_encoder
import traceback

from app.core.config import settings

logger = logging.getLogger("wager_ledger.errors")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    # pydantic prefixes messages raised from validators
    message = message.removeprefix("Value error, ")

    return JSONResponse(
        status_code=400,
        content={"error": message, "details": jsonable_encoder(errors)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)

    content = {"error": "Internal Server Error"}
    if settings.is_development:
        content["error"] = str(exc) or content["error"]
        content["stack"] = traceback.format_exception(exc)

    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
