"""Render every error response as ``{"message": ..., "errors"?: [...]}``."""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = structlog.get_logger()


def _field_errors(exc: RequestValidationError) -> list:
    # pydantic's ctx/input can hold non-JSON values such as exception instances
    return [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid task data", "errors": _field_errors(exc)},
    )


async def catch_unhandled_errors(request: Request, call_next):
    # Runs inside CORSMiddleware, so the 500 still carries the CORS headers.
    try:
        return await call_next(request)
    except Exception as exc:
        log.error(
            "unhandled_exception",
            method=request.method,
            path=request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error"},
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers; call before adding CORSMiddleware so it wraps them."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.middleware("http")(catch_unhandled_errors)
