"""Exception handlers mapping application errors to JSON responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from inkcraft.domain.errors import (
    AssetError,
    AssetStorageError,
    AuthError,
    StoreError,
)

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Something went wrong, please try again later"


def _error_response(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthError)
    async def auth_error(request: Request, exc: AuthError) -> JSONResponse:
        return _error_response(401, exc.message)

    @app.exception_handler(AssetError)
    async def asset_error(request: Request, exc: AssetError) -> JSONResponse:
        return _error_response(400, exc.message)

    @app.exception_handler(AssetStorageError)
    async def asset_storage_error(
        request: Request, exc: AssetStorageError
    ) -> JSONResponse:
        logger.error(
            "Asset storage failure on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _error_response(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(
            "Record store failure on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _error_response(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = "; ".join(
            f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}"
            for e in exc.errors()
        )
        return _error_response(400, messages)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path
        )
        return _error_response(500, GENERIC_SERVER_ERROR)
