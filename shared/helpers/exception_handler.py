import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from shared.core.exceptions import AppException
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        logger.info("%s %s failed: %s", request.method,
                    request.url.path, exc.message)
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=exc.status_code,
            message=exc.message
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=exc.http_status)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        if isinstance(exc.detail, dict):
            message = exc.detail.get("message", "")
            status_code = exc.detail.get(
                "status_code", AppStatusCode.OPERATION_FAILED)
        else:
            message = str(exc.detail)
            status_code = AppStatusCode.OPERATION_FAILED
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=str(status_code),
            message=message
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=exc.status_code or 400,
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.INVALID_INPUT,
            message=str(exc)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=422)

    # Catch all unhandled exceptions; storage details never reach the caller
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.OPERATION_FAILED,
            message="Internal server error"
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=500)
