import json
import logging
from typing import Any, Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def replace_nulls_with_empty(value: Any):
    """
    Recursively replaces None based on expected structure:
    - List fields -> []
    - Primitives -> ""
    """
    if isinstance(value, dict):
        cleaned = {}
        for k, v in value.items():
            # If key suggests a LIST and value is None → []
            if v is None and k.lower() in {"items", "hotel_bookings", "service_bookings", "bookings"}:
                cleaned[k] = []
            else:
                cleaned[k] = replace_nulls_with_empty(v)
        return cleaned

    elif isinstance(value, list):
        return [replace_nulls_with_empty(v) for v in value]

    elif value is None:
        return ""

    return value


def _passthrough_headers(response):
    return {k: v for k, v in response.headers.items() if k.lower() != "content-length"}


class JsonResponseMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled exception on %s %s",
                             request.method, request.url.path)

            wrapped_error = JsonOutResult(
                data="",
                status="Failed",
                status_code=AppStatusCode.OPERATION_FAILED,
                message="Internal server error",
            ).model_dump()

            return JSONResponse(content=replace_nulls_with_empty(wrapped_error), status_code=500)

        content_type = response.headers.get("content-type", "")
        is_json = "application/json" in content_type
        if not is_json:
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8")) if body_bytes else None
        except ValueError:
            data = None

        # Error responses (4xx/5xx)
        if not (200 <= response.status_code < 400):
            message = ""
            internal_status_code = str(response.status_code)

            if isinstance(data, dict):
                detail = data.get("detail")
                if isinstance(detail, dict):
                    message = detail.get("message") or ""
                    internal_status_code = str(detail.get("status_code"))
                else:
                    message = detail or data.get("message") or ""
                    internal_status_code = str(
                        data.get("status_code") or response.status_code)
            elif isinstance(data, str):
                message = data
            elif data is None:
                message = "An unexpected error occurred"

            wrapped_error = JsonOutResult(
                data="",
                status="Failed",
                status_code=internal_status_code,
                message=message,
            ).model_dump()

            return JSONResponse(
                content=replace_nulls_with_empty(wrapped_error),
                status_code=response.status_code,
                headers=_passthrough_headers(response),
            )

        # Skip wrapping if already wrapped
        if isinstance(data, dict) and {"status", "status_code", "message"}.issubset(data.keys()):
            return JSONResponse(
                content=replace_nulls_with_empty(data),
                status_code=response.status_code,
                headers=_passthrough_headers(response),
            )

        wrapped = JsonOutResult(
            data=data if data not in [None, {}] else "",
            status="Success",
            status_code=AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY,
            message="Data retrieved successfully"
        ).model_dump()

        return JSONResponse(
            content=replace_nulls_with_empty(wrapped),
            status_code=response.status_code,
            headers=_passthrough_headers(response),
        )
