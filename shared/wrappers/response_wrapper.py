import json
import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request
from fastapi.responses import JSONResponse
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

SKIPPED_PREFIXES = ("/openapi", "/docs", "/redoc")
ENVELOPE_KEYS = {"status", "status_code", "message"}


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wrap successful JSON bodies in the standard ``JsonOutResult`` envelope."""

    async def dispatch(self, request: Request, call_next: Callable):
        # Skip OpenAPI/Swagger endpoints
        if request.url.path.startswith(SKIPPED_PREFIXES):
            return await call_next(request)

        response = await call_next(request)

        # Only wrap successful JSON responses
        content_type = response.headers.get("content-type", "")
        if not (200 <= response.status_code < 400 and "application/json" in content_type):
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8"))
        except ValueError:
            logger.warning("Non JSON body on %s despite JSON content-type", request.url.path)
            return JSONResponse(content=None, status_code=response.status_code)

        # Skip if already wrapped
        if isinstance(data, dict) and ENVELOPE_KEYS.issubset(data.keys()):
            return JSONResponse(content=data, status_code=response.status_code)

        status_code = AppStatusCode.CREATED_SUCCESSFULLY if response.status_code == 201 \
            else AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY
        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=status_code,
            message="Data retrieved successfully"
        ).model_dump()

        return JSONResponse(
            content=wrapped,
            status_code=response.status_code,
            headers={k: v for k, v in response.headers.items()
                     if k.lower() not in ("content-length", "content-type")}
        )
