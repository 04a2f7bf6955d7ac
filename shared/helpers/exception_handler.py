import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError

from shared.core.exceptions import HotelOpsError
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(HotelOpsError)
    async def domain_exception_handler(request: Request, exc: HotelOpsError):
        logger.info("%s on %s %s: %s", exc.__class__.__name__,
                    request.method, request.url.path, exc.message)
        return error_response(
            message=exc.message,
            status_code=exc.app_status_code,
            http_status=exc.status_code,
            data=exc.details or None
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return error_response(
            message=str(exc.detail),
            status_code=AppStatusCode.OPERATION_FAILED,
            http_status=exc.status_code or 400
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            message=str(exc.errors()),
            status_code=AppStatusCode.INVALID_INPUT,
            http_status=422
        )

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)
        return error_response(
            message="Internal server error",
            status_code=AppStatusCode.OPERATION_FAILED,
            http_status=500
        )
