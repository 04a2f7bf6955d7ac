from fastapi.responses import JSONResponse

from shared.utils.app_status_code import AppStatusCode
from shared.core.schemas import JsonOutResult


def error_response(message: str, status_code: str = AppStatusCode.OPERATION_FAILED, http_status: int = 400, data=None):
    return JSONResponse(
        status_code=http_status,
        content=JsonOutResult(
            data=data,
            status="Failure",
            status_code=status_code,
            message=message
        ).model_dump()
    )
