"""异常处理模块：定义统一的业务异常与响应格式。"""

from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backoffice.core.logger import logger
from backoffice.core.security import consume_refreshed_token


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data


def _with_token_meta(payload: dict[str, Any]) -> dict[str, Any]:
    token = consume_refreshed_token()
    if token:
        payload["meta"] = {"access_token": token}
    return payload


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """将 FastAPI 的 ``HTTPException`` 转换为统一响应格式。"""
    payload = {"msg": exc.detail, "data": getattr(exc, "data", None), "code": exc.status_code}
    return JSONResponse(
        status_code=exc.status_code,
        content=_with_token_meta(payload),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """统一处理请求体验证失败的场景。"""

    def _serialize(obj: Any) -> Any:
        if isinstance(obj, Exception):
            return str(obj)
        if isinstance(obj, dict):
            return {key: _serialize(value) for key, value in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [_serialize(item) for item in obj]
        return obj

    payload = {
        "msg": "请求参数验证失败",
        "data": _serialize(exc.errors()),
        "code": status.HTTP_422_UNPROCESSABLE_ENTITY,
    }
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=_with_token_meta(payload))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """兜底处理：将未捕获异常转换为标准的 500 响应结构。"""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    payload = {
        "msg": "服务器内部错误",
        "data": None,
        "code": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_with_token_meta(payload))
