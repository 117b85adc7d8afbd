"""应用入口：负责创建 FastAPI 实例并绑定生命周期事件。"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from backoffice.api.v1 import api_router
from backoffice.core.config import get_settings
from backoffice.core.exceptions import (
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from backoffice.core.logger import logger, setup_logging
from backoffice.core.responses import create_response
from backoffice.core.security import consume_refreshed_token
from backoffice.db.init_db import init_db
from backoffice.middleware.request_id import RequestIdMiddleware

setup_logging()
settings = get_settings()


@asynccontextmanager
async def lifespan(_: FastAPI):
    """初始化数据库状态，确认服务可用后输出成功日志。"""
    init_db()
    logger.info("SUCCESS - Application running at http://127.0.0.1:%s", settings.app_port)
    yield


app = FastAPI(title=settings.project_name, debug=settings.debug, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Access-Token", "X-Request-ID"],
)


class AccessTokenHeaderMiddleware(BaseHTTPMiddleware):
    """将当前请求上下文中的刷新令牌附加到响应头中。

    登录成功或滑动续期时，业务层会把新令牌写入上下文变量；若响应头里还没有
    `X-Access-Token`，本中间件负责补上，前端可据此替换本地缓存。
    """

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        token = consume_refreshed_token()
        if token and "X-Access-Token" not in response.headers:
            response.headers["X-Access-Token"] = token
        return response


app.add_middleware(AccessTokenHeaderMiddleware)
app.add_middleware(RequestIdMiddleware)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/health")
async def health_check() -> dict:
    """提供健康检查接口，便于编排器与监控系统探活。"""
    return create_response("OK", {"status": "healthy"})


app.include_router(api_router, prefix=settings.api_v1_str)
