"""认证相关路由定义。"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backoffice.api.v1.schemas.auth import (
    AdminProfileResponse,
    LoginRequest,
    LogoutResponse,
    TokenResponse,
)
from backoffice.core.constants import HTTP_STATUS_OK
from backoffice.core.dependencies import get_current_active_admin, get_db
from backoffice.core.responses import create_response
from backoffice.models.admin import Admin
from backoffice.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    """校验凭证并签发访问令牌。"""
    return auth_service.login(db, username=payload.username, password=payload.password)


@router.get("/me", response_model=AdminProfileResponse)
def read_current_admin(current_admin: Admin = Depends(get_current_active_admin)) -> AdminProfileResponse:
    return auth_service.build_profile(current_admin)


@router.post("/logout", response_model=LogoutResponse)
def logout(_: Admin = Depends(get_current_active_admin)) -> LogoutResponse:
    """退出登录，前端需删除本地缓存的令牌。"""
    return create_response("退出登录成功", None, HTTP_STATUS_OK)
