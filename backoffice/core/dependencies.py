"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from collections.abc import Generator
from typing import Optional

from fastapi import Depends, HTTPException, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from backoffice.core.constants import ACCESS_TOKEN_TYPE
from backoffice.core.security import create_access_token, decode_token, store_refreshed_token
from backoffice.crud.admins import admin_crud
from backoffice.db import session as db_session
from backoffice.models.admin import Admin

security_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """生成一个数据库会话，并在请求结束后自动关闭。"""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_admin(
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: Session = Depends(get_db),
) -> Admin:
    """解析 ``Authorization`` 头部并返回当前管理员，不存在或非法时抛出 401。"""
    if not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="缺少认证信息")

    if credentials.scheme.lower() != ACCESS_TOKEN_TYPE:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="认证类型无效")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token 无效或已过期")

    admin_id = payload.get("admin_id")
    if admin_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token 无效")

    admin = admin_crud.get(db, admin_id)
    if admin is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="管理员不存在")

    # 滑动续期：每次认证成功都签发新令牌
    refreshed_token = create_access_token({"admin_id": admin.id, "username": admin.username})
    response.headers["X-Access-Token"] = refreshed_token
    store_refreshed_token(refreshed_token)

    return admin


def get_current_active_admin(current_admin: Admin = Depends(get_current_admin)) -> Admin:
    """确保已认证管理员仍处于激活状态，否则拒绝访问。"""
    if not current_admin.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="账号已停用")
    return current_admin
