"""认证服务：封装登录与当前管理员信息的组装。"""

from sqlalchemy.orm import Session

from backoffice.core.constants import (
    ACCESS_TOKEN_TYPE,
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_OK,
    HTTP_STATUS_UNAUTHORIZED,
)
from backoffice.core.exceptions import AppException
from backoffice.core.logger import logger
from backoffice.core.responses import create_response
from backoffice.core.security import create_access_token, store_refreshed_token, verify_password
from backoffice.crud.admins import admin_crud
from backoffice.models.admin import Admin


class AuthService:
    def login(self, db: Session, *, username: str, password: str) -> dict:
        """校验管理员凭证并签发访问令牌。"""
        admin = admin_crud.get_by_username(db, username)
        if admin is None or not verify_password(password, admin.hashed_password):
            logger.warning("Login failed for '%s'", username)
            raise AppException(msg="用户名或密码错误", code=HTTP_STATUS_UNAUTHORIZED)
        if not admin.is_active:
            logger.warning("Login rejected for inactive admin '%s'", username)
            raise AppException(msg="账号已停用", code=HTTP_STATUS_FORBIDDEN)

        access_token = create_access_token({"admin_id": admin.id, "username": admin.username})
        store_refreshed_token(access_token)
        logger.info("Admin '%s' logged in", admin.username)
        return create_response(
            "登录成功",
            {"access_token": access_token, "token_type": ACCESS_TOKEN_TYPE},
            HTTP_STATUS_OK,
        )

    def build_profile(self, admin: Admin) -> dict:
        data = {
            "id": admin.id,
            "username": admin.username,
            "name": admin.name,
            "authority": admin.authority,
        }
        return create_response("获取管理员信息成功", data, HTTP_STATUS_OK)


auth_service = AuthService()
