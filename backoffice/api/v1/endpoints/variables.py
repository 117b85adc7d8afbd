"""配置变量相关的路由定义。"""

from fastapi import APIRouter

from backoffice.api.v1.schemas.variable import VariableResponse
from backoffice.services.variable_service import variable_service

router = APIRouter(prefix="/variables", tags=["variables"])


@router.get("/title", response_model=VariableResponse)
def get_app_title() -> VariableResponse:
    """返回应用标题，登录页在未认证时也需要展示。"""
    return variable_service.get_app_title()
