"""API v1 汇总路由：统一挂载所有版本化的子路由。"""

from fastapi import APIRouter

from backoffice.api.v1.endpoints import admin_menu_authorities, auth, codes, menus, variables

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(menus.router)
api_router.include_router(admin_menu_authorities.router)
api_router.include_router(codes.group_router)
api_router.include_router(codes.router)
api_router.include_router(variables.router)
