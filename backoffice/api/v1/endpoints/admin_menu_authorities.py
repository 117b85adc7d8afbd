"""菜单授权管理相关的路由定义。"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backoffice.api.v1.schemas.menu import (
    AuthorityMenuListResponse,
    MenuAuthorityResponse,
    MenuAuthorityUpdateRequest,
)
from backoffice.core.dependencies import get_current_active_admin, get_db
from backoffice.models.admin import Admin
from backoffice.services.admin_menu_authority_service import admin_menu_authority_service

router = APIRouter(prefix="/admin/menu-authorities", tags=["admin_menu_authorities"])


@router.get("/{authority}", response_model=AuthorityMenuListResponse)
def list_authority_menus(
    authority: int,
    db: Session = Depends(get_db),
    _: Admin = Depends(get_current_active_admin),
) -> AuthorityMenuListResponse:
    """返回全部菜单及其在该权限等级下的勾选状态。"""
    return admin_menu_authority_service.get_items(db, authority=authority)


@router.put("/{authority}", response_model=MenuAuthorityResponse)
def replace_authority_menus(
    authority: int,
    payload: MenuAuthorityUpdateRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_active_admin),
) -> MenuAuthorityResponse:
    return admin_menu_authority_service.replace_items(
        db,
        authority=authority,
        menu_ids=payload.menu_ids,
        operator=current_admin,
    )
