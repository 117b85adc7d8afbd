"""菜单管理相关的路由定义。"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backoffice.api.v1.schemas.menu import (
    MenuCreateRequest,
    MenuDeletionResponse,
    MenuDetailResponse,
    MenuListResponse,
    MenuTreeResponse,
    MenuUpdateRequest,
)
from backoffice.core.dependencies import get_current_active_admin, get_db
from backoffice.models.admin import Admin
from backoffice.services.menu_service import menu_service

router = APIRouter(prefix="/menus", tags=["menus"])


@router.get("", response_model=MenuTreeResponse)
def list_menu_tree(
    db: Session = Depends(get_db),
    _: Admin = Depends(get_current_active_admin),
) -> MenuTreeResponse:
    """返回完整的菜单树。"""
    return menu_service.list_tree(db)


@router.get("/flat", response_model=MenuListResponse)
def list_menus(
    db: Session = Depends(get_db),
    _: Admin = Depends(get_current_active_admin),
) -> MenuListResponse:
    """按树形先序返回扁平菜单列表。"""
    return menu_service.list_flat(db)


@router.get("/drawer", response_model=MenuTreeResponse)
def get_drawer_menus(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_active_admin),
) -> MenuTreeResponse:
    """返回当前管理员可访问的侧边栏菜单。"""
    return menu_service.get_drawer(db, admin=current_admin)


@router.get("/{menu_id}", response_model=MenuDetailResponse)
def get_menu(
    menu_id: int,
    db: Session = Depends(get_db),
    _: Admin = Depends(get_current_active_admin),
) -> MenuDetailResponse:
    return menu_service.get_detail(db, menu_id=menu_id)


@router.post("", response_model=MenuDetailResponse)
def create_menu(
    payload: MenuCreateRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_active_admin),
) -> MenuDetailResponse:
    return menu_service.create(db, payload=payload.model_dump(), operator=current_admin)


@router.put("/{menu_id}", response_model=MenuDetailResponse)
def update_menu(
    menu_id: int,
    payload: MenuUpdateRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_active_admin),
) -> MenuDetailResponse:
    return menu_service.update(
        db,
        menu_id=menu_id,
        payload=payload.model_dump(exclude_unset=True),
        operator=current_admin,
    )


@router.delete("/{menu_id}", response_model=MenuDeletionResponse)
def delete_menu(
    menu_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_active_admin),
) -> MenuDeletionResponse:
    """删除菜单，包含子菜单或为首页菜单时拒绝。"""
    return menu_service.delete(db, menu_id=menu_id, operator=current_admin)
