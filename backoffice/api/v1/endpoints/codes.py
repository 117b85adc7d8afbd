"""公共代码相关的路由定义。"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backoffice.api.v1.schemas.code import (
    CodeCreateRequest,
    CodeGroupCreateRequest,
    CodeGroupListResponse,
    CodeGroupResponse,
    CodeGroupUpdateRequest,
    CodeResponse,
    DeletionResponse,
    SelectItemListResponse,
)
from backoffice.core.dependencies import get_current_active_admin, get_db
from backoffice.models.admin import Admin
from backoffice.services.code_service import code_service

group_router = APIRouter(prefix="/code-groups", tags=["code_groups"])
router = APIRouter(prefix="/codes", tags=["codes"])


@group_router.get("", response_model=CodeGroupListResponse)
def list_code_groups(
    db: Session = Depends(get_db),
    _: Admin = Depends(get_current_active_admin),
) -> CodeGroupListResponse:
    return code_service.list_groups(db)


@group_router.post("", response_model=CodeGroupResponse)
def create_code_group(
    payload: CodeGroupCreateRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_active_admin),
) -> CodeGroupResponse:
    return code_service.create_group(
        db,
        code_group=payload.code_group,
        name=payload.name,
        operator=current_admin,
    )


@group_router.put("/{code_group}", response_model=CodeGroupResponse)
def update_code_group(
    code_group: str,
    payload: CodeGroupUpdateRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_active_admin),
) -> CodeGroupResponse:
    return code_service.update_group(db, code_group=code_group, name=payload.name, operator=current_admin)


@group_router.delete("/{code_group}", response_model=DeletionResponse)
def delete_code_group(
    code_group: str,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_active_admin),
) -> DeletionResponse:
    return code_service.delete_group(db, code_group=code_group, operator=current_admin)


@router.get("/{code_group}", response_model=SelectItemListResponse)
def list_codes(
    code_group: str,
    db: Session = Depends(get_db),
    _: Admin = Depends(get_current_active_admin),
) -> SelectItemListResponse:
    """根据代码组返回下拉选项列表。"""
    return code_service.list_select_items(db, code_group=code_group)


@router.post("/{code_group}", response_model=CodeResponse)
def create_code(
    code_group: str,
    payload: CodeCreateRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_active_admin),
) -> CodeResponse:
    return code_service.create_code(
        db,
        code_group=code_group,
        payload=payload.model_dump(),
        operator=current_admin,
    )


@router.delete("/{code_group}/{code}", response_model=DeletionResponse)
def delete_code(
    code_group: str,
    code: str,
    db: Session = Depends(get_db),
    _: Admin = Depends(get_current_active_admin),
) -> DeletionResponse:
    return code_service.delete_code(db, code_group=code_group, code=code)
