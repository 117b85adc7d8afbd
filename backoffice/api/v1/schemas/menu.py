"""菜单与菜单授权相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from backoffice.api.v1.schemas.common import ResponseEnvelope
from backoffice.core.enums import MenuTypeEnum


class MenuCreateRequest(BaseModel):
    """新建菜单时的请求体；``parent_id`` 为空或 0 表示根菜单。"""

    name: str = Field(..., min_length=1, max_length=100)
    type: MenuTypeEnum = MenuTypeEnum.PAGE
    parent_id: Optional[int] = Field(default=None, ge=0)
    is_using: bool = True
    display_order: int = Field(default=0, ge=0)
    url: Optional[str] = Field(default=None, max_length=255)
    icon: Optional[str] = Field(default=None, max_length=100)
    remark1: Optional[str] = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("菜单名称不能为空")
        return trimmed


class MenuUpdateRequest(BaseModel):
    """更新菜单时的请求体，仅提交的字段会被修改。"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    type: Optional[MenuTypeEnum] = None
    parent_id: Optional[int] = Field(default=None, ge=0)
    is_using: Optional[bool] = None
    display_order: Optional[int] = Field(default=None, ge=0)
    url: Optional[str] = Field(default=None, max_length=255)
    icon: Optional[str] = Field(default=None, max_length=100)
    remark1: Optional[str] = Field(default=None, max_length=255)

    @field_validator("is_using", "display_order")
    @classmethod
    def reject_null(cls, value, info):
        # 这两列在库中非空，省略字段表示不修改，显式 null 不合法
        if value is None:
            raise ValueError(f"{info.field_name} 不能为 null")
        return value


class MenuItemData(BaseModel):
    id: int
    name: str
    type: Optional[str] = None
    parent_id: Optional[int] = None
    is_using: bool
    display_order: Optional[int] = None
    url: Optional[str] = None
    icon: Optional[str] = None
    remark1: Optional[str] = None


class MenuListItem(MenuItemData):
    level: int


class MenuTreeNode(MenuListItem):
    children: List["MenuTreeNode"] = Field(default_factory=list)


MenuTreeNode.model_rebuild()


class AuthorityMenuItem(MenuItemData):
    level: Optional[int] = None
    checked: bool


class MenuAuthorityUpdateRequest(BaseModel):
    """整体替换某个权限等级可访问的菜单 ID 集合。"""

    menu_ids: List[int] = Field(default_factory=list)


class MenuAuthorityData(BaseModel):
    authority: int
    menu_ids: List[int]


MenuTreeResponse = ResponseEnvelope[List[MenuTreeNode]]
MenuListResponse = ResponseEnvelope[List[MenuListItem]]
MenuDetailResponse = ResponseEnvelope[MenuItemData]
MenuDeletionResponse = ResponseEnvelope[None]
AuthorityMenuListResponse = ResponseEnvelope[List[AuthorityMenuItem]]
MenuAuthorityResponse = ResponseEnvelope[MenuAuthorityData]
