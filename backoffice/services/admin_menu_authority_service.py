"""菜单授权管理服务：查询与整体替换某个权限等级的菜单授权。"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from sqlalchemy.orm import Session

from backoffice.core.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_OK
from backoffice.core.exceptions import AppException
from backoffice.core.logger import logger
from backoffice.core.responses import create_response
from backoffice.crud.menu_authority import menu_authority_crud
from backoffice.crud.menus import menu_crud
from backoffice.models.admin import Admin
from backoffice.services.menu_service import menu_service
from backoffice.utils.authority import (
    ALWAYS_VISIBLE_MENU_ID,
    decode_membership,
    encode_membership,
    resolve_authority_menus,
)


class AdminMenuAuthorityService:
    def get_items(self, db: Session, *, authority: int) -> dict[str, Any]:
        """返回全部菜单（树形先序），并标记该权限等级是否可访问。"""
        nodes = menu_service.get_menu_list(db)
        menu_id_list = menu_authority_crud.get_menu_id_list(db, authority)
        views = resolve_authority_menus(
            [node.item for node in nodes],
            menu_id_list,
            levels={node.id: node.level for node in nodes},
        )
        return create_response("获取菜单授权成功", [view.to_dict() for view in views], HTTP_STATUS_OK)

    def replace_items(
        self,
        db: Session,
        *,
        authority: int,
        menu_ids: Iterable[int],
        operator: Optional[Admin] = None,
    ) -> dict[str, Any]:
        """用新的菜单集合整体替换授权记录；首页菜单默认可见，无需保存。"""
        requested = {int(menu_id) for menu_id in menu_ids} - {ALWAYS_VISIBLE_MENU_ID}
        unknown = requested - menu_crud.existing_ids(db, requested)
        if unknown:
            raise AppException("菜单不存在", HTTP_STATUS_BAD_REQUEST, data={"menu_ids": sorted(unknown)})

        operator_id = operator.id if operator is not None else None
        record = menu_authority_crud.replace(
            db,
            authority=authority,
            menu_id_list=encode_membership(requested),
            operator_id=operator_id,
        )
        logger.info(
            "Menu authority %s replaced by admin %s: %s",
            authority,
            operator_id,
            record.menu_id_list,
        )
        data = {
            "authority": record.authority,
            "menu_ids": sorted(decode_membership(record.menu_id_list)),
        }
        return create_response("保存菜单授权成功", data, HTTP_STATUS_OK)


admin_menu_authority_service = AdminMenuAuthorityService()
