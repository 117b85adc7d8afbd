"""菜单相关的业务逻辑封装。"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from backoffice.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
    SUPER_ADMIN_AUTHORITY,
)
from backoffice.core.enums import MenuTypeEnum
from backoffice.core.exceptions import AppException
from backoffice.core.logger import logger
from backoffice.core.responses import create_response
from backoffice.crud.menu_authority import menu_authority_crud
from backoffice.crud.menus import menu_crud
from backoffice.models.admin import Admin
from backoffice.models.menu import Menu
from backoffice.utils.authority import (
    decode_membership,
    encode_membership,
    is_always_visible,
    membership_contains,
    resolve_authority_menus,
)
from backoffice.utils.menu_tree import (
    MenuItem,
    MenuNode,
    MenuTreeError,
    OrphanPolicy,
    build_menu_tree,
    collect_descendant_ids,
    find_orphan_ids,
    flatten_menu_tree,
)

_EDITABLE_FIELDS = ("name", "type", "is_using", "display_order", "url", "icon", "remark1")
_NON_NULLABLE_FIELDS = ("is_using", "display_order")


class MenuService:
    """聚合菜单的查询、树形组装与增删改逻辑。"""

    def get_menu_items(self, db: Session) -> List[MenuItem]:
        return [MenuItem.from_entity(menu) for menu in menu_crud.list_all(db)]

    def build_tree(self, items: List[MenuItem], *, warn_orphans: bool = True) -> List[MenuNode]:
        """组装菜单树；孤儿菜单提升为根节点并记录告警，循环引用视为数据损坏。"""
        if warn_orphans:
            orphan_ids = find_orphan_ids(items)
            if orphan_ids:
                logger.warning("Promoting orphan menus to root: %s", orphan_ids)
        try:
            return build_menu_tree(items, orphan_policy=OrphanPolicy.PROMOTE)
        except MenuTreeError as exc:
            logger.error("Menu tree is corrupted: %s", exc)
            raise AppException(str(exc), HTTP_STATUS_INTERNAL_SERVER_ERROR, data={"menu_ids": exc.menu_ids}) from exc

    def get_menu_list(self, db: Session) -> List[MenuNode]:
        """返回按树形先序排列的扁平菜单列表，每个节点带有层级信息。"""
        return flatten_menu_tree(self.build_tree(self.get_menu_items(db)))

    def list_tree(self, db: Session) -> dict[str, Any]:
        tree = self.build_tree(self.get_menu_items(db))
        return create_response("获取菜单树成功", [node.to_dict() for node in tree], HTTP_STATUS_OK)

    def list_flat(self, db: Session) -> dict[str, Any]:
        data = []
        for node in self.get_menu_list(db):
            payload = node.item.to_dict()
            payload["level"] = node.level
            data.append(payload)
        return create_response("获取菜单列表成功", data, HTTP_STATUS_OK)

    def get_drawer(self, db: Session, *, admin: Admin) -> dict[str, Any]:
        """构建当前管理员可访问的侧边栏菜单树。

        停用的菜单连同其全部下级一起隐藏；已授权但上级未授权的菜单提升为根节点。
        """
        all_items = self.get_menu_items(db)
        orphan_ids = find_orphan_ids(all_items)
        if orphan_ids:
            logger.warning("Promoting orphan menus to root: %s", orphan_ids)

        hidden_ids = self._disabled_subtree_ids(all_items)
        items = [item for item in all_items if item.id not in hidden_ids]
        if admin.authority != SUPER_ADMIN_AUTHORITY:
            menu_id_list = menu_authority_crud.get_menu_id_list(db, admin.authority)
            views = resolve_authority_menus(items, menu_id_list)
            items = [view.item for view in views if view.checked]
        tree = self.build_tree(items, warn_orphans=False)
        return create_response("获取菜单成功", [node.to_dict() for node in tree], HTTP_STATUS_OK)

    @staticmethod
    def _disabled_subtree_ids(items: List[MenuItem]) -> set[int]:
        hidden: set[int] = set()
        for item in items:
            if not item.is_using and item.id not in hidden:
                hidden.add(item.id)
                hidden |= collect_descendant_ids(items, item.id)
        return hidden

    def get_detail(self, db: Session, *, menu_id: int) -> dict[str, Any]:
        menu = self._get_or_404(db, menu_id)
        return create_response("获取菜单详情成功", self._serialize(menu), HTTP_STATUS_OK)

    def create(self, db: Session, *, payload: Dict[str, Any], operator: Optional[Admin] = None) -> dict[str, Any]:
        """创建新菜单，上级菜单必须存在。"""
        name_value = self._normalize_name(payload.get("name"))
        if not name_value:
            raise AppException("菜单名称必填", HTTP_STATUS_BAD_REQUEST)

        parent_id = self._normalize_parent_id(payload.get("parent_id"))
        if parent_id is not None:
            self._get_or_404(db, parent_id, msg="上级菜单不存在")

        operator_id = operator.id if operator is not None else None
        menu = menu_crud.create(
            db,
            {
                "name": name_value,
                "type": self._normalize_type(payload.get("type")),
                "parent_id": parent_id,
                "is_using": bool(payload.get("is_using", True)),
                "display_order": payload.get("display_order") or 0,
                "url": payload.get("url"),
                "icon": payload.get("icon"),
                "remark1": payload.get("remark1"),
                "created_by": operator_id,
                "updated_by": operator_id,
            },
        )
        logger.info("Menu #%s '%s' created by admin %s", menu.id, menu.name, operator_id)
        return create_response("创建菜单成功", self._serialize(menu), HTTP_STATUS_OK)

    def update(
        self,
        db: Session,
        *,
        menu_id: int,
        payload: Dict[str, Any],
        operator: Optional[Admin] = None,
    ) -> dict[str, Any]:
        """更新菜单；调整上级时禁止形成循环。"""
        menu = self._get_or_404(db, menu_id)

        if "name" in payload:
            name_value = self._normalize_name(payload.get("name"))
            if not name_value:
                raise AppException("菜单名称必填", HTTP_STATUS_BAD_REQUEST)
            payload["name"] = name_value
        if "type" in payload:
            payload["type"] = self._normalize_type(payload.get("type"))
        for field_name in _NON_NULLABLE_FIELDS:
            if field_name in payload and payload[field_name] is None:
                raise AppException(f"{field_name} 不能为空", HTTP_STATUS_BAD_REQUEST)

        if "parent_id" in payload:
            parent_id = self._normalize_parent_id(payload.get("parent_id"))
            if parent_id is not None:
                if parent_id == menu.id:
                    raise AppException("不能将菜单设置为自身的上级", HTTP_STATUS_BAD_REQUEST)
                self._get_or_404(db, parent_id, msg="上级菜单不存在")
                descendants = collect_descendant_ids(self.get_menu_items(db), menu.id)
                if parent_id in descendants:
                    raise AppException("不能将菜单移动到其下级菜单之下", HTTP_STATUS_BAD_REQUEST)
            menu.parent_id = parent_id

        for field_name in _EDITABLE_FIELDS:
            if field_name in payload:
                setattr(menu, field_name, payload[field_name])
        menu.updated_by = operator.id if operator is not None else None

        menu_crud.save(db, menu)
        logger.info("Menu #%s updated by admin %s", menu.id, menu.updated_by)
        return create_response("更新菜单成功", self._serialize(menu), HTTP_STATUS_OK)

    def delete(self, db: Session, *, menu_id: int, operator: Optional[Admin] = None) -> dict[str, Any]:
        """软删除菜单，并把该菜单从所有权限等级的授权中移除。"""
        if is_always_visible(menu_id):
            raise AppException("首页菜单不允许删除", HTTP_STATUS_BAD_REQUEST)

        menu = self._get_or_404(db, menu_id)
        if menu_crud.has_children(db, menu_id):
            raise AppException("该菜单包含子菜单，无法删除", HTTP_STATUS_BAD_REQUEST)

        operator_id = operator.id if operator is not None else None
        menu.updated_by = operator_id
        menu_crud.soft_delete(db, menu, auto_commit=False)

        encoded_token = encode_membership([menu_id])
        for record in menu_authority_crud.list_containing(db, encoded_token):
            if not membership_contains(record.menu_id_list, menu_id):
                continue
            remaining = decode_membership(record.menu_id_list) - {menu_id}
            menu_authority_crud.replace(
                db,
                authority=record.authority,
                menu_id_list=encode_membership(remaining),
                operator_id=operator_id,
                auto_commit=False,
            )
        db.commit()

        logger.info("Menu #%s deleted by admin %s", menu_id, operator_id)
        return create_response("删除菜单成功", None, HTTP_STATUS_OK)

    def _get_or_404(self, db: Session, menu_id: int, *, msg: str = "菜单不存在") -> Menu:
        menu = menu_crud.get(db, menu_id)
        if menu is None:
            raise AppException(msg, HTTP_STATUS_NOT_FOUND)
        return menu

    @staticmethod
    def _normalize_name(value: Optional[str]) -> str:
        return (value or "").strip()

    @staticmethod
    def _normalize_parent_id(value: Any) -> Optional[int]:
        # 兼容前端以 0 表示“无上级”
        if value in (None, 0, "0", ""):
            return None
        return int(value)

    @staticmethod
    def _normalize_type(value: Any) -> str:
        if isinstance(value, MenuTypeEnum):
            return value.value
        if value is None:
            return MenuTypeEnum.PAGE.value
        return str(value)

    @staticmethod
    def _serialize(menu: Menu) -> Dict[str, Any]:
        return MenuItem.from_entity(menu).to_dict()


menu_service = MenuService()
