"""公共代码服务：代码组维护与按组查询下拉选项。"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from backoffice.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
)
from backoffice.core.exceptions import AppException
from backoffice.core.logger import logger
from backoffice.core.responses import create_response
from backoffice.crud.codes import code_crud, code_group_crud
from backoffice.models.admin import Admin
from backoffice.models.code import Code, CodeGroup


class CodeService:
    """读取并格式化代码组与代码项的数据结构。"""

    def list_groups(self, db: Session) -> Dict[str, Any]:
        data = [self._serialize_group(group) for group in code_group_crud.list_all(db)]
        return create_response("获取代码组成功", data, HTTP_STATUS_OK)

    def create_group(
        self,
        db: Session,
        *,
        code_group: str,
        name: str,
        operator: Optional[Admin] = None,
    ) -> Dict[str, Any]:
        code_group = code_group.strip()
        existing = code_group_crud.get_any_by_code_group(db, code_group)
        if existing is not None and not existing.is_deleted:
            raise AppException("代码组已存在", HTTP_STATUS_CONFLICT)

        operator_id = operator.id if operator is not None else None
        if existing is not None:
            # 复用已软删除的记录，避免违反唯一约束
            existing.is_deleted = False
            existing.name = name
            existing.updated_by = operator_id
            group = code_group_crud.save(db, existing)
        else:
            group = code_group_crud.create(
                db,
                {"code_group": code_group, "name": name, "created_by": operator_id, "updated_by": operator_id},
            )
        logger.info("Code group '%s' created by admin %s", group.code_group, operator_id)
        return create_response("创建代码组成功", self._serialize_group(group), HTTP_STATUS_OK)

    def update_group(
        self,
        db: Session,
        *,
        code_group: str,
        name: str,
        operator: Optional[Admin] = None,
    ) -> Dict[str, Any]:
        group = self._get_group_or_404(db, code_group)
        group.name = name
        group.updated_by = operator.id if operator is not None else None
        code_group_crud.save(db, group)
        return create_response("更新代码组成功", self._serialize_group(group), HTTP_STATUS_OK)

    def delete_group(self, db: Session, *, code_group: str, operator: Optional[Admin] = None) -> Dict[str, Any]:
        group = self._get_group_or_404(db, code_group)
        if code_crud.has_codes(db, code_group):
            raise AppException("代码组下仍有代码项，无法删除", HTTP_STATUS_BAD_REQUEST)
        group.updated_by = operator.id if operator is not None else None
        code_group_crud.soft_delete(db, group)
        logger.info("Code group '%s' deleted", code_group)
        return create_response("删除代码组成功", None, HTTP_STATUS_OK)

    def list_select_items(self, db: Session, *, code_group: str) -> Dict[str, Any]:
        """返回代码组下启用的代码项，未知代码组返回空列表。"""
        codes = code_crud.list_by_group(db, code_group, only_using=True)
        data = [{"value": code.code, "text": code.name} for code in codes]
        return create_response("获取代码成功", data, HTTP_STATUS_OK)

    def create_code(
        self,
        db: Session,
        *,
        code_group: str,
        payload: Dict[str, Any],
        operator: Optional[Admin] = None,
    ) -> Dict[str, Any]:
        self._get_group_or_404(db, code_group)
        code_value = (payload.get("code") or "").strip()
        if not code_value:
            raise AppException("代码必填", HTTP_STATUS_BAD_REQUEST)

        existing = code_crud.get_by_code(db, code_group, code_value, include_deleted=True)
        if existing is not None and not existing.is_deleted:
            raise AppException("代码已存在", HTTP_STATUS_CONFLICT)

        operator_id = operator.id if operator is not None else None
        values = {
            "name": payload.get("name"),
            "is_using": bool(payload.get("is_using", True)),
            "display_order": payload.get("display_order") or 0,
            "updated_by": operator_id,
        }
        if existing is not None:
            existing.is_deleted = False
            for key, value in values.items():
                setattr(existing, key, value)
            code = code_crud.save(db, existing)
        else:
            code = code_crud.create(
                db,
                {"code_group": code_group, "code": code_value, "created_by": operator_id, **values},
            )
        return create_response("创建代码成功", self._serialize_code(code), HTTP_STATUS_OK)

    def delete_code(self, db: Session, *, code_group: str, code: str) -> Dict[str, Any]:
        entry = code_crud.get_by_code(db, code_group, code)
        if entry is None:
            raise AppException("代码不存在", HTTP_STATUS_NOT_FOUND)
        code_crud.soft_delete(db, entry)
        return create_response("删除代码成功", None, HTTP_STATUS_OK)

    def _get_group_or_404(self, db: Session, code_group: str) -> CodeGroup:
        group = code_group_crud.get_by_code_group(db, code_group)
        if group is None:
            raise AppException("代码组不存在", HTTP_STATUS_NOT_FOUND)
        return group

    @staticmethod
    def _serialize_group(group: CodeGroup) -> Dict[str, Any]:
        return {"code_group": group.code_group, "name": group.name}

    @staticmethod
    def _serialize_code(code: Code) -> Dict[str, Any]:
        return {
            "code_group": code.code_group,
            "code": code.code,
            "name": code.name,
            "is_using": bool(code.is_using),
            "display_order": code.display_order,
        }


code_service = CodeService()
