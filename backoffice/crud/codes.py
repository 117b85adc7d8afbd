"""代码组与代码项的数据库访问方法。"""

from typing import List, Optional

from sqlalchemy.orm import Session

from backoffice.crud.base import CRUDBase
from backoffice.models.code import Code, CodeGroup


class CRUDCodeGroup(CRUDBase[CodeGroup]):
    def list_all(self, db: Session) -> List[CodeGroup]:
        return self.query(db).order_by(self.model.code_group).all()

    def get_by_code_group(self, db: Session, code_group: str) -> Optional[CodeGroup]:
        return self.query(db).filter(self.model.code_group == code_group).first()

    def get_any_by_code_group(self, db: Session, code_group: str) -> Optional[CodeGroup]:
        """包含已软删除的记录，唯一约束校验时使用。"""
        return self.query(db, include_deleted=True).filter(self.model.code_group == code_group).first()


class CRUDCode(CRUDBase[Code]):
    def list_by_group(self, db: Session, code_group: str, *, only_using: bool = False) -> List[Code]:
        """按照代码组返回排序后的代码项列表。"""
        query = self.query(db).filter(self.model.code_group == code_group)
        if only_using:
            query = query.filter(self.model.is_using.is_(True))
        return query.order_by(self.model.display_order, self.model.id).all()

    def get_by_code(self, db: Session, code_group: str, code: str, *, include_deleted: bool = False) -> Optional[Code]:
        query = self.query(db, include_deleted=include_deleted)
        return query.filter(self.model.code_group == code_group, self.model.code == code).first()

    def has_codes(self, db: Session, code_group: str) -> bool:
        query = self.query(db).with_entities(self.model.id).filter(self.model.code_group == code_group)
        return query.first() is not None


code_group_crud = CRUDCodeGroup(CodeGroup)
code_crud = CRUDCode(Code)
