"""菜单的数据库访问封装。"""

from typing import Iterable, List

from sqlalchemy.orm import Session

from backoffice.crud.base import CRUDBase
from backoffice.models.menu import Menu


class CRUDMenu(CRUDBase[Menu]):
    """提供菜单的便捷查询方法。"""

    def list_all(self, db: Session) -> List[Menu]:
        """返回所有未删除的菜单（含停用），按照排序值与主键排序。"""
        return self.query(db).order_by(self.model.display_order, self.model.id).all()

    def has_children(self, db: Session, menu_id: int) -> bool:
        """判断指定菜单是否存在未删除的子级。"""
        query = self.query(db).with_entities(self.model.id).filter(self.model.parent_id == menu_id)
        return query.first() is not None

    def existing_ids(self, db: Session, ids: Iterable[int]) -> set[int]:
        """返回给定 ID 中真实存在（未删除）的那一部分。"""
        id_set = {item for item in ids if item is not None}
        if not id_set:
            return set()
        rows = self.query(db).with_entities(self.model.id).filter(self.model.id.in_(id_set)).all()
        return {row[0] for row in rows}


menu_crud = CRUDMenu(Menu)
