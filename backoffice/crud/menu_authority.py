"""菜单授权记录的数据库访问封装。"""

from typing import List, Optional

from sqlalchemy.orm import Session

from backoffice.crud.base import CRUDBase
from backoffice.models.menu_authority import MenuAuthority


class CRUDMenuAuthority(CRUDBase[MenuAuthority]):
    """按权限等级读写授权编码串。"""

    def get_by_authority(self, db: Session, authority: int) -> Optional[MenuAuthority]:
        return self.query(db).filter(self.model.authority == authority).first()

    def get_menu_id_list(self, db: Session, authority: int) -> Optional[str]:
        """返回权限等级对应的编码串，无记录时返回 ``None``。"""
        record = self.get_by_authority(db, authority)
        return record.menu_id_list if record is not None else None

    def list_containing(self, db: Session, token: str) -> List[MenuAuthority]:
        """返回编码串中包含指定片段的全部授权记录。"""
        return self.query(db).filter(self.model.menu_id_list.contains(token)).all()

    def replace(
        self,
        db: Session,
        *,
        authority: int,
        menu_id_list: str,
        operator_id: Optional[int] = None,
        auto_commit: bool = True,
    ) -> MenuAuthority:
        """整体替换某个权限等级的授权编码串，记录不存在时新建。"""
        record = self.get_by_authority(db, authority)
        if record is None:
            record = MenuAuthority(authority=authority, created_by=operator_id)
        record.menu_id_list = menu_id_list
        record.updated_by = operator_id
        return self.save(db, record, auto_commit=auto_commit)


menu_authority_crud = CRUDMenuAuthority(MenuAuthority)
