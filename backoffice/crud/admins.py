"""管理员 CRUD：集中管理管理员账号的数据操作。"""

from typing import Optional

from sqlalchemy.orm import Session

from backoffice.crud.base import CRUDBase
from backoffice.models.admin import Admin


class CRUDAdmin(CRUDBase[Admin]):
    def get_by_username(self, db: Session, username: str) -> Optional[Admin]:
        """根据唯一用户名获取管理员实例。"""
        return self.query(db).filter(self.model.username == username).first()


admin_crud = CRUDAdmin(Admin)
