"""管理员模型：后台登录账号及其权限等级。"""

from typing import Optional

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.models.base import AuditMixin, Base, SoftDeleteMixin, TimestampMixin


class Admin(AuditMixin, TimestampMixin, SoftDeleteMixin, Base):
    """管理员实体，``authority`` 决定其可访问的菜单集合。"""

    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    authority: Mapped[int] = mapped_column(Integer, default=0, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
