"""菜单模型：后台导航菜单的持久化记录。"""

from typing import Optional

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.core.enums import MenuTypeEnum
from backoffice.models.base import AuditMixin, Base, SoftDeleteMixin, TimestampMixin


class Menu(AuditMixin, TimestampMixin, SoftDeleteMixin, Base):
    """菜单实体，通过 ``parent_id`` 表达上下级关系。"""

    __tablename__ = "menus"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), index=True)
    type: Mapped[str] = mapped_column(String(20), default=MenuTypeEnum.PAGE.value)
    parent_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    is_using: Mapped[bool] = mapped_column(Boolean, default=True)
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    remark1: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
