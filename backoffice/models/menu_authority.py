"""菜单授权模型：每个权限等级一行，记录其可访问的菜单集合。"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import expression

from backoffice.models.base import AuditMixin, Base, TimestampMixin


class MenuAuthority(AuditMixin, TimestampMixin, Base):
    """``menu_id_list`` 保存 ``^|n,`` 形式的编码串，编辑时整体替换。"""

    __tablename__ = "menu_authorities"

    authority: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    menu_id_list: Mapped[str] = mapped_column(Text, nullable=False, server_default=expression.text("''"), default="")
