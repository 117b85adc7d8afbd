"""公共代码模型：代码组及其下属代码项，供前端下拉选项使用。"""

from sqlalchemy import Boolean, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.models.base import AuditMixin, Base, SoftDeleteMixin, TimestampMixin


class CodeGroup(AuditMixin, TimestampMixin, SoftDeleteMixin, Base):
    """代码组，按 ``code_group`` 唯一标识。"""

    __tablename__ = "code_groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    code_group: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100))


class Code(AuditMixin, TimestampMixin, SoftDeleteMixin, Base):
    """代码项，``code`` 在所属代码组内唯一。"""

    __tablename__ = "codes"
    __table_args__ = (
        UniqueConstraint("code_group", "code", name="uq_codes_code_group_code"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    code_group: Mapped[str] = mapped_column(String(100), index=True)
    code: Mapped[str] = mapped_column(String(100))
    name: Mapped[str] = mapped_column(String(100))
    is_using: Mapped[bool] = mapped_column(Boolean, default=True)
    display_order: Mapped[int] = mapped_column(Integer, default=0)
