"""模型包初始化，便于统一导入 ORM 实体并触发模型注册。"""

from backoffice.models.admin import Admin
from backoffice.models.code import Code, CodeGroup
from backoffice.models.menu import Menu
from backoffice.models.menu_authority import MenuAuthority

__all__ = [
    "Admin",
    "Code",
    "CodeGroup",
    "Menu",
    "MenuAuthority",
]
