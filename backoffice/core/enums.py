"""枚举定义：约束菜单类型等字段的可选值。"""

from enum import Enum


class MenuTypeEnum(str, Enum):
    """菜单在侧边栏中的渲染类型。"""

    GROUP = "G"
    PAGE = "P"
    WINDOW = "W"
