"""菜单授权：权限等级与可访问菜单集合之间的编码与判定。

持久化层把某个权限等级可访问的菜单保存为一个字符串，每个菜单 ID ``n``
以 ``^|n,`` 的形式出现（例如 ``^|2,^|5,``）。业务代码内部统一使用
``frozenset[int]``，字符串形式只在读写数据库时出现。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from backoffice.utils.menu_tree import MenuItem

MEMBERSHIP_PREFIX = "^|"
MEMBERSHIP_SUFFIX = ","

# 首页菜单对所有权限等级可见，不依赖授权记录
ALWAYS_VISIBLE_MENU_ID = 1

# 只接受规范写法的 ASCII 十进制 ID，与编码结果逐字一致
_MEMBERSHIP_TOKEN = re.compile(re.escape(MEMBERSHIP_PREFIX) + r"(0|[1-9][0-9]*)" + re.escape(MEMBERSHIP_SUFFIX))


def _token(menu_id: int) -> str:
    return f"{MEMBERSHIP_PREFIX}{menu_id}{MEMBERSHIP_SUFFIX}"


def encode_membership(menu_ids: Iterable[int]) -> str:
    """把菜单 ID 集合编码为 ``^|n,`` 串，去重并升序排列。"""
    unique_ids = sorted({int(menu_id) for menu_id in menu_ids})
    return "".join(_token(menu_id) for menu_id in unique_ids)


def decode_membership(encoded: Optional[str]) -> frozenset[int]:
    """解析 ``^|n,`` 串为菜单 ID 集合；空串或 ``None`` 视为空集合。"""
    if not encoded:
        return frozenset()
    return frozenset(int(match) for match in _MEMBERSHIP_TOKEN.findall(encoded))


def membership_contains(encoded: Optional[str], menu_id: int) -> bool:
    """直接在编码串上做包含判断，分隔符保证不会误匹配相邻的数字。"""
    if not encoded:
        return False
    return _token(menu_id) in encoded


def is_always_visible(menu_id: int) -> bool:
    return menu_id == ALWAYS_VISIBLE_MENU_ID


@dataclass(frozen=True)
class AuthorityMenuView:
    """附带授权勾选状态的菜单，仅用于响应输出。"""

    item: MenuItem
    checked: bool
    level: Optional[int] = None

    @property
    def id(self) -> int:
        return self.item.id

    def to_dict(self) -> Dict[str, Any]:
        payload = self.item.to_dict()
        if self.level is not None:
            payload["level"] = self.level
        payload["checked"] = self.checked
        return payload


def resolve_authority_menus(
    items: Sequence[MenuItem],
    menu_id_list: Optional[str],
    *,
    levels: Optional[Dict[int, int]] = None,
) -> List[AuthorityMenuView]:
    """为每个菜单计算 ``checked``，保持输入顺序。

    ``menu_id_list`` 为 ``None`` 表示该权限等级尚无授权记录，按空集合处理，
    此时只有首页菜单被勾选。``levels`` 可选地提供菜单所在层级，原样附带到结果中。
    """
    granted = decode_membership(menu_id_list)
    level_map = levels or {}
    return [
        AuthorityMenuView(
            item=item,
            checked=is_always_visible(item.id) or item.id in granted,
            level=level_map.get(item.id),
        )
        for item in items
    ]
