"""菜单树构建：把扁平的菜单记录组装为带层级的森林结构。

构建分两步完成：
1. 按 ``parent_id`` 把所有记录归入 ``children_map``；
2. 从根节点出发递归组装 ``MenuNode``，同级按 ``display_order``、``id`` 排序。

``parent_id`` 指向不存在菜单的记录称为“孤儿”，其处理方式由
``OrphanPolicy`` 显式决定。本模块不访问数据库，也不修改输入。
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence


class MenuTreeError(ValueError):
    """菜单记录无法组装为合法的树形结构。"""

    def __init__(self, msg: str, menu_ids: Iterable[int] = ()) -> None:
        super().__init__(msg)
        self.menu_ids = sorted(menu_ids)


class OrphanPolicy(str, Enum):
    """孤儿节点（上级菜单不存在）的处理策略。"""

    PROMOTE = "promote"
    DROP = "drop"
    RAISE = "raise"


@dataclass(frozen=True)
class MenuItem:
    """与持久化无关的菜单记录。"""

    id: int
    name: str
    type: Optional[str] = None
    parent_id: Optional[int] = None
    is_using: bool = True
    display_order: Optional[int] = 0
    url: Optional[str] = None
    icon: Optional[str] = None
    remark1: Optional[str] = None

    @classmethod
    def from_entity(cls, entity: Any) -> "MenuItem":
        return cls(
            id=entity.id,
            name=entity.name,
            type=entity.type,
            parent_id=entity.parent_id,
            is_using=bool(entity.is_using),
            display_order=entity.display_order,
            url=entity.url,
            icon=entity.icon,
            remark1=entity.remark1,
        )

    @property
    def is_root(self) -> bool:
        return self.parent_id in (None, 0)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MenuNode:
    item: MenuItem
    level: int = 0
    children: List["MenuNode"] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.item.id

    def to_dict(self) -> Dict[str, Any]:
        payload = self.item.to_dict()
        payload["level"] = self.level
        payload["children"] = [child.to_dict() for child in self.children]
        return payload


def _sort_key(item: MenuItem) -> tuple[int, int]:
    return (item.display_order or 0, item.id)


def find_orphan_ids(items: Sequence[MenuItem]) -> List[int]:
    """返回上级菜单不在输入集合中的记录 ID。"""
    known_ids = {item.id for item in items}
    return [item.id for item in items if not item.is_root and item.parent_id not in known_ids]


def build_menu_tree(
    items: Sequence[MenuItem],
    *,
    orphan_policy: OrphanPolicy = OrphanPolicy.PROMOTE,
) -> List[MenuNode]:
    """按照父子关系把菜单记录组装为森林，返回排序后的根节点列表。"""

    known_ids = {item.id for item in items}
    children_map: Dict[Optional[int], List[MenuItem]] = defaultdict(list)
    roots: List[MenuItem] = []
    orphans: List[MenuItem] = []

    for item in items:
        if item.is_root:
            roots.append(item)
        elif item.parent_id in known_ids:
            children_map[item.parent_id].append(item)
        else:
            orphans.append(item)

    if orphans:
        orphan_ids = [orphan.id for orphan in orphans]
        if orphan_policy is OrphanPolicy.RAISE:
            raise MenuTreeError(f"上级菜单不存在: {sorted(orphan_ids)}", orphan_ids)
        if orphan_policy is OrphanPolicy.PROMOTE:
            roots.extend(orphans)

    for siblings in children_map.values():
        siblings.sort(key=_sort_key)
    roots.sort(key=_sort_key)

    visited: set[int] = set()

    def build_node(item: MenuItem, level: int) -> MenuNode:
        visited.add(item.id)
        children = [build_node(child, level + 1) for child in children_map.get(item.id, [])]
        return MenuNode(item=item, level=level, children=children)

    forest = [build_node(root, 0) for root in roots]

    # 剩余未访问的记录只可能位于被丢弃的孤儿子树或环路中
    dropped: set[int] = set()
    if orphan_policy is OrphanPolicy.DROP:
        pending = [orphan.id for orphan in orphans]
        while pending:
            current = pending.pop()
            dropped.add(current)
            pending.extend(child.id for child in children_map.get(current, []))

    cyclic = known_ids - visited - dropped
    if cyclic:
        raise MenuTreeError(f"菜单上下级存在循环引用: {sorted(cyclic)}", cyclic)
    return forest


def iter_menu_tree(nodes: Iterable[MenuNode]) -> Iterator[MenuNode]:
    """按深度优先（先序）顺序遍历整棵森林。"""
    for node in nodes:
        yield node
        yield from iter_menu_tree(node.children)


def flatten_menu_tree(nodes: Iterable[MenuNode]) -> List[MenuNode]:
    return list(iter_menu_tree(nodes))


def count_nodes(nodes: Iterable[MenuNode]) -> int:
    return sum(1 for _ in iter_menu_tree(nodes))


def collect_descendant_ids(items: Sequence[MenuItem], menu_id: int) -> set[int]:
    """返回指定菜单的全部下级菜单 ID（不含自身），用于校验调整上级时的循环。"""
    children_map: Dict[Optional[int], List[int]] = defaultdict(list)
    for item in items:
        children_map[item.parent_id].append(item.id)

    descendants: set[int] = set()
    pending = list(children_map.get(menu_id, []))
    while pending:
        current = pending.pop()
        if current in descendants or current == menu_id:
            continue
        descendants.add(current)
        pending.extend(children_map.get(current, []))
    return descendants
