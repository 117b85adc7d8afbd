"""菜单树构建的单元测试。"""

import pytest

from backoffice.utils.menu_tree import (
    MenuItem,
    MenuTreeError,
    OrphanPolicy,
    build_menu_tree,
    collect_descendant_ids,
    count_nodes,
    find_orphan_ids,
    flatten_menu_tree,
    iter_menu_tree,
)


def _item(menu_id, parent_id=None, display_order=0, name=None):
    return MenuItem(id=menu_id, name=name or f"menu-{menu_id}", parent_id=parent_id, display_order=display_order)


SAMPLE_ITEMS = [
    _item(1, None, 0),
    _item(2, None, 2),
    _item(3, 2, 3),
    _item(4, 2, 1),
    _item(5, 4, 0),
    _item(6, None, 1),
    _item(7, 2, 2),
]


def test_builds_forest_with_levels_and_sorted_children():
    forest = build_menu_tree(SAMPLE_ITEMS)

    assert [node.id for node in forest] == [1, 6, 2]
    assert all(node.level == 0 for node in forest)

    group = forest[2]
    assert [child.id for child in group.children] == [4, 7, 3]
    assert all(child.level == 1 for child in group.children)
    assert [grandchild.id for grandchild in group.children[0].children] == [5]
    assert group.children[0].children[0].level == 2


def test_node_count_matches_input():
    forest = build_menu_tree(SAMPLE_ITEMS)
    assert count_nodes(forest) == len(SAMPLE_ITEMS)
    assert sorted(node.id for node in iter_menu_tree(forest)) == sorted(item.id for item in SAMPLE_ITEMS)


def test_every_subtree_is_sorted_by_display_order():
    forest = build_menu_tree(SAMPLE_ITEMS)
    for node in iter_menu_tree(forest):
        orders = [child.item.display_order for child in node.children]
        assert orders == sorted(orders)


def test_ties_are_broken_by_id_and_none_order_sorts_first():
    items = [_item(10, None, 1), _item(9, None, 1), _item(8, None, None)]
    forest = build_menu_tree(items)
    assert [node.id for node in forest] == [8, 9, 10]


def test_zero_parent_id_is_treated_as_root():
    forest = build_menu_tree([_item(1, 0), _item(2, 1)])
    assert [node.id for node in forest] == [1]
    assert forest[0].children[0].id == 2


def test_flatten_returns_preorder():
    forest = build_menu_tree(SAMPLE_ITEMS)
    assert [node.id for node in flatten_menu_tree(forest)] == [1, 6, 2, 4, 5, 7, 3]


def test_input_is_not_mutated_and_result_is_deterministic():
    items = list(reversed(SAMPLE_ITEMS))
    snapshot = list(items)
    first = build_menu_tree(items)
    second = build_menu_tree(items)
    assert items == snapshot
    assert [node.to_dict() for node in first] == [node.to_dict() for node in second]


def test_orphan_is_promoted_to_root_by_default():
    items = [_item(1, None, 5), _item(2, 99, 1), _item(3, 2, 0)]
    forest = build_menu_tree(items)

    assert [node.id for node in forest] == [2, 1]
    promoted = forest[0]
    assert promoted.level == 0
    assert promoted.item.parent_id == 99
    assert [child.id for child in promoted.children] == [3]
    assert promoted.children[0].level == 1
    assert count_nodes(forest) == len(items)


def test_orphan_subtree_is_dropped_with_drop_policy():
    items = [_item(1), _item(2, 99), _item(3, 2), _item(4, 1)]
    forest = build_menu_tree(items, orphan_policy=OrphanPolicy.DROP)
    assert [node.id for node in iter_menu_tree(forest)] == [1, 4]


def test_orphan_raises_with_raise_policy():
    with pytest.raises(MenuTreeError) as exc_info:
        build_menu_tree([_item(1), _item(2, 99), _item(3, 98)], orphan_policy=OrphanPolicy.RAISE)
    assert exc_info.value.menu_ids == [2, 3]


def test_find_orphan_ids():
    assert find_orphan_ids([_item(1), _item(2, 1), _item(3, 42)]) == [3]


def test_cycle_is_reported_instead_of_dropped():
    items = [_item(1), _item(2, 3), _item(3, 2)]
    with pytest.raises(MenuTreeError) as exc_info:
        build_menu_tree(items)
    assert exc_info.value.menu_ids == [2, 3]


def test_self_parent_is_reported_as_cycle():
    with pytest.raises(MenuTreeError):
        build_menu_tree([_item(1), _item(2, 2)])


def test_to_dict_contains_level_and_nested_children():
    payload = build_menu_tree([_item(1), _item(2, 1)])[0].to_dict()
    assert payload["id"] == 1
    assert payload["level"] == 0
    assert payload["children"][0]["id"] == 2
    assert payload["children"][0]["level"] == 1
    assert payload["children"][0]["children"] == []


def test_collect_descendant_ids():
    assert collect_descendant_ids(SAMPLE_ITEMS, 2) == {3, 4, 5, 7}
    assert collect_descendant_ids(SAMPLE_ITEMS, 5) == set()
