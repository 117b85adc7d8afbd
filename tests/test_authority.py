"""菜单授权编码与勾选判定的单元测试。"""

import pytest

from backoffice.utils.authority import (
    ALWAYS_VISIBLE_MENU_ID,
    decode_membership,
    encode_membership,
    membership_contains,
    resolve_authority_menus,
)
from backoffice.utils.menu_tree import MenuItem


def _items(*ids):
    return [MenuItem(id=menu_id, name=f"menu-{menu_id}") for menu_id in ids]


def test_resolver_marks_granted_menus():
    views = resolve_authority_menus(_items(1, 2, 3, 5), "^|2,^|5,")
    assert [view.checked for view in views] == [True, True, False, True]
    assert [view.id for view in views] == [1, 2, 3, 5]


def test_resolver_with_empty_membership_only_checks_home():
    views = resolve_authority_menus(_items(1, 2, 3), "")
    assert [view.checked for view in views] == [True, False, False]


def test_missing_membership_is_treated_as_empty():
    views = resolve_authority_menus(_items(1, 2, 3), None)
    assert [view.checked for view in views] == [True, False, False]


@pytest.mark.parametrize("membership", [None, "", "^|2,", "^|3,^|4,", "garbage"])
def test_home_menu_is_always_checked(membership):
    views = resolve_authority_menus(_items(3, ALWAYS_VISIBLE_MENU_ID, 4), membership)
    assert views[1].checked is True


def test_resolver_preserves_order_and_does_not_mutate_input():
    items = _items(5, 3, 1)
    snapshot = list(items)
    views = resolve_authority_menus(items, "^|3,")
    assert items == snapshot
    assert [view.id for view in views] == [5, 3, 1]
    assert [view.checked for view in views] == [False, True, True]


def test_resolver_attaches_levels_when_given():
    views = resolve_authority_menus(_items(1, 2), "^|2,", levels={1: 0, 2: 1})
    assert [view.to_dict()["level"] for view in views] == [0, 1]
    assert views[1].to_dict()["checked"] is True


def test_encode_sorts_and_deduplicates():
    assert encode_membership([5, 2, 5]) == "^|2,^|5,"
    assert encode_membership([]) == ""


def test_encode_decode_recovers_exact_set():
    encoded = encode_membership({2, 5})
    assert decode_membership(encoded) == frozenset({2, 5})
    granted = {menu_id for menu_id in range(0, 200) if membership_contains(encoded, menu_id)}
    assert granted == {2, 5}


def test_decode_ignores_noise_between_tokens():
    assert decode_membership("x^|3,,^|14,junk^|") == frozenset({3, 14})
    assert decode_membership(None) == frozenset()


@pytest.mark.parametrize(
    "granted, candidate",
    [
        ({112}, 12),
        ({12}, 112),
        ({11, 21}, 1),
        ({1}, 11),
        ({100}, 10),
    ],
)
def test_delimiters_prevent_substring_collisions(granted, candidate):
    encoded = encode_membership(granted)
    assert membership_contains(encoded, candidate) is False
    assert candidate not in decode_membership(encoded)
    for menu_id in granted:
        assert membership_contains(encoded, menu_id) is True


def test_containment_agrees_with_decoding():
    encoded = "^|7,^|70,^|707,"
    decoded = decode_membership(encoded)
    for menu_id in range(0, 1000):
        assert membership_contains(encoded, menu_id) == (menu_id in decoded)


@pytest.mark.parametrize("encoded", ["^|02,", "^|٢,", "^|+2,", "^| 2,", "^|2.0,", "^|00,"])
def test_non_canonical_tokens_are_not_granted(encoded):
    views = resolve_authority_menus(_items(0, 2), encoded)
    for view in views:
        assert view.checked is membership_contains(encoded, view.id)
        assert view.checked is False
    assert decode_membership(encoded) == frozenset()
