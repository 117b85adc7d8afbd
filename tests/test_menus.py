"""菜单管理接口的集成测试。"""

from fastapi.testclient import TestClient

from backoffice.models.menu import Menu
from backoffice.services import menu_service as menu_service_module


def _get_token(client: TestClient, username: str = "admin", password: str = "admin123") -> str:
    response = client.post("/api/v1/auth/login", json={"username": username, "password": password})
    return response.json()["data"]["access_token"]


def _create_menu(client: TestClient, headers: dict, **fields) -> dict:
    response = client.post("/api/v1/menus", headers=headers, json=fields)
    assert response.status_code == 200, response.json()
    return response.json()["data"]


def _find(nodes, menu_id):
    for node in nodes:
        if node["id"] == menu_id:
            return node
        found = _find(node.get("children", []), menu_id)
        if found is not None:
            return found
    return None


def test_menu_crud_and_tree(client: TestClient):
    headers = {"Authorization": f"Bearer {_get_token(client)}"}

    group = _create_menu(client, headers, name="系统管理", type="G", display_order=10, icon="mdi-cog")
    second = _create_menu(client, headers, name="代码管理", parent_id=group["id"], display_order=2, url="/codes")
    first = _create_menu(client, headers, name="菜单管理", parent_id=group["id"], display_order=1, url="/menus")
    assert first["parent_id"] == group["id"]
    assert first["type"] == "P"

    tree_resp = client.get("/api/v1/menus", headers=headers)
    assert tree_resp.status_code == 200
    tree = tree_resp.json()["data"]
    assert tree[0]["id"] == 1
    group_node = _find(tree, group["id"])
    assert group_node["level"] == 0
    assert [child["id"] for child in group_node["children"]] == [first["id"], second["id"]]
    assert all(child["level"] == 1 for child in group_node["children"])

    flat = client.get("/api/v1/menus/flat", headers=headers).json()["data"]
    flat_ids = [item["id"] for item in flat]
    assert flat_ids.index(group["id"]) < flat_ids.index(first["id"]) < flat_ids.index(second["id"])

    detail = client.get(f"/api/v1/menus/{first['id']}", headers=headers)
    assert detail.status_code == 200
    assert detail.json()["data"]["url"] == "/menus"

    update_resp = client.put(
        f"/api/v1/menus/{second['id']}",
        headers=headers,
        json={"display_order": 0, "icon": "mdi-code"},
    )
    assert update_resp.status_code == 200
    assert update_resp.json()["data"]["icon"] == "mdi-code"
    tree = client.get("/api/v1/menus", headers=headers).json()["data"]
    assert [child["id"] for child in _find(tree, group["id"])["children"]] == [second["id"], first["id"]]

    blocked = client.delete(f"/api/v1/menus/{group['id']}", headers=headers)
    assert blocked.status_code == 400

    assert client.delete(f"/api/v1/menus/{first['id']}", headers=headers).status_code == 200
    assert client.delete(f"/api/v1/menus/{second['id']}", headers=headers).status_code == 200
    assert client.delete(f"/api/v1/menus/{group['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/v1/menus/{group['id']}", headers=headers).status_code == 404


def test_create_menu_with_unknown_parent_returns_404(client: TestClient):
    headers = {"Authorization": f"Bearer {_get_token(client)}"}
    response = client.post("/api/v1/menus", headers=headers, json={"name": "孤儿", "parent_id": 987654})
    assert response.status_code == 404
    assert response.json()["msg"] == "上级菜单不存在"


def test_reparenting_cannot_create_cycle(client: TestClient):
    headers = {"Authorization": f"Bearer {_get_token(client)}"}
    top = _create_menu(client, headers, name="顶层")
    middle = _create_menu(client, headers, name="中层", parent_id=top["id"])
    bottom = _create_menu(client, headers, name="底层", parent_id=middle["id"])

    self_parent = client.put(f"/api/v1/menus/{top['id']}", headers=headers, json={"parent_id": top["id"]})
    assert self_parent.status_code == 400

    cycle = client.put(f"/api/v1/menus/{top['id']}", headers=headers, json={"parent_id": bottom["id"]})
    assert cycle.status_code == 400

    to_root = client.put(f"/api/v1/menus/{bottom['id']}", headers=headers, json={"parent_id": 0})
    assert to_root.status_code == 200
    assert to_root.json()["data"]["parent_id"] is None


def test_home_menu_cannot_be_deleted(client: TestClient):
    headers = {"Authorization": f"Bearer {_get_token(client)}"}
    response = client.delete("/api/v1/menus/1", headers=headers)
    assert response.status_code == 400
    assert response.json()["msg"] == "首页菜单不允许删除"


def test_orphan_menu_is_promoted_to_root(client: TestClient, db_session_fixture):
    headers = {"Authorization": f"Bearer {_get_token(client)}"}
    orphan = Menu(name="孤立菜单", type="P", parent_id=424242, is_using=True, display_order=99)
    db_session_fixture.add(orphan)
    db_session_fixture.commit()

    tree = client.get("/api/v1/menus", headers=headers).json()["data"]
    node = next(item for item in tree if item["id"] == orphan.id)
    assert node["level"] == 0
    assert node["parent_id"] == 424242

    db_session_fixture.delete(orphan)
    db_session_fixture.commit()


def test_drawer_only_contains_granted_menus(client: TestClient, make_admin):
    admin_headers = {"Authorization": f"Bearer {_get_token(client)}"}
    granted = _create_menu(client, admin_headers, name="授权菜单")
    hidden = _create_menu(client, admin_headers, name="未授权菜单")
    unused = _create_menu(client, admin_headers, name="停用菜单", is_using=False)

    put_resp = client.put(
        "/api/v1/admin/menu-authorities/7",
        headers=admin_headers,
        json={"menu_ids": [granted["id"], unused["id"]]},
    )
    assert put_resp.status_code == 200

    make_admin("drawer_operator", "operator123", authority=7)
    headers = {"Authorization": f"Bearer {_get_token(client, 'drawer_operator', 'operator123')}"}
    drawer = client.get("/api/v1/menus/drawer", headers=headers).json()["data"]
    drawer_ids = [node["id"] for node in drawer]
    assert 1 in drawer_ids
    assert granted["id"] in drawer_ids
    assert hidden["id"] not in drawer_ids
    assert unused["id"] not in drawer_ids

    super_drawer = client.get("/api/v1/menus/drawer", headers=admin_headers).json()["data"]
    super_ids = [node["id"] for node in super_drawer]
    assert granted["id"] in super_ids and hidden["id"] in super_ids
    assert unused["id"] not in super_ids


def test_explicit_null_for_required_columns_is_rejected(client: TestClient):
    headers = {"Authorization": f"Bearer {_get_token(client)}"}
    menu = _create_menu(client, headers, name="空值菜单", display_order=3)

    for field_name in ("is_using", "display_order"):
        response = client.put(f"/api/v1/menus/{menu['id']}", headers=headers, json={field_name: None})
        assert response.status_code == 422
        assert response.json()["msg"] == "请求参数验证失败"

    detail = client.get(f"/api/v1/menus/{menu['id']}", headers=headers).json()["data"]
    assert detail["is_using"] is True
    assert detail["display_order"] == 3


def test_disabled_group_hides_its_children_in_drawer(client: TestClient, make_admin, monkeypatch):
    warnings = []
    monkeypatch.setattr(
        menu_service_module.logger, "warning", lambda msg, *args: warnings.append(msg % args)
    )

    admin_headers = {"Authorization": f"Bearer {_get_token(client)}"}
    group = _create_menu(client, admin_headers, name="停用分组", type="G")
    child = _create_menu(client, admin_headers, name="分组子菜单", parent_id=group["id"])
    grandchild = _create_menu(client, admin_headers, name="分组孙菜单", parent_id=child["id"])

    update_resp = client.put(f"/api/v1/menus/{group['id']}", headers=admin_headers, json={"is_using": False})
    assert update_resp.status_code == 200

    client.put(
        "/api/v1/admin/menu-authorities/8",
        headers=admin_headers,
        json={"menu_ids": [group["id"], child["id"], grandchild["id"]]},
    )
    make_admin("disabled_group_operator", "operator123", authority=8)
    operator_headers = {"Authorization": f"Bearer {_get_token(client, 'disabled_group_operator', 'operator123')}"}

    hidden = {group["id"], child["id"], grandchild["id"]}
    for headers in (admin_headers, operator_headers):
        drawer = client.get("/api/v1/menus/drawer", headers=headers).json()["data"]
        assert _find(drawer, 1) is not None
        for menu_id in hidden:
            assert _find(drawer, menu_id) is None
    assert not any("orphan" in message for message in warnings)

    # 管理视图仍完整展示停用分组及其下级
    tree = client.get("/api/v1/menus", headers=admin_headers).json()["data"]
    group_node = _find(tree, group["id"])
    assert group_node["level"] == 0
    assert [node["id"] for node in group_node["children"]] == [child["id"]]
