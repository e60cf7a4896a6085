from sqlalchemy import select

from app.data.models import CartItemModel, ProfileModel, UserRoleModel


def test_me_without_profile_uses_identity(client, alice_headers):
    resp = client.get("/users/me", headers=alice_headers)

    assert resp.status_code == 200
    assert resp.json()["id"] == "user-alice"
    assert resp.json()["email"] == "alice@test.com"
    assert resp.json()["roles"] == []


def test_update_me_creates_profile(client, db, alice_headers):
    resp = client.put("/users/me", json={"full_name": "Alice Smith", "phone": "600100200"}, headers=alice_headers)

    assert resp.status_code == 200
    assert resp.json()["full_name"] == "Alice Smith"

    again = client.put("/users/me", json={"address": "Main St 1"}, headers=alice_headers).json()
    assert again["full_name"] == "Alice Smith"
    assert again["address"] == "Main St 1"

    db.expire_all()
    assert db.get(ProfileModel, "user-alice").phone == "600100200"


def test_admin_lists_users_with_roles(client, admin_headers, alice_headers):
    client.put("/users/me", json={"full_name": "Alice"}, headers=alice_headers)
    client.put("/users/me", json={"full_name": "Admin"}, headers=admin_headers)

    users = {u["id"]: u for u in client.get("/users", headers=admin_headers).json()}

    assert users["admin-1"]["roles"] == ["admin"]
    assert users["user-alice"]["roles"] == []


def test_user_list_is_admin_only(client, alice_headers):
    assert client.get("/users", headers=alice_headers).status_code == 403


def test_get_unknown_user_is_404(client, admin_headers):
    assert client.get("/users/nobody", headers=admin_headers).status_code == 404


def test_replace_roles(client, db, admin_headers):
    resp = client.put("/users/user-alice/roles", json={"roles": ["admin", "user"]}, headers=admin_headers)
    assert resp.status_code == 200

    client.put("/users/user-alice/roles", json={"roles": ["user"]}, headers=admin_headers)

    db.expire_all()
    roles = db.execute(select(UserRoleModel.role).where(UserRoleModel.user_id == "user-alice")).scalars().all()
    assert roles == ["user"]


def test_invalid_role_is_400(client, db, admin_headers):
    resp = client.put("/users/user-alice/roles", json={"roles": ["superuser"]}, headers=admin_headers)

    assert resp.status_code == 400
    assert db.execute(select(UserRoleModel).where(UserRoleModel.user_id == "user-alice")).first() is None


def test_new_admin_gets_admin_access(client, admin_headers, alice_headers):
    assert client.get("/analytics/products", headers=alice_headers).status_code == 403

    client.put("/users/user-alice/roles", json={"roles": ["admin"]}, headers=admin_headers)

    assert client.get("/analytics/products", headers=alice_headers).status_code == 200


def test_delete_user_removes_account_and_local_data(client, db, admin_headers, alice_headers, identity_client, make_product):
    product = make_product()
    client.put("/users/me", json={"full_name": "Alice"}, headers=alice_headers)
    client.post("/cart", json={"product_id": product.id}, headers=alice_headers)

    resp = client.delete("/users/user-alice", headers=admin_headers)

    assert resp.status_code == 200
    assert identity_client.deleted == ["user-alice"]
    db.expire_all()
    assert db.get(ProfileModel, "user-alice") is None
    assert db.execute(select(CartItemModel).where(CartItemModel.user_id == "user-alice")).first() is None
