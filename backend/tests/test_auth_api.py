from models.cart import Cart
from models.users import User


def test_register_creates_cart_and_first_user_is_admin(client, db_session):
    first = client.post("/register", json={"name": "Ann", "email": "Ann@Example.com", "password": "pw-1"})
    second = client.post("/register", json={"name": "Ben", "email": "ben@example.com", "password": "pw-2"})

    assert first.status_code == 201
    assert first.json()["email"] == "ann@example.com"
    assert first.json()["is_admin"] is True
    assert second.json()["is_admin"] is False
    assert "password_hash" not in first.json()
    assert db_session.query(Cart).count() == 2


def test_register_duplicate_email_conflicts(client):
    client.post("/register", json={"name": "Ann", "email": "ann@example.com", "password": "pw"})

    response = client.post("/register", json={"name": "Ann 2", "email": "ANN@example.com", "password": "pw"})

    assert response.status_code == 409


def test_register_requires_all_fields(client):
    response = client.post("/register", json={"email": "ann@example.com", "password": "pw"})
    assert response.status_code == 422


def test_login_and_me(client, customer):
    bad = client.post("/login", json={"email": "alice@example.com", "password": "wrong"})
    assert bad.status_code == 401

    response = client.post("/login", json={"email": "alice@example.com", "password": "alice-pass"})
    assert response.status_code == 200
    token = response.json()["access_token"]
    assert response.json()["user"]["id"] == customer.id

    me = client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["email"] == "alice@example.com"
    assert client.get("/me").status_code == 401


def test_inactive_user_cannot_log_in(client, db_session, customer):
    customer.is_active = False
    db_session.commit()

    response = client.post("/login", json={"email": "alice@example.com", "password": "alice-pass"})

    assert response.status_code == 403


def test_admin_user_management(client, db_session, admin_user, admin_headers, customer_headers):
    assert client.get("/users", headers=customer_headers).status_code == 403

    created = client.post(
        "/users",
        json={"name": "Carl", "email": "carl@example.com", "password": "pw", "is_admin": False},
        headers=admin_headers,
    )
    assert created.status_code == 201
    carl_id = created.json()["id"]
    assert db_session.query(Cart).filter_by(user_id=carl_id).count() == 1

    conflict = client.post(
        "/users", json={"name": "Carl", "email": "carl@example.com", "password": "pw"}, headers=admin_headers
    )
    assert conflict.status_code == 409

    updated = client.put(f"/users/{carl_id}", json={"is_active": False, "name": "Carl B"}, headers=admin_headers)
    assert updated.json()["is_active"] is False
    assert updated.json()["name"] == "Carl B"
    assert updated.json()["email"] == "carl@example.com"

    taken = client.put(f"/users/{carl_id}", json={"email": "admin@example.com"}, headers=admin_headers)
    assert taken.status_code == 409

    emails = [u["email"] for u in client.get("/users", headers=admin_headers).json()]
    assert "carl@example.com" in emails

    assert client.delete(f"/users/{admin_user.id}", headers=admin_headers).status_code == 400
    assert client.delete(f"/users/{carl_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/users/{carl_id}", headers=admin_headers).status_code == 404
    db_session.expire_all()
    assert db_session.get(User, carl_id) is None
    assert db_session.query(Cart).filter_by(user_id=carl_id).count() == 0


def test_audit_log_is_admin_only(client, admin_headers, customer_headers):
    client.post("/categories", json={"name": "Games"}, headers=admin_headers)

    assert client.get("/logs", headers=customer_headers).status_code == 403
    entries = client.get("/logs", params={"resource": "categories"}, headers=admin_headers).json()
    assert entries[0]["action"] == "CATEGORY_CREATE"
    assert entries[0]["status"] == "SUCCESS"
