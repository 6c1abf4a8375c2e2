import threading

from conftest import bearer, login
from models.users import User
from schemas.user import UserCreate
from services import users as user_service
from utils.errors import DuplicateEntry

NEW_USER = {
    "username": "sales02",
    "email": "sales02@company.com",
    "password": "s3cret!",
    "role": "sales",
    "full_name": "Second Sales",
    "phone": "081-000-0000",
    "department": "Sales",
}


def create(client, headers, **overrides):
    return client.post("/api/users", json={**NEW_USER, **overrides}, headers=headers)


def test_create_user_hides_password_hash(client, admin_headers):
    resp = create(client, admin_headers)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["username"] == "sales02"
    assert body["role"] == "sales"
    assert "password" not in body and "password_hash" not in body

    assert login(client, "sales02", "s3cret!")["user"]["id"] == body["id"]


def test_list_users_never_exposes_hashes(client, admin_headers):
    users = client.get("/api/users", headers=admin_headers).json()
    assert users
    assert all("password_hash" not in u for u in users)


def test_get_single_user(client, admin_headers):
    created = create(client, admin_headers).json()
    resp = client.get(f"/api/users/{created['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "sales02@company.com"
    assert client.get("/api/users/9999", headers=admin_headers).status_code == 404


def test_duplicate_username_is_rejected(client, admin_headers):
    assert create(client, admin_headers).status_code == 201
    resp = create(client, admin_headers, email="other@company.com")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Username or email already exists", "field": "username"}


def test_duplicate_email_is_rejected(client, admin_headers):
    resp = create(client, admin_headers, email="admin@company.com")
    assert resp.status_code == 400
    assert resp.json()["field"] == "email"

    users = client.get("/api/users", headers=admin_headers).json()
    assert [u["username"] for u in users].count("sales02") == 0


def test_create_user_requires_fields(client, admin_headers):
    resp = client.post("/api/users", json={"username": "x"}, headers=admin_headers)
    assert resp.status_code == 400
    assert set(resp.json()["fields"]) == {"email", "password", "role", "full_name"}


def test_create_user_rejects_unknown_role(client, admin_headers):
    resp = create(client, admin_headers, role="manager")
    assert resp.status_code == 400
    assert resp.json()["fields"] == ["role"]


def test_update_without_password_keeps_hash(client, admin_headers):
    user = create(client, admin_headers).json()
    resp = client.put(f"/api/users/{user['id']}", json={"role": "hr", "department": "HR"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["role"] == "hr"
    assert resp.json()["full_name"] == "Second Sales"

    data = login(client, "sales02", "s3cret!")
    assert data["user"]["role"] == "hr"


def test_update_with_password_rehashes(client, admin_headers):
    user = create(client, admin_headers).json()
    resp = client.put(f"/api/users/{user['id']}", json={"password": "n3w-pass"}, headers=admin_headers)
    assert resp.status_code == 200

    old = client.post("/api/login", json={"username": "sales02", "password": "s3cret!"})
    assert old.status_code == 401
    assert login(client, "sales02", "n3w-pass")["user"]["username"] == "sales02"


def test_update_to_taken_email_is_duplicate(client, admin_headers):
    user = create(client, admin_headers).json()
    resp = client.put(f"/api/users/{user['id']}", json={"email": "hr@company.com"}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "email"


def test_update_missing_user_is_not_found(client, admin_headers):
    resp = client.put("/api/users/9999", json={"full_name": "Nobody"}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_delete_user(client, admin_headers):
    user = create(client, admin_headers).json()
    resp = client.delete(f"/api/users/{user['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert client.get(f"/api/users/{user['id']}", headers=admin_headers).status_code == 404
    assert client.delete(f"/api/users/{user['id']}", headers=admin_headers).status_code == 404


def test_admin_cannot_delete_own_account(client):
    data = login(client, "admin", "admin123")
    resp = client.delete(f"/api/users/{data['user']['id']}", headers=bearer(data["token"]))
    assert resp.status_code == 400
    assert resp.json()["error"] == "You cannot delete your own account"


def test_deleting_creator_nulls_provenance(client, admin_headers):
    user = create(client, admin_headers).json()
    seller = bearer(login(client, "sales02", "s3cret!")["token"])
    customer = client.post("/api/customers", json={"customer_name": "ABC Company"}, headers=seller).json()
    assert customer["created_by"] == user["id"]
    assert customer["created_by_name"] == "Second Sales"

    assert client.delete(f"/api/users/{user['id']}", headers=admin_headers).status_code == 200

    customers = client.get("/api/customers", headers=admin_headers).json()
    assert [c["customer_name"] for c in customers] == ["ABC Company"]
    assert customers[0]["created_by"] is None
    assert customers[0]["created_by_name"] is None


def test_concurrent_duplicate_username_only_one_wins(app, client):
    barrier = threading.Barrier(2)
    outcomes = []
    lock = threading.Lock()

    def submit(n):
        db = app.state.session_factory()
        try:
            payload = UserCreate(
                username="racer",
                email=f"racer{n}@company.com",
                password="s3cret!",
                role="sales",
                full_name=f"Racer {n}",
            )
            barrier.wait()
            user_service.create_user(db, app.state.hasher, payload)
            result = "created"
        except DuplicateEntry as exc:
            assert exc.field == "username"
            result = "duplicate"
        finally:
            db.close()
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=submit, args=(n,)) for n in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert sorted(outcomes) == ["created", "duplicate"]

    db = app.state.session_factory()
    try:
        assert db.query(User).filter(User.username == "racer").count() == 1
    finally:
        db.close()
