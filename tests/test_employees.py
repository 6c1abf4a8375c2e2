import threading
from decimal import Decimal

from models.employee import Employee
from schemas.employee import EmployeeCreate
from services import employees as employee_service
from utils.errors import DuplicateEntry

SOMCHAI = {
    "employee_id": "EMP001",
    "first_name": "Somchai",
    "last_name": "Jaidee",
    "email": "somchai@company.com",
    "phone": "081-234-5678",
    "position": "Developer",
    "department": "IT",
    "salary": "45000.00",
    "hire_date": "2024-01-15",
}


def test_create_employee(client, hr_headers):
    resp = client.post("/api/employees", json=SOMCHAI, headers=hr_headers)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["employee_id"] == "EMP001"
    assert Decimal(str(body["salary"])) == Decimal("45000.00")
    assert body["hire_date"] == "2024-01-15"
    assert body["status"] == "active"
    assert body["created_by_name"] == "HR Officer"


def test_optional_fields_may_be_blank(client, hr_headers):
    resp = client.post(
        "/api/employees",
        json={"employee_id": "EMP005", "first_name": "Ratchanee", "last_name": "Thamngan",
              "email": "", "salary": None, "hire_date": ""},
        headers=hr_headers,
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["email"] is None
    assert body["salary"] is None
    assert body["hire_date"] is None


def test_required_fields(client, hr_headers):
    resp = client.post("/api/employees", json={"email": "x@company.com"}, headers=hr_headers)
    assert resp.status_code == 400
    assert set(resp.json()["fields"]) == {"employee_id", "first_name", "last_name"}

    resp = client.post("/api/employees", json={**SOMCHAI, "last_name": " "}, headers=hr_headers)
    assert resp.status_code == 400
    assert resp.json()["fields"] == ["last_name"]


def test_duplicate_employee_id(client, hr_headers):
    assert client.post("/api/employees", json=SOMCHAI, headers=hr_headers).status_code == 201
    resp = client.post("/api/employees", json={**SOMCHAI, "email": "other@company.com"}, headers=hr_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Employee ID or email already exists", "field": "employee_id"}


def test_duplicate_email(client, hr_headers):
    assert client.post("/api/employees", json=SOMCHAI, headers=hr_headers).status_code == 201
    resp = client.post("/api/employees", json={**SOMCHAI, "employee_id": "EMP002"}, headers=hr_headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "email"
    assert len(client.get("/api/employees", headers=hr_headers).json()) == 1


def test_employees_without_email_do_not_collide(client, hr_headers):
    for code in ("EMP010", "EMP011"):
        payload = {"employee_id": code, "first_name": "No", "last_name": "Mail"}
        assert client.post("/api/employees", json=payload, headers=hr_headers).status_code == 201


def test_concurrent_duplicate_employee_id_only_one_wins(app, client, hr_headers):
    hr_id = client.get("/api/me", headers=hr_headers).json()["id"]
    barrier = threading.Barrier(2)
    outcomes = []
    lock = threading.Lock()

    def submit(n):
        db = app.state.session_factory()
        try:
            payload = EmployeeCreate(employee_id="EMP900", first_name=f"Racer{n}", last_name="Test")
            barrier.wait()
            employee_service.create_employee(db, payload, created_by=hr_id)
            result = "created"
        except DuplicateEntry as exc:
            assert exc.field == "employee_id"
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
        assert db.query(Employee).filter(Employee.employee_id == "EMP900").count() == 1
    finally:
        db.close()


def test_update_employee(client, hr_headers, admin_headers):
    created = client.post("/api/employees", json=SOMCHAI, headers=hr_headers).json()
    resp = client.put(
        f"/api/employees/{created['id']}",
        json={"position": "Senior Developer", "salary": 52000},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["position"] == "Senior Developer"
    assert Decimal(str(body["salary"])) == Decimal("52000")
    assert body["first_name"] == "Somchai"
    assert body["created_by"] == created["created_by"]


def test_update_into_taken_employee_id(client, hr_headers):
    client.post("/api/employees", json=SOMCHAI, headers=hr_headers)
    other = client.post(
        "/api/employees",
        json={"employee_id": "EMP002", "first_name": "Somying", "last_name": "Khayan"},
        headers=hr_headers,
    ).json()
    resp = client.put(f"/api/employees/{other['id']}", json={"employee_id": "EMP001"}, headers=hr_headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "employee_id"


def test_missing_employee_is_not_found(client, hr_headers):
    resp = client.put("/api/employees/404", json={"position": "x"}, headers=hr_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Employee not found"}
    assert client.delete("/api/employees/404", headers=hr_headers).status_code == 404


def test_delete_employee(client, hr_headers):
    created = client.post("/api/employees", json=SOMCHAI, headers=hr_headers).json()
    resp = client.delete(f"/api/employees/{created['id']}", headers=hr_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Employee deleted successfully"}
    assert client.get("/api/employees", headers=hr_headers).json() == []


def test_list_employees_newest_first(client, hr_headers):
    for code in ("EMP101", "EMP102", "EMP103"):
        client.post("/api/employees", json={"employee_id": code, "first_name": "A", "last_name": "B"}, headers=hr_headers)
    codes = [e["employee_id"] for e in client.get("/api/employees", headers=hr_headers).json()]
    assert codes == ["EMP103", "EMP102", "EMP101"]
