import pytest

from populate_db import SAMPLE_CUSTOMERS, SAMPLE_EMPLOYEES, load_sample_data


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    yield session
    session.close()


def test_sample_data_fills_empty_tables_once(db, client, admin_headers):
    assert load_sample_data(db) == {"customers": len(SAMPLE_CUSTOMERS), "employees": len(SAMPLE_EMPLOYEES)}
    assert load_sample_data(db) == {"customers": 0, "employees": 0}

    customers = client.get("/api/customers", headers=admin_headers).json()
    employees = client.get("/api/employees", headers=admin_headers).json()
    assert len(customers) == len(SAMPLE_CUSTOMERS)
    assert {e["employee_id"] for e in employees} == {"EMP001", "EMP002", "EMP003", "EMP004", "EMP005"}
    assert all(c["created_by_name"] == "System Administrator" for c in customers)
