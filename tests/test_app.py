"""End to end: migrations at startup, real repository on in-memory SQLite."""
import logging

from fastapi.testclient import TestClient

from employee_api.main import create_app, log_routes

VALID = {
    "first_name": "John",
    "last_name": "Doe",
    "email": "johndoe@example.com",
    "hire_date": "2022-12-12",
}


def test_crud_lifecycle(client):
    assert client.get("/employees").json() == {"status": "success", "data": []}

    assert client.post("/employees", data=VALID).status_code == 200
    listed = client.get("/employees").json()["data"]
    assert len(listed) == 1
    employee_id = listed[0]["id"]

    res = client.get(f"/employees/{employee_id}")
    assert res.status_code == 200
    assert res.json()["data"] == {"id": employee_id, **VALID}

    res = client.put(f"/employees/{employee_id}", data={"first_name": "Jane", "email": "jane@example.com"})
    assert res.status_code == 200
    assert client.get(f"/employees/{employee_id}").json()["data"] == {
        **VALID,
        "id": employee_id,
        "first_name": "Jane",
        "email": "jane@example.com",
    }

    assert client.delete(f"/employees/{employee_id}").status_code == 200
    for _ in range(2):
        res = client.delete(f"/employees/{employee_id}")
        assert res.status_code == 404
        assert res.json() == {"status": "fail", "data": "no rows in result set"}


def test_get_missing_employee_is_404(client):
    res = client.get("/employees/1")
    assert res.status_code == 404
    assert res.json() == {"status": "fail", "data": "no rows in result set"}


def test_update_missing_employee_is_404(client):
    res = client.put("/employees/1", data={"last_name": "Smith"})
    assert res.status_code == 404


def test_expired_request_deadline_is_500_and_nothing_is_written(settings):
    app = create_app(settings.model_copy(update={"CONTEXT_TIMEOUT": 0}))
    with TestClient(app) as c:
        res = c.post("/employees", data=VALID)
        assert res.status_code == 500
        assert res.json() == {"status": "fail", "data": "context deadline exceeded"}

        app.state.settings = settings
        assert c.get("/employees").json()["data"] == []


def test_health_and_info(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/health/ready").json() == {"status": "ready"}
    info = client.get("/info").json()
    assert info["name"] == "Employee API"
    assert info["engine"] == "SQLAlchemy + sqlite"


def test_root_redirects_to_docs(client):
    res = client.get("/", follow_redirects=False)
    assert res.status_code in (302, 307)
    assert res.headers["location"] == "/docs"


def test_log_routes_tolerates_entries_without_path(app, caplog):
    class IncludedRouter:
        pass

    app.router.routes.append(IncludedRouter())
    caplog.set_level(logging.DEBUG, logger="employee_api.main")

    log_routes(app)

    routes = [r.getMessage() for r in caplog.records if r.getMessage().startswith("ROUTE:")]
    assert any("/employees" in m for m in routes)
    assert any("IncludedRouter" in m for m in routes)


def test_data_error_is_logged_once(settings, caplog):
    app = create_app(settings.model_copy(update={"CONTEXT_TIMEOUT": 0}))
    with TestClient(app) as c:
        caplog.clear()
        caplog.set_level(logging.INFO)
        res = c.get("/employees")

    assert res.status_code == 500
    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert len(errors) == 1
    assert errors[0].getMessage().startswith("Employee - Repository|err when select employees")
