"""Shared fixtures: in-memory SQLite app, repository and a controllable fake service."""
from datetime import date

import pytest
from fastapi.testclient import TestClient

from employee_api.core.config import Settings
from employee_api.core.context import RequestContext
from employee_api.core.errors import NotFoundError, NO_ROWS_MESSAGE
from employee_api.db import Base, build_engine, build_session_factory
from employee_api.main import create_app
from employee_api.repository import EmployeeRepository
from employee_api.routers.employees import get_employee_service
from employee_api.schemas import EmployeeRecord


@pytest.fixture
def settings():
    return Settings(_env_file=None, DATABASE_URL="sqlite://", CONTEXT_TIMEOUT=5)


@pytest.fixture
def ctx():
    return RequestContext(timeout=5)


@pytest.fixture
def engine(settings):
    engine = build_engine(settings)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def repository(engine):
    return EmployeeRepository(build_session_factory(engine))


@pytest.fixture
def john():
    return EmployeeRecord(
        first_name="John",
        last_name="Doe",
        email="johndoe@example.com",
        hire_date=date(2022, 12, 12),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


class FakeService:
    """Records calls; ``results`` / ``errors`` keyed by method name drive the outcome."""

    def __init__(self):
        self.calls = []
        self.results = {}
        self.errors = {}

    def _call(self, name, *args):
        self.calls.append((name, args))
        if name in self.errors:
            raise self.errors[name]
        return self.results.get(name)

    def get_all_employee(self, ctx):
        return self._call("get_all_employee")

    def get_by_id(self, ctx, employee_id):
        return self._call("get_by_id", employee_id)

    def register(self, ctx, employee):
        return self._call("register", employee)

    def update(self, ctx, employee):
        return self._call("update", employee)

    def delete(self, ctx, employee_id):
        return self._call("delete", employee_id)


@pytest.fixture
def fake_service(app):
    service = FakeService()
    app.dependency_overrides[get_employee_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


class FakeRepository:
    """Dict-backed stand-in for EmployeeRepository."""

    def __init__(self):
        self.rows = {}
        self.next_id = 1
        self.updates = []

    def get(self, ctx):
        return list(self.rows.values())

    def get_by_id(self, ctx, employee_id):
        if employee_id not in self.rows:
            raise NotFoundError(NO_ROWS_MESSAGE)
        return self.rows[employee_id]

    def store(self, ctx, employee):
        stored = employee.model_copy(update={"id": self.next_id})
        self.rows[self.next_id] = stored
        self.next_id += 1
        return stored

    def update(self, ctx, employee):
        if employee.id not in self.rows:
            raise NotFoundError(NO_ROWS_MESSAGE)
        self.updates.append(employee)
        self.rows[employee.id] = employee

    def delete(self, ctx, employee_id):
        if self.rows.pop(employee_id, None) is None:
            raise NotFoundError(NO_ROWS_MESSAGE)


@pytest.fixture
def fake_repository():
    return FakeRepository()
