# employee_api/service.py
from typing import List, Protocol

from employee_api.core.context import RequestContext
from employee_api.repository import EmployeeRepositoryProtocol
from employee_api.schemas import EmployeeRecord

MERGEABLE_FIELDS = ("first_name", "last_name", "email", "hire_date")


class EmployeeServiceProtocol(Protocol):
    def get_all_employee(self, ctx: RequestContext) -> List[EmployeeRecord]: ...
    def get_by_id(self, ctx: RequestContext, employee_id: int) -> EmployeeRecord: ...
    def register(self, ctx: RequestContext, employee: EmployeeRecord) -> EmployeeRecord: ...
    def update(self, ctx: RequestContext, employee: EmployeeRecord) -> EmployeeRecord: ...
    def delete(self, ctx: RequestContext, employee_id: int) -> None: ...


def merge_employee(current: EmployeeRecord, partial: EmployeeRecord) -> EmployeeRecord:
    """Overlays every supplied (non-empty) field of ``partial`` onto ``current``."""
    changes = {f: getattr(partial, f) for f in MERGEABLE_FIELDS if getattr(partial, f)}
    return current.model_copy(update=changes)


class EmployeeService:
    def __init__(self, repository: EmployeeRepositoryProtocol):
        self.repository = repository

    def get_all_employee(self, ctx: RequestContext) -> List[EmployeeRecord]:
        return self.repository.get(ctx)

    def get_by_id(self, ctx: RequestContext, employee_id: int) -> EmployeeRecord:
        return self.repository.get_by_id(ctx, employee_id)

    def register(self, ctx: RequestContext, employee: EmployeeRecord) -> EmployeeRecord:
        return self.repository.store(ctx, employee)

    def update(self, ctx: RequestContext, employee: EmployeeRecord) -> EmployeeRecord:
        current = self.repository.get_by_id(ctx, employee.id)
        merged = merge_employee(current, employee)
        self.repository.update(ctx, merged)
        return merged

    def delete(self, ctx: RequestContext, employee_id: int) -> None:
        self.repository.delete(ctx, employee_id)
