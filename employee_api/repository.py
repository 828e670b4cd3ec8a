# employee_api/repository.py
import logging
from typing import List, Protocol

from sqlalchemy import Insert, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from employee_api.core.context import RequestContext
from employee_api.core.errors import NO_ROWS_MESSAGE, DataError, NotFoundError
from employee_api.models import Employee
from employee_api.schemas import EmployeeRecord

logger = logging.getLogger(__name__)

employees = Employee.__table__

COLUMNS = (
    employees.c.id,
    employees.c.first_name,
    employees.c.last_name,
    employees.c.email,
    employees.c.hire_date,
)


class EmployeeRepositoryProtocol(Protocol):
    def get(self, ctx: RequestContext) -> List[EmployeeRecord]: ...
    def get_by_id(self, ctx: RequestContext, employee_id: int) -> EmployeeRecord: ...
    def store(self, ctx: RequestContext, employee: EmployeeRecord) -> EmployeeRecord: ...
    def update(self, ctx: RequestContext, employee: EmployeeRecord) -> None: ...
    def delete(self, ctx: RequestContext, employee_id: int) -> None: ...


def _log(operation: str, err: Exception) -> None:
    logger.error("Employee - Repository|err when %s, err:%s", operation, err)


def _fail(operation: str, err: SQLAlchemyError) -> DataError:
    _log(operation, err)
    orig = getattr(err, "orig", None)
    return DataError(str(orig if orig is not None else err))


class EmployeeRepository:
    """SQL access to the ``employees`` table, one session per call."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def get(self, ctx: RequestContext) -> List[EmployeeRecord]:
        try:
            ctx.check()
            with self.session_factory() as db:
                rows = db.execute(select(*COLUMNS)).all()
        except DataError as err:
            _log("select employees", err)
            raise
        except SQLAlchemyError as err:
            raise _fail("select employees", err) from err
        return [EmployeeRecord.model_validate(dict(r._mapping)) for r in rows]

    def get_by_id(self, ctx: RequestContext, employee_id: int) -> EmployeeRecord:
        try:
            ctx.check()
            with self.session_factory() as db:
                row = db.execute(
                    select(*COLUMNS).where(employees.c.id == employee_id)
                ).first()
        except DataError as err:
            _log("select employee by id", err)
            raise
        except SQLAlchemyError as err:
            raise _fail("select employee by id", err) from err
        if row is None:
            raise NotFoundError(NO_ROWS_MESSAGE)
        return EmployeeRecord.model_validate(dict(row._mapping))

    def store(self, ctx: RequestContext, employee: EmployeeRecord) -> EmployeeRecord:
        stmt = insert(employees).values(
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
            hire_date=employee.hire_date,
        )
        _, pk = self._write(ctx, "insert employee", stmt)
        return employee.model_copy(update={"id": pk[0]})

    def update(self, ctx: RequestContext, employee: EmployeeRecord) -> None:
        stmt = (
            update(employees)
            .where(employees.c.id == employee.id)
            .values(
                first_name=employee.first_name,
                last_name=employee.last_name,
                email=employee.email,
                hire_date=employee.hire_date,
            )
        )
        rowcount, _ = self._write(ctx, "update employee", stmt)
        if rowcount == 0:
            raise NotFoundError(NO_ROWS_MESSAGE)

    def delete(self, ctx: RequestContext, employee_id: int) -> None:
        stmt = delete(employees).where(employees.c.id == employee_id)
        rowcount, _ = self._write(ctx, "delete employee", stmt)
        if rowcount == 0:
            raise NotFoundError(NO_ROWS_MESSAGE)

    def _write(self, ctx: RequestContext, operation: str, stmt):
        # the context is re-checked before commit so an expired request never persists
        with self.session_factory() as db:
            try:
                ctx.check()
                result = db.execute(stmt)
                rowcount = result.rowcount
                pk = result.inserted_primary_key if isinstance(stmt, Insert) else None
                ctx.check()
                db.commit()
            except DataError as err:
                db.rollback()
                _log(operation, err)
                raise
            except SQLAlchemyError as err:
                db.rollback()
                raise _fail(operation, err) from err
        return rowcount, pk
