# employee_api/routers/employees.py
import re
from datetime import date, datetime

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse

from employee_api.core.context import RequestContext
from employee_api.core.errors import ValidationError
from employee_api.schemas import EmployeeRecord, Envelope, is_valid_email
from employee_api.service import EmployeeServiceProtocol

router = APIRouter(prefix="/employees", tags=["Employees"])

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
ID_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
# mismo rango que un entero de 64 bits
ID_MIN, ID_MAX = -(2 ** 63), 2 ** 63 - 1


# -------- dependencias --------
def get_employee_service(request: Request) -> EmployeeServiceProtocol:
    return request.app.state.employee_service


def get_request_context(request: Request) -> RequestContext:
    return RequestContext(timeout=request.app.state.settings.CONTEXT_TIMEOUT)


# -------- parseo --------
def _parse_id(raw: str) -> int:
    if not ID_PATTERN.fullmatch(raw):
        raise ValidationError(f"invalid literal for int() with base 10: {raw!r}")
    value = int(raw)
    if not ID_MIN <= value <= ID_MAX:
        raise ValidationError(f"{raw!r}: value out of range")
    return value


def _parse_date(raw: str) -> date:
    try:
        parsed = datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError as err:
        raise ValidationError(f"invalid parsing date, err:{err}") from err
    # strptime acepta "2022-1-5"; el formato es de ancho fijo
    if not DATE_PATTERN.fullmatch(raw):
        raise ValidationError(
            f"invalid parsing date, err:time data {raw!r} does not match format '{DATE_FORMAT}'"
        )
    return parsed


def _ok(data=None) -> JSONResponse:
    return JSONResponse(content=Envelope.success(data).render())


# -------- endpoints --------
@router.get("", summary="Listar empleados")
def get_all_employee(
    ctx: RequestContext = Depends(get_request_context),
    service: EmployeeServiceProtocol = Depends(get_employee_service),
):
    return _ok(service.get_all_employee(ctx))


@router.get("/{employee_id}", summary="Empleado por id")
def get_employee_by_id(
    employee_id: str,
    ctx: RequestContext = Depends(get_request_context),
    service: EmployeeServiceProtocol = Depends(get_employee_service),
):
    return _ok(service.get_by_id(ctx, _parse_id(employee_id)))


@router.post("", summary="Registrar empleado (form)")
def register(
    first_name: str = Form(""),
    last_name: str = Form(""),
    email: str = Form(""),
    hire_date: str = Form(""),
    ctx: RequestContext = Depends(get_request_context),
    service: EmployeeServiceProtocol = Depends(get_employee_service),
):
    employee = EmployeeRecord(first_name=first_name, last_name=last_name, email=email)
    employee.validate_new(hire_date)
    employee.hire_date = _parse_date(hire_date)

    service.register(ctx, employee)
    return _ok()


@router.put("/{employee_id}", summary="Actualizar empleado (parcial, form)")
def update(
    employee_id: str,
    first_name: str = Form(""),
    last_name: str = Form(""),
    email: str = Form(""),
    hire_date: str = Form(""),
    ctx: RequestContext = Depends(get_request_context),
    service: EmployeeServiceProtocol = Depends(get_employee_service),
):
    employee = EmployeeRecord(
        id=_parse_id(employee_id),
        first_name=first_name,
        last_name=last_name,
        email=email,
    )
    if hire_date:
        employee.hire_date = _parse_date(hire_date)
    if email and not is_valid_email(email):
        raise ValidationError("please input valid email")

    service.update(ctx, employee)
    return _ok()


@router.delete("/{employee_id}", summary="Eliminar empleado")
def delete(
    employee_id: str,
    ctx: RequestContext = Depends(get_request_context),
    service: EmployeeServiceProtocol = Depends(get_employee_service),
):
    service.delete(ctx, _parse_id(employee_id))
    return _ok()
