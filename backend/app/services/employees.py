"""Employee directory page services."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.models.employee import Employee
from app.schemas.employee import EmployeeForm
from app.services.gateway import TableGateway


def list_employees(db: Session) -> list[Employee]:
    """Full employee list, newest first."""

    return TableGateway(db, Employee).list_all()


def filter_employees(employees: list[Employee], query: str | None) -> list[Employee]:
    """Case-insensitive substring match on name, email or department."""

    needle = (query or "").strip().lower()
    if not needle:
        return list(employees)
    return [
        employee
        for employee in employees
        if needle in employee.full_name.lower()
        or needle in employee.email.lower()
        or needle in (employee.department or "").lower()
    ]


def create_employee(db: Session, form: EmployeeForm) -> Employee:
    return TableGateway(db, Employee).create(form.model_dump())


def update_employee(db: Session, employee_id: str, form: EmployeeForm) -> Employee:
    return TableGateway(db, Employee).update(employee_id, form.model_dump())


def delete_employee(db: Session, employee_id: str) -> None:
    TableGateway(db, Employee).delete(employee_id)
