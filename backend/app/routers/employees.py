"""Employee directory routes (administrators only)."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from app.db.dependencies import get_db
from app.routers.auth import require_admin
from app.schemas.common import ApiResponse, DeleteResult
from app.schemas.employee import EmployeeForm, EmployeeRead
from app.services.employees import (
    create_employee,
    delete_employee,
    filter_employees,
    list_employees,
    update_employee,
)

router = APIRouter(prefix="/employees", dependencies=[Depends(require_admin)])

ConfirmParam = Query(default=False, description="Must be true to delete")


@router.get("", response_model=ApiResponse[list[EmployeeRead]])
def get_employees(
    q: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ApiResponse[list[EmployeeRead]]:
    """Employees newest first, optionally narrowed by a search term."""

    employees = filter_employees(list_employees(db), q)
    return ApiResponse(data=[EmployeeRead.model_validate(employee) for employee in employees])


@router.post("", response_model=ApiResponse[EmployeeRead], status_code=201)
def post_employee(payload: EmployeeForm, db: Session = Depends(get_db)) -> ApiResponse[EmployeeRead]:
    employee = create_employee(db, payload)
    return ApiResponse(data=EmployeeRead.model_validate(employee), message="Employee created successfully")


@router.put("/{employee_id}", response_model=ApiResponse[EmployeeRead])
def put_employee(
    payload: EmployeeForm,
    employee_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
) -> ApiResponse[EmployeeRead]:
    employee = update_employee(db, employee_id, payload)
    return ApiResponse(data=EmployeeRead.model_validate(employee), message="Employee updated successfully")


@router.delete("/{employee_id}", response_model=ApiResponse[DeleteResult])
def remove_employee(
    employee_id: str = Path(..., min_length=1),
    confirm: bool = ConfirmParam,
    db: Session = Depends(get_db),
) -> ApiResponse[DeleteResult]:
    if not confirm:
        raise HTTPException(status_code=428, detail="Confirm deletion of this employee")
    delete_employee(db, employee_id)
    return ApiResponse(data=DeleteResult(id=employee_id, deleted=True), message="Employee deleted successfully")
