# pos_api/routers/employees.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload

from pos_api.database import get_db, transaction
from pos_api.models.employees import Employee
from pos_api.schemas.employee import (
    EmployeeCheckResponse,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeSummary,
    EmployeeUpdate,
)
from pos_api.services.employees import (
    bulk_create_employees,
    delete_employee,
    find_employee_by_email,
    update_employee,
)

router = APIRouter(prefix="/employees", tags=["Employees"])


# =========================================================
# CHECK EMPLOYEE (kiosk / manager sign-in gate)
# =========================================================
@router.get("/check", response_model=EmployeeCheckResponse, response_model_exclude_none=True)
def check_employee(
    email: str | None = Query(None),
    db: Session = Depends(get_db),
):
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")

    employee = find_employee_by_email(db, email)
    if not employee:
        return EmployeeCheckResponse(exists=False, message="Employee not found in the database")

    return EmployeeCheckResponse(
        exists=True,
        employee=EmployeeSummary(
            id=employee.id,
            name=employee.name,
            email=employee.email,
            job_position_id=employee.job_position_id,
            permissions=employee.job_position.permissions if employee.job_position else [],
        ),
    )


@router.get("", response_model=list[EmployeeResponse])
def list_employees(db: Session = Depends(get_db)):
    return (
        db.query(Employee)
        .options(joinedload(Employee.job_position))
        .filter(Employee.live())
        .order_by(Employee.id)
        .all()
    )


@router.post("", response_model=list[EmployeeResponse], status_code=status.HTTP_201_CREATED)
def create_employees(
    employees_data: list[EmployeeCreate],
    db: Session = Depends(get_db),
):
    with transaction(db):
        employees = bulk_create_employees(db, [e.model_dump() for e in employees_data])
    return employees


@router.put("/{employee_id}", response_model=EmployeeResponse)
def edit_employee(
    employee_id: int,
    employee_data: EmployeeUpdate,
    db: Session = Depends(get_db),
):
    with transaction(db):
        employee = update_employee(db, employee_id, employee_data.model_dump(exclude_unset=True))
    return employee


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_employee(employee_id: int, db: Session = Depends(get_db)):
    with transaction(db):
        delete_employee(db, employee_id)
