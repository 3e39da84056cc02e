# pos_api/services/employees.py

from typing import Optional

from sqlalchemy.orm import Session

from pos_api.models.employees import Employee
from pos_api.models.job_positions import JobPosition
from pos_api.services.lookup import (
    LookupCache,
    apply_changes,
    columns,
    create_thumbnails,
    get_live,
    resolve_reference,
)


def bulk_create_employees(db: Session, values: list[dict]) -> list[Employee]:
    """Create employees, resolving job positions and inline thumbnails.

    Runs inside the caller's transaction; nothing is committed here.
    """
    cache = LookupCache(db)

    job_position_ids = [
        resolve_reference(cache, JobPosition, value, "job_position_id", "job_position")
        for value in values
    ]
    thumbnail_ids = create_thumbnails(db, values)

    employees = [
        Employee(
            **columns(value, "name", "email", "start_date"),
            job_position_id=job_position_id,
            thumbnail_id=thumbnail_id,
        )
        for value, job_position_id, thumbnail_id in zip(values, job_position_ids, thumbnail_ids)
    ]

    db.add_all(employees)
    db.flush()
    return employees


def find_employee_by_email(db: Session, email: str) -> Optional[Employee]:
    return (
        db.query(Employee)
        .filter(Employee.email == email, Employee.live())
        .first()
    )


def update_employee(db: Session, employee_id: int, changes: dict) -> Employee:
    employee = get_live(db, Employee, employee_id)

    if "job_position_id" in changes or changes.get("job_position") is not None:
        employee.job_position_id = resolve_reference(
            LookupCache(db), JobPosition, changes, "job_position_id", "job_position"
        )

    apply_changes(employee, changes, "name", "email", "start_date", "thumbnail_id")
    db.flush()
    return employee


def delete_employee(db: Session, employee_id: int):
    get_live(db, Employee, employee_id).soft_delete()
    db.flush()
