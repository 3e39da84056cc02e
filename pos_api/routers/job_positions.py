# pos_api/routers/job_positions.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from pos_api.core.errors import ValidationFailure
from pos_api.database import get_db, transaction
from pos_api.models.employees import Employee
from pos_api.models.job_positions import JobPosition
from pos_api.schemas.job_position import JobPositionCreate, JobPositionResponse

router = APIRouter(prefix="/job-positions", tags=["Job Positions"])


@router.get("", response_model=list[JobPositionResponse])
def list_job_positions(db: Session = Depends(get_db)):
    return db.query(JobPosition).order_by(JobPosition.id).all()


@router.post("", response_model=JobPositionResponse, status_code=status.HTTP_201_CREATED)
def create_job_position(
    position_data: JobPositionCreate,
    db: Session = Depends(get_db),
):
    existing = db.query(JobPosition).filter(JobPosition.name == position_data.name).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Job position with this name already exists",
        )

    position = JobPosition(name=position_data.name, access=position_data.access)
    with transaction(db):
        db.add(position)
    db.refresh(position)
    return position


@router.delete("/{position_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job_position(position_id: int, db: Session = Depends(get_db)):
    position = db.query(JobPosition).filter(JobPosition.id == position_id).first()
    if not position:
        raise HTTPException(status_code=404, detail="Job position not found")

    holders = db.query(Employee).filter(Employee.job_position_id == position_id).count()
    if holders:
        raise ValidationFailure(f"Job position {position.name!r} is still held by {holders} employee(s)")

    with transaction(db):
        db.delete(position)
