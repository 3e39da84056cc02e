# pos_api/models/employees.py

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from pos_api.database import Base
from pos_api.models.mixins import SoftDeleteMixin


class Employee(SoftDeleteMixin, Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=True)

    start_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    job_position_id = Column(
        Integer,
        ForeignKey("job_positions.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    thumbnail_id = Column(Integer, ForeignKey("thumbnails.id", ondelete="SET NULL"), nullable=True)

    job_position = relationship("JobPosition", back_populates="employees")
    thumbnail = relationship("Thumbnail")
    orders = relationship("Order", back_populates="employee")

    __table_args__ = (
        CheckConstraint("name <> ''", name="ck_employee_name_not_empty"),
    )
