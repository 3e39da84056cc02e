# pos_api/models/job_positions.py

from enum import IntFlag

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from pos_api.database import Base


class AccessFlag(IntFlag):
    NONE = 0x00

    READ_EMPLOYEES = 0x01
    READ_INVENTORY = 0x02
    READ_ORDERS = 0x04
    READ_MENU = 0x08
    READ_ALL = 0x0F

    WRITE_EMPLOYEES = 0x10
    WRITE_INVENTORY = 0x20
    WRITE_ORDERS = 0x40
    WRITE_MENU = 0x80
    WRITE_ALL = 0xF0

    # Cashier: read inventory/orders/menu, write orders
    BASIC_ORDERING = 0x4E
    ALL = 0xFF


# Single-bit flags, in the order they are reported to clients
PERMISSIONS = [
    AccessFlag.READ_EMPLOYEES,
    AccessFlag.READ_INVENTORY,
    AccessFlag.READ_ORDERS,
    AccessFlag.READ_MENU,
    AccessFlag.WRITE_EMPLOYEES,
    AccessFlag.WRITE_INVENTORY,
    AccessFlag.WRITE_ORDERS,
    AccessFlag.WRITE_MENU,
]


class JobPosition(Base):
    __tablename__ = "job_positions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    access = Column(Integer, nullable=False, default=int(AccessFlag.NONE))

    # employees keep their position id; the RESTRICT key refuses the delete
    employees = relationship("Employee", back_populates="job_position", passive_deletes="all")

    def has_access(self, flag: int) -> bool:
        return (self.access & flag) != 0

    @property
    def permissions(self) -> list[str]:
        return [flag.name for flag in PERMISSIONS if self.has_access(flag)]
