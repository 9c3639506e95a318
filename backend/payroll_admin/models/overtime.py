"""
Overtime request model.
"""

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from ..database import Base


class OvertimeStatus(str, enum.Enum):
    """Approval state of an overtime request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class OvertimeRequest(Base):
    """SQLAlchemy model for a filed overtime request.

    ``end_time``, ``total_hours`` and ``overtime_pay`` stay empty until the
    overtime is closed, either by the employee clocking out or by the
    maintenance commands in ``payroll.overtime``.

    Attributes:
        id: Primary key identifier
        employee_id: Employee who filed the request
        date: Work date the overtime belongs to
        start_time: When overtime started
        end_time: When overtime ended (None while open)
        total_hours: Overtime duration in hours
        overtime_rate: Pay multiplier (None means the default 1.25)
        overtime_pay: Computed pay for this request
        status: Approval status
        reason: Free-text justification
    """

    __tablename__ = "overtime_requests"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)
    total_hours = Column(Float, nullable=True)
    overtime_rate = Column(Float, nullable=True)
    overtime_pay = Column(Float, nullable=True)
    status = Column(SQLEnum(OvertimeStatus), nullable=False, default=OvertimeStatus.PENDING)
    reason = Column(String, nullable=True)

    employee = relationship("Employee", back_populates="overtime_requests")

    def __repr__(self):
        return (
            f"<OvertimeRequest(id={self.id}, employee_id={self.employee_id}, "
            f"date={self.date}, status={self.status})>"
        )
