import enum
from datetime import date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from leave_portal.database import Base

class LeaveStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class LeaveType(str, enum.Enum):
    VACATIONAL = "vacational"
    SICK = "sick"
    PERSONAL = "personal"
    CASUAL = "casual"
    MATERNITY = "Maternity"  # the only capitalized value

class LeaveRequest(Base):
    __tablename__ = "leave_requests"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_leave_requests_status",
        ),
        CheckConstraint("employee_id LIKE 'ATS0___'", name="ck_leave_requests_employee_id"),
        # Exact pattern per dialect: regex on PostgreSQL, case-sensitive GLOB on SQLite
        CheckConstraint(
            "employee_id ~ '^ATS0[0-9]{3}$'",
            name="ck_leave_requests_employee_id_pattern",
        ).ddl_if(dialect="postgresql"),
        CheckConstraint(
            "employee_id GLOB 'ATS0[0-9][0-9][0-9]'",
            name="ck_leave_requests_employee_id_glob",
        ).ddl_if(dialect="sqlite"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    employee_id: Mapped[str] = mapped_column(String(7), nullable=False, index=True)
    leave_type: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    comments: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=LeaveStatus.PENDING.value, server_default=LeaveStatus.PENDING.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<LeaveRequest id={self.id} employee_id={self.employee_id} status={self.status}>"
