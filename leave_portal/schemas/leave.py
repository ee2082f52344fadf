from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from typing import Any, Optional

class LeaveRequestSubmission(BaseModel):
    """
    Raw submission body. Loosely typed: format rules are reported by the
    validator, not by pydantic.
    """
    name: Any = None
    employee_id: Any = None
    leave_type: Any = None
    start_date: Any = None
    end_date: Any = None
    comments: Any = None

class LeaveStatusUpdate(BaseModel):
    status: Any = None

class LeaveDeleteSelection(BaseModel):
    ids: Any = None

class LeaveRequestResponse(BaseModel):
    id: int
    name: str
    employee_id: str
    leave_type: str
    start_date: date
    end_date: date
    comments: str
    status: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class DeleteResult(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    error: str
