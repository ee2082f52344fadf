"""
Field rules for a leave request submission.

validate_submission() is pure: it never touches the database and never
raises for bad input. Rules run in a fixed order and the first one that
fails is the only one reported.
"""
import enum
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from leave_portal.models.leave_request import LeaveType

NAME_PATTERN = re.compile(r"[A-Za-z\s]+")
EMPLOYEE_ID_PATTERN = re.compile(r"ATS0[0-9]{3}")
LEAVE_TYPES = frozenset(t.value for t in LeaveType)
NAME_MIN_LENGTH = 5
COMMENTS_MIN_LENGTH = 10
COMMENTS_MAX_LENGTH = 300


class Violation(str, enum.Enum):
    INVALID_NAME = "invalid_name"
    INVALID_EMPLOYEE_ID = "invalid_employee_id"
    INVALID_LEAVE_TYPE = "invalid_leave_type"
    INVALID_DATE_RANGE = "invalid_date_range"
    INVALID_COMMENTS = "invalid_comments"

    @property
    def message(self) -> str:
        return VIOLATION_MESSAGES[self]


VIOLATION_MESSAGES = {
    Violation.INVALID_NAME: "Name must be at least 5 alphabetical characters",
    Violation.INVALID_EMPLOYEE_ID: "Invalid employee ID format (ATS0XXX)",
    Violation.INVALID_LEAVE_TYPE: "Invalid leave type",
    Violation.INVALID_DATE_RANGE: "Invalid date range",
    Violation.INVALID_COMMENTS: "Comments must be 10-300 characters",
}


@dataclass(frozen=True)
class ValidationResult:
    violation: Optional[Violation] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def accepted(self) -> bool:
        return self.violation is None


def parse_calendar_date(value: Any) -> Optional[date]:
    """Parse an ISO-8601 date (or datetime) into a calendar date, None if impossible."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def _valid_name(name: Any) -> bool:
    if not isinstance(name, str) or not name:
        return False
    return len(name.strip()) >= NAME_MIN_LENGTH and NAME_PATTERN.fullmatch(name) is not None


def _valid_comments(comments: Any) -> bool:
    if not isinstance(comments, str) or not comments:
        return False
    return COMMENTS_MIN_LENGTH <= len(comments.strip()) <= COMMENTS_MAX_LENGTH


def validate_submission(candidate: Mapping[str, Any]) -> ValidationResult:
    if not _valid_name(candidate.get("name")):
        return ValidationResult(Violation.INVALID_NAME)

    employee_id = candidate.get("employee_id")
    if not isinstance(employee_id, str) or EMPLOYEE_ID_PATTERN.fullmatch(employee_id) is None:
        return ValidationResult(Violation.INVALID_EMPLOYEE_ID)

    leave_type = candidate.get("leave_type")
    if not isinstance(leave_type, str) or leave_type not in LEAVE_TYPES:
        return ValidationResult(Violation.INVALID_LEAVE_TYPE)

    start = parse_calendar_date(candidate.get("start_date"))
    end = parse_calendar_date(candidate.get("end_date"))
    if start is None or end is None or end < start:
        return ValidationResult(Violation.INVALID_DATE_RANGE)

    if not _valid_comments(candidate.get("comments")):
        return ValidationResult(Violation.INVALID_COMMENTS)

    return ValidationResult(start_date=start, end_date=end)
