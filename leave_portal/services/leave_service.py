import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from leave_portal.core.exceptions import (
    DuplicateRequest,
    EmptySelection,
    InvalidSelection,
    InvalidStatus,
    ValidationError,
)
from leave_portal.models.leave_request import LeaveRequest, LeaveStatus
from leave_portal.services.leave_store import LeaveRequestStore
from leave_portal.services.overlap import has_overlapping_request
from leave_portal.services.validation import validate_submission

logger = logging.getLogger(__name__)

REVIEW_STATUSES = frozenset({LeaveStatus.APPROVED.value, LeaveStatus.REJECTED.value})


class LeaveRequestService:
    """
    Entry point for every leave request operation.

    Submission runs validation, then the overlap check, then the insert.
    The overlap SELECT and the INSERT run in the same session transaction,
    but under read-committed isolation neither transaction sees the
    other's uncommitted row, so two concurrent submissions for the same
    employee and dates can both land.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.store = LeaveRequestStore(session)

    async def submit(self, candidate: Mapping[str, Any]) -> LeaveRequest:
        result = validate_submission(candidate)
        if not result.accepted:
            logger.info(f"Rejected submission: {result.violation.value}")
            raise ValidationError(result.violation)

        employee_id = candidate["employee_id"]
        if await has_overlapping_request(self.session, employee_id, result.start_date, result.end_date):
            logger.info(f"Rejected overlapping submission for {employee_id}")
            raise DuplicateRequest()

        # name and comments are stored exactly as supplied
        return await self.store.create(
            name=candidate["name"],
            employee_id=employee_id,
            leave_type=candidate["leave_type"],
            start_date=result.start_date,
            end_date=result.end_date,
            comments=candidate["comments"],
        )

    async def list_all(
        self, status: Optional[str] = None, employee_id: Optional[str] = None
    ) -> List[LeaveRequest]:
        return await self.store.list(status=status, employee_id=employee_id)

    async def get_one(self, request_id: int) -> LeaveRequest:
        return await self.store.get_by_id(request_id)

    async def set_status(self, request_id: int, status: Any) -> LeaveRequest:
        if not isinstance(status, str) or status not in REVIEW_STATUSES:
            raise InvalidStatus()
        return await self.store.update_status(request_id, status)

    async def delete_selected(self, ids: Any) -> int:
        if not isinstance(ids, list) or len(ids) == 0:
            raise EmptySelection()
        selected = set()
        for record_id in ids:
            if isinstance(record_id, str) and record_id.isascii() and record_id.isdigit():
                record_id = int(record_id)
            elif isinstance(record_id, float) and record_id.is_integer():
                record_id = int(record_id)
            # bool is an int subclass but never a record id
            if isinstance(record_id, bool) or not isinstance(record_id, int):
                raise InvalidSelection()
            selected.add(record_id)
        return await self.store.delete_many(selected)
