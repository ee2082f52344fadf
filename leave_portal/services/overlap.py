import logging
from datetime import date

from sqlalchemy import exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from leave_portal.core.exceptions import StorageError
from leave_portal.models.leave_request import LeaveRequest, LeaveStatus

logger = logging.getLogger(__name__)


async def has_overlapping_request(
    session: AsyncSession, employee_id: str, start_date: date, end_date: date
) -> bool:
    """
    True when the employee already holds a non-rejected request whose
    inclusive date range intersects [start_date, end_date].
    """
    query = select(
        exists().where(
            LeaveRequest.employee_id == employee_id,
            LeaveRequest.status != LeaveStatus.REJECTED.value,
            LeaveRequest.start_date <= end_date,
            LeaveRequest.end_date >= start_date,
        )
    )
    try:
        return bool(await session.scalar(query))
    except SQLAlchemyError as e:
        logger.error(f"Overlap check failed for {employee_id}: {e}", exc_info=True)
        raise StorageError() from e
