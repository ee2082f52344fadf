import logging
from datetime import date
from typing import Iterable, List, NoReturn, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from leave_portal.core.exceptions import NotFound, StorageError
from leave_portal.models.leave_request import LeaveRequest, LeaveStatus

logger = logging.getLogger(__name__)

# The SQLite driver raises OverflowError for ids beyond 64 bits before SQLAlchemy sees them
STORE_ERRORS = (SQLAlchemyError, OverflowError)


class LeaveRequestStore:
    """
    Persistence for leave requests. Every public method is one transaction
    on the injected session: committed on success, rolled back and raised
    as StorageError on any database failure.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        name: str,
        employee_id: str,
        leave_type: str,
        start_date: date,
        end_date: date,
        comments: str,
    ) -> LeaveRequest:
        record = LeaveRequest(
            name=name,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            comments=comments,
            status=LeaveStatus.PENDING.value,
        )
        try:
            self.session.add(record)
            await self.session.flush()
            # Pull id and created_at assigned by the database
            await self.session.refresh(record)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("create", e)
        logger.info(f"Created leave request {record.id} for {employee_id}")
        return record

    async def list(
        self, status: Optional[str] = None, employee_id: Optional[str] = None
    ) -> List[LeaveRequest]:
        query = select(LeaveRequest)
        if status:
            query = query.where(LeaveRequest.status == status)
        if employee_id:
            query = query.where(LeaveRequest.employee_id == employee_id)
        query = query.order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc())
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            await self._fail("list", e)
        return list(result.scalars().all())

    async def get_by_id(self, request_id: int) -> LeaveRequest:
        try:
            record = await self.session.get(LeaveRequest, request_id)
        except STORE_ERRORS as e:
            await self._fail("get", e)
        if record is None:
            raise NotFound()
        return record

    async def update_status(self, request_id: int, status: str) -> LeaveRequest:
        try:
            record = await self.session.get(LeaveRequest, request_id)
            if record is None:
                raise NotFound()
            record.status = status
            await self.session.commit()
        except STORE_ERRORS as e:
            await self._fail("update", e)
        logger.info(f"Leave request {request_id} set to {status}")
        return record

    async def delete_many(self, ids: Iterable[int]) -> int:
        try:
            result = await self.session.execute(
                delete(LeaveRequest).where(LeaveRequest.id.in_(list(ids)))
            )
            await self.session.commit()
        except STORE_ERRORS as e:
            await self._fail("delete", e)
        logger.info(f"Deleted {result.rowcount} leave request(s)")
        return result.rowcount

    async def _fail(self, operation: str, error: Exception) -> NoReturn:
        await self.session.rollback()
        logger.error(f"Leave request {operation} failed: {error}", exc_info=True)
        raise StorageError(details={"operation": operation}) from error
