from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from leave_portal.database import get_db
from leave_portal.schemas.leave import (
    DeleteResult,
    ErrorResponse,
    LeaveDeleteSelection,
    LeaveRequestResponse,
    LeaveRequestSubmission,
    LeaveStatusUpdate,
)
from leave_portal.services.leave_service import LeaveRequestService

router = APIRouter(
    prefix="/leave-requests",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def get_leave_service(db: AsyncSession = Depends(get_db)) -> LeaveRequestService:
    return LeaveRequestService(db)


# Employee: submit a leave request
@router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_leave_request(
    submission: Optional[LeaveRequestSubmission] = None,
    service: LeaveRequestService = Depends(get_leave_service),
):
    submission = submission or LeaveRequestSubmission()
    return await service.submit(submission.model_dump())


# HR: list leave requests, newest first
@router.get("", response_model=List[LeaveRequestResponse])
async def list_leave_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    employee_id: Optional[str] = None,
    service: LeaveRequestService = Depends(get_leave_service),
):
    return await service.list_all(status=status_filter, employee_id=employee_id)


@router.get(
    "/{request_id}",
    response_model=LeaveRequestResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_leave_request(
    request_id: int,
    service: LeaveRequestService = Depends(get_leave_service),
):
    return await service.get_one(request_id)


# HR: approve or reject
@router.put(
    "/{request_id}",
    response_model=LeaveRequestResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_leave_request_status(
    request_id: int,
    update: Optional[LeaveStatusUpdate] = None,
    service: LeaveRequestService = Depends(get_leave_service),
):
    update = update or LeaveStatusUpdate()
    return await service.set_status(request_id, update.status)


# HR: bulk delete
@router.delete("", response_model=DeleteResult)
async def delete_leave_requests(
    selection: Optional[LeaveDeleteSelection] = None,
    service: LeaveRequestService = Depends(get_leave_service),
):
    selection = selection or LeaveDeleteSelection()
    deleted = await service.delete_selected(selection.ids)
    return DeleteResult(message=f"{deleted} record(s) deleted successfully")
