"""Leave Request Routes — protected lifecycle endpoints.

Invariants:
    - Every route requires a valid bearer token; the caller identity is passed
      to the service, which owns every authorization decision
    - Creation is always on behalf of the caller (employee_id comes from the token)
    - approve/reject are hr-only (enforced by the service)
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from hr_leave.api.deps import get_current_identity, get_leave_request_service
from hr_leave.core.domain_types import (
    Identity, LeaveSortField, LeaveStatus, LeaveType, SortDirection,
)
from hr_leave.repositories.leave_request_repository import LeaveRequestFilters
from hr_leave.schemas.common import PaginationMetadata, SuccessResponse
from hr_leave.schemas.leave_request import (
    LeaveRequestCreate,
    LeaveRequestListResponse,
    LeaveRequestResponse,
    LeaveRequestUpdate,
)
from hr_leave.services.leave_request_service import LeaveRequestService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/leave-requests", tags=["leave-requests"])


def _envelope(message: str, leave_request) -> SuccessResponse[LeaveRequestResponse]:
    return SuccessResponse[LeaveRequestResponse](
        message=message, data=LeaveRequestResponse.model_validate(leave_request),
    )


@router.post(
    "", response_model=SuccessResponse[LeaveRequestResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_leave_request(
    body: LeaveRequestCreate,
    identity: Identity = Depends(get_current_identity),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    leave_request = await service.create(identity.employee_id, body)
    return _envelope("Leave request created successfully", leave_request)


@router.get("", response_model=SuccessResponse[LeaveRequestListResponse])
async def list_leave_requests(
    page: int = Query(1),
    page_size: int = Query(10),
    employee_id: int | None = Query(None),
    status_filter: LeaveStatus | None = Query(None, alias="status"),
    type_filter: LeaveType | None = Query(None, alias="type"),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    sort_by: LeaveSortField | None = Query(None),
    sort_dir: SortDirection | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    filters = LeaveRequestFilters(
        employee_id=employee_id,
        status=status_filter,
        type=type_filter,
        start_date=start_date,
        end_date=end_date,
    )
    leave_requests, meta = await service.list_leave_requests(
        filters, page=page, page_size=page_size, sort_by=sort_by, sort_dir=sort_dir,
    )
    return SuccessResponse[LeaveRequestListResponse](
        message="Leave requests retrieved successfully",
        data=LeaveRequestListResponse(
            data=[LeaveRequestResponse.model_validate(lr) for lr in leave_requests],
            pagination=PaginationMetadata.from_meta(meta),
        ),
    )


@router.get("/{leave_request_id}", response_model=SuccessResponse[LeaveRequestResponse])
async def get_leave_request(
    leave_request_id: int,
    identity: Identity = Depends(get_current_identity),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    leave_request = await service.get(leave_request_id)
    return _envelope("Leave request retrieved successfully", leave_request)


@router.put("/{leave_request_id}", response_model=SuccessResponse[LeaveRequestResponse])
async def update_leave_request(
    leave_request_id: int,
    body: LeaveRequestUpdate,
    identity: Identity = Depends(get_current_identity),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    leave_request = await service.update(
        leave_request_id, identity.employee_id, identity.role, body,
    )
    return _envelope("Leave request updated successfully", leave_request)


@router.delete("/{leave_request_id}", response_model=SuccessResponse[None])
async def delete_leave_request(
    leave_request_id: int,
    identity: Identity = Depends(get_current_identity),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    await service.delete(leave_request_id, identity.employee_id, identity.role)
    return SuccessResponse[None](message="Leave request deleted successfully")


@router.post(
    "/{leave_request_id}/approve",
    response_model=SuccessResponse[LeaveRequestResponse],
)
async def approve_leave_request(
    leave_request_id: int,
    identity: Identity = Depends(get_current_identity),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    leave_request = await service.approve(leave_request_id, identity.role)
    logger.info(
        "Leave request approved by HR",
        extra={"leave_request_id": leave_request_id, "employee_id": identity.employee_id},
    )
    return _envelope("Leave request approved successfully", leave_request)


@router.post(
    "/{leave_request_id}/reject",
    response_model=SuccessResponse[LeaveRequestResponse],
)
async def reject_leave_request(
    leave_request_id: int,
    identity: Identity = Depends(get_current_identity),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    leave_request = await service.reject(leave_request_id, identity.role)
    return _envelope("Leave request rejected successfully", leave_request)
