"""Employee Routes — protected directory endpoints.

Invariants:
    - Every route requires a valid bearer token
    - page/page_size are not range-validated here: the service defaults and clamps them
"""

from fastapi import APIRouter, Depends, Query, status

from hr_leave.api.deps import get_current_identity, get_employee_service
from hr_leave.core.domain_types import EmployeeSortField, SortDirection
from hr_leave.schemas.common import PaginationMetadata, SuccessResponse
from hr_leave.schemas.employee import (
    EmployeeCreate, EmployeeListResponse, EmployeeResponse,
)
from hr_leave.services.employee_service import EmployeeService

router = APIRouter(
    prefix="/api/v1/employees", tags=["employees"],
    dependencies=[Depends(get_current_identity)],
)


@router.post(
    "", response_model=SuccessResponse[EmployeeResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    body: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
):
    employee = await service.create(body)
    return SuccessResponse[EmployeeResponse](
        message="Employee created successfully",
        data=EmployeeResponse.model_validate(employee),
    )


@router.get("", response_model=SuccessResponse[EmployeeListResponse])
async def list_employees(
    page: int = Query(1),
    page_size: int = Query(10),
    search: str | None = Query(None),
    sort_by: EmployeeSortField | None = Query(None),
    sort_dir: SortDirection | None = Query(None),
    service: EmployeeService = Depends(get_employee_service),
):
    employees, meta = await service.list_employees(
        page=page, page_size=page_size, search=search,
        sort_by=sort_by, sort_dir=sort_dir,
    )
    return SuccessResponse[EmployeeListResponse](
        message="Employees retrieved successfully",
        data=EmployeeListResponse(
            data=[EmployeeResponse.model_validate(e) for e in employees],
            pagination=PaginationMetadata.from_meta(meta),
        ),
    )


@router.get("/{employee_id}", response_model=SuccessResponse[EmployeeResponse])
async def get_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
):
    employee = await service.get(employee_id)
    return SuccessResponse[EmployeeResponse](
        message="Employee retrieved successfully",
        data=EmployeeResponse.model_validate(employee),
    )
