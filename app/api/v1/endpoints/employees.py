from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, status

from app.models.employee import CreateEmployeeInput, Employee
from app.services.employee_service import employee_service, is_valid_employee_id
from app.services.errors import RateLimitedError, RemoteFailureError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employee", tags=["employees"])


def _require_valid_id(employee_id: str) -> None:
    if not is_valid_employee_id(employee_id.strip()):
        logger.warning("Invalid employee id provided: %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid employee id '{employee_id}'",
        )


@router.get("", response_model=list[Employee])
async def get_all_employees():
    logger.debug("Fetching all employees")
    return await employee_service.get_all()


@router.get("/search/{search_string}", response_model=list[Employee])
async def get_employees_by_name_search(search_string: str):
    logger.debug("Searching employees by name with search string: %s", search_string)
    employees = await employee_service.search_by_name(search_string)
    if not employees:
        logger.debug("No employees found matching search string: %s", search_string)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return employees


@router.get("/highestSalary", response_model=int)
async def get_highest_salary_of_employees():
    logger.debug("Calculating highest salary among employees")
    return await employee_service.highest_salary()


@router.get("/topTenHighestEarningEmployeeNames", response_model=list[str])
async def get_top_ten_highest_earning_employee_names():
    logger.debug("Fetching top ten highest earning employee names")
    return await employee_service.top_earning_names()


@router.get("/{employee_id}", response_model=Employee)
async def get_employee_by_id(employee_id: str):
    _require_valid_id(employee_id)

    try:
        employee = await employee_service.get_by_id(employee_id.strip())
    except RemoteFailureError as err:
        logger.error("Failed to get employee %s: %s", employee_id, err)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to retrieve employee",
        ) from err

    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id '{employee_id}' not found",
        )

    return employee


@router.post("", response_model=Employee)
async def create_employee(request: CreateEmployeeInput):
    logger.info("Creating new employee with name: %s", request.name)

    try:
        return await employee_service.create(request)
    except RateLimitedError as err:
        logger.error("Employee API kept rate limiting create for %s: %s", request.name, err)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Employee API is rate limiting requests, try again later",
        ) from err
    except RemoteFailureError as err:
        logger.error("Failed to create employee %s: %s", request.name, err)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to create employee",
        ) from err


@router.delete("/{employee_id}", response_model=str)
async def delete_employee_by_id(employee_id: str):
    _require_valid_id(employee_id)

    try:
        outcome = await employee_service.delete(employee_id.strip())
    except RemoteFailureError as err:
        logger.error("Failed to delete employee %s: %s", employee_id, err)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to delete employee",
        ) from err

    if not outcome.deleted:
        logger.warning("Employee with id %s not deleted (found=%s)", employee_id, outcome.found)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id '{employee_id}' not found",
        )

    logger.info("Employee with name %s deleted successfully", outcome.employee.name)
    return outcome.employee.name
