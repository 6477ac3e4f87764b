"""Employee models for the remote employee API."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class Employee(BaseModel):
    """Employee record as returned by the remote API.

    Attributes use short names; the remote wire names (``employee_name`` etc.)
    are kept as aliases for parsing and for responses.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = Field(alias="employee_name")
    salary: int | None = Field(default=None, alias="employee_salary")
    age: int | None = Field(default=None, alias="employee_age")
    title: str | None = Field(default=None, alias="employee_title")
    email: str | None = Field(default=None, alias="employee_email")


class CreateEmployeeInput(BaseModel):
    """Request body for creating an employee. Every field is required."""

    name: str = Field(..., min_length=1)
    salary: int = Field(..., ge=0)
    age: int = Field(..., ge=0)
    title: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)


class EmployeeListResponse(BaseModel):
    """Remote wrapper around the full employee list."""

    data: list[Employee]
    status: str | None = None


class EmployeeResponse(BaseModel):
    """Remote wrapper around a single employee record."""

    data: Employee | None = None
    status: str | None = None


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of a delete: not found, found and deleted, or found but not deleted."""

    employee: Employee | None
    deleted: bool

    @property
    def found(self) -> bool:
        return self.employee is not None
