"""Employee access service backed by the remote employee API."""

from __future__ import annotations

import logging
import re
import uuid

from app.core.config import Settings
from app.models.employee import CreateEmployeeInput, DeleteOutcome, Employee
from app.services.employee_api_client import EmployeeApiClient, employee_api_client
from app.services.employee_cache import EmployeeListCache
from app.services.errors import EmployeeApiError, NotFoundError, RateLimitedError
from app.services.retry_policy import RateLimitRetryPolicy

logger = logging.getLogger(__name__)

TOP_EARNERS_LIMIT = 10
_UUID_PATTERN = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")


def is_valid_employee_id(value: str | None) -> bool:
    """Only the hyphenated 8-4-4-4-12 form counts; braces, ``urn:uuid:`` and bare hex do not."""
    return bool(value) and _UUID_PATTERN.fullmatch(value) is not None


class EmployeeService:
    """Reads degrade to empty/absent results; writes fail loudly.

    Every remote call goes through the rate-limit retry policy. The full list
    is served from a read-through cache that create and delete invalidate
    whenever they reach the remote API, whatever the outcome.
    """

    def __init__(
        self,
        client: EmployeeApiClient,
        retry_policy: RateLimitRetryPolicy | None = None,
        cache: EmployeeListCache | None = None,
    ) -> None:
        self.client = client
        self.retry_policy = retry_policy or RateLimitRetryPolicy()
        self.cache = cache or EmployeeListCache()

    async def initialize(self, settings: Settings) -> None:
        await self.client.initialize(settings)
        self.retry_policy.configure(settings)
        self.cache.invalidate()

    async def close(self) -> None:
        self.cache.invalidate()
        await self.client.close()

    async def fetch_all_cached(self) -> list[Employee]:
        try:
            return await self.cache.get_or_load(self._load_all)
        except RateLimitedError:
            logger.warning("Employee API still rate limited after retries on list, returning empty list")
            return []
        except EmployeeApiError as e:
            logger.error("Failed to fetch employee list, returning empty list: %s", e)
            return []

    async def get_all(self) -> list[Employee]:
        return await self.fetch_all_cached()

    async def get_by_id(self, employee_id: str) -> Employee | None:
        if not is_valid_employee_id(employee_id):
            logger.warning("Invalid UUID format for get_by_id(%s)", employee_id)
            return None

        canonical_id = str(uuid.UUID(employee_id))
        try:
            return await self.retry_policy.call(
                lambda: self.client.get_employee(canonical_id),
                description=f"get_employee({canonical_id})",
            )
        except NotFoundError:
            return None
        except RateLimitedError:
            logger.warning("Employee API still rate limited after retries on get_by_id(%s), returning None", employee_id)
            return None

    async def search_by_name(self, fragment: str) -> list[Employee]:
        needle = fragment.lower()
        return [e for e in await self.get_all() if needle in e.name.lower()]

    async def highest_salary(self) -> int:
        salaries = [e.salary for e in await self.get_all() if e.salary is not None]
        return max(salaries, default=0)

    async def top_earning_names(self, limit: int = TOP_EARNERS_LIMIT) -> list[str]:
        salaried = [e for e in await self.get_all() if e.salary is not None]
        # sorted() is stable with reverse=True, so equal salaries keep list order
        ranked = sorted(salaried, key=lambda e: e.salary, reverse=True)
        return [e.name for e in ranked[:limit]]

    async def create(self, payload: CreateEmployeeInput) -> Employee:
        try:
            employee = await self.retry_policy.call(
                lambda: self.client.create_employee(payload),
                description="create_employee",
            )
        finally:
            self.cache.invalidate()

        logger.info("Created employee %s (%s)", employee.id, employee.name)
        return employee

    async def delete(self, employee_id: str) -> DeleteOutcome:
        employee = await self.get_by_id(employee_id)
        if employee is None:
            logger.info("Employee with id %s not found for deletion", employee_id)
            return DeleteOutcome(employee=None, deleted=False)

        try:
            await self.retry_policy.call(
                lambda: self.client.delete_employee(employee.name),
                description=f"delete_employee({employee_id})",
            )
        except NotFoundError:
            logger.warning("Employee %s not found on delete", employee_id)
            return DeleteOutcome(employee=employee, deleted=False)
        except RateLimitedError:
            logger.warning("Employee API still rate limited after retries on delete(%s)", employee_id)
            return DeleteOutcome(employee=employee, deleted=False)
        finally:
            self.cache.invalidate()

        logger.info("Deleted employee %s (%s)", employee_id, employee.name)
        return DeleteOutcome(employee=employee, deleted=True)

    async def _load_all(self) -> list[Employee]:
        return await self.retry_policy.call(self.client.list_employees, description="list_employees")


employee_service = EmployeeService(employee_api_client)
