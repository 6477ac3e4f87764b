"""HTTP adapter for the remote employee API (no retries, no caching)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from app.core.config import Settings
from app.models.employee import CreateEmployeeInput, Employee, EmployeeListResponse, EmployeeResponse
from app.services.errors import (
    NotFoundError,
    NotInitializedError,
    RateLimitedError,
    RemoteFailureError,
    TransportError,
)

logger = logging.getLogger(__name__)

_ERROR_BODY_EXCERPT = 200


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class EmployeeApiClient:
    def __init__(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.timeout_seconds = 0.0

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.EMPLOYEE_API_BASE_URL:
            logger.warning("Employee API base URL missing — EmployeeApiClient not initialized")
            return

        self.base_url = settings.EMPLOYEE_API_BASE_URL.rstrip("/")
        self.timeout_seconds = settings.EMPLOYEE_API_TIMEOUT_SECONDS
        self.initialized = True
        logger.info("EmployeeApiClient initialized (base_url=%s)", self.base_url)

    async def close(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.timeout_seconds = 0.0

    async def list_employees(self) -> list[Employee]:
        body = await self._request("GET", self.base_url, operation="list")
        try:
            return EmployeeListResponse.model_validate(body).data
        except ValidationError as e:
            raise RemoteFailureError(f"Unexpected employee list shape: {e}", operation="list") from e

    async def get_employee(self, employee_id: str) -> Employee:
        body = await self._request("GET", f"{self.base_url}/{employee_id}", operation="get")
        return self._single_employee(body, operation="get", missing_is_not_found=True)

    async def create_employee(self, payload: CreateEmployeeInput) -> Employee:
        body = await self._request("POST", self.base_url, operation="create", json=payload.model_dump())
        return self._single_employee(body, operation="create")

    async def delete_employee(self, name: str) -> None:
        await self._request("DELETE", self.base_url, operation="delete", json={"name": name})

    async def check_connection(self) -> bool:
        if not self.initialized:
            return False

        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(self.base_url) as response:
                    return 200 <= response.status < 300 or response.status == 429
        except Exception:
            logger.exception("EmployeeApiClient connection check failed")
            return False

    async def _request(self, method: str, url: str, *, operation: str, json: Any = None) -> Any:
        if not self.initialized:
            raise NotInitializedError("EmployeeApiClient not initialized", operation=operation)

        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method, url, json=json) as response:
                    return await self._read_response(response, operation)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{method} {url} failed: {e!r}", operation=operation) from e

    async def _read_response(self, response: Any, operation: str) -> Any:
        status = response.status

        if status == 404:
            raise NotFoundError(f"Employee API returned 404 on {operation}", operation=operation)

        if status == 429:
            raise RateLimitedError(operation, retry_after=_parse_retry_after(response.headers.get("Retry-After")))

        if not 200 <= status < 300:
            error_text = await response.text()
            raise RemoteFailureError(
                f"Employee API returned {status} on {operation}: {error_text[:_ERROR_BODY_EXCERPT]}",
                operation=operation,
                status_code=status,
            )

        try:
            return await response.json(content_type=None)
        except ValueError as e:
            raise RemoteFailureError(
                f"Employee API returned invalid JSON on {operation}", operation=operation, status_code=status
            ) from e

    def _single_employee(self, body: Any, operation: str, missing_is_not_found: bool = False) -> Employee:
        try:
            employee = EmployeeResponse.model_validate(body).data
        except ValidationError as e:
            raise RemoteFailureError(f"Unexpected employee shape on {operation}: {e}", operation=operation) from e

        if employee is None and missing_is_not_found:
            raise NotFoundError(f"Employee API returned no record on {operation}", operation=operation)
        if employee is None:
            raise RemoteFailureError(f"Employee API returned no record on {operation}", operation=operation)
        return employee


employee_api_client = EmployeeApiClient()
