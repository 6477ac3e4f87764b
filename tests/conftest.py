from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from app.main import app
from app.models.employee import Employee

ALICE_ID = "4a3a170b-22cd-4ac2-aad1-9bb5b34a1507"
BOB_ID = "5255f1a5-f9f7-4be5-829a-134bde088d17"
CAROL_ID = "e2b1cfd2-1a0e-4f26-9a9c-0c8b3a0c8f59"
UNKNOWN_ID = "00000000-0000-4000-8000-000000000000"


def make_employee(employee_id: str, name: str, salary: int | None = None, **extra) -> Employee:
    return Employee(id=employee_id, name=name, salary=salary, **extra)


def employee_payload(employee_id: str, name: str, salary: int | None = None) -> dict:
    """Employee record in the remote API wire format."""
    return {
        "id": employee_id,
        "employee_name": name,
        "employee_salary": salary,
        "employee_age": 30,
        "employee_title": "Engineer",
        "employee_email": f"{name.lower()}@company.com",
    }


def make_response(status: int, body=None, text: str = "", headers: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.status = status
    response.headers = headers or {}
    response.json = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value=text)
    return response


@pytest.fixture
def sample_employees() -> list[Employee]:
    return [
        make_employee(ALICE_ID, "Alice", 100),
        make_employee(BOB_ID, "Bob", 300),
        make_employee(CAROL_ID, "Carol", 200),
    ]


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def async_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def anyio_backend():
    return "asyncio"
