'''
Pytest configuration for the finance backend.

This file sets up fixtures for:
1. The anyio backend used by async tests.
2. A validated finance snapshot built from the sandbox rows.
3. A FastAPI TestClient for endpoint testing.
4. Service instances wired to mocked database sessions.
'''

import copy
import pytest
from unittest.mock import AsyncMock, MagicMock

# --- FastAPI & Testing Imports ---
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

# --- Constant Imports ----
from tests.constants import SNAPSHOT_ROWS

# --- Application Imports ---
from school_finance.main import app
from school_finance.models.finance import FinanceSnapshot
from school_finance.services.finance_service import (
    FinanceSnapshotService,
    FinanceDashboardService,
)


@pytest.fixture(scope="session")
def anyio_backend():
    """
    Override the default 'anyio_backend' fixture.
    1. Forces the backend to 'asyncio'.
    2. Promotes the scope to 'session'.
    """
    return "asyncio"


# --- 1. DATA FIXTURES ---

@pytest.fixture(scope="function")
def snapshot_rows() -> dict:
    """A private copy of the raw sandbox rows, safe to mutate in a test."""
    return copy.deepcopy(SNAPSHOT_ROWS)

@pytest.fixture(scope="function")
def finance_snapshot(snapshot_rows: dict) -> FinanceSnapshot:
    return FinanceSnapshot.model_validate(snapshot_rows)

@pytest.fixture(scope="function")
def empty_snapshot() -> FinanceSnapshot:
    return FinanceSnapshot()


# --- 2. APP FIXTURES ---

@pytest.fixture(scope="function")
def client() -> TestClient:
    """
    Runs the app's lifespan and yields a TestClient.
    Dependency overrides are cleared afterwards.
    """
    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# --- 3. SERVICE FIXTURES ---

@pytest.fixture(scope="function")
def mock_db_session() -> MagicMock:
    """An AsyncSession stand-in whose execute() is awaitable."""
    session = MagicMock(spec=AsyncSession)
    session.execute = AsyncMock()
    return session

@pytest.fixture(scope="function")
def snapshot_service(mock_db_session: MagicMock) -> FinanceSnapshotService:
    return FinanceSnapshotService(db=mock_db_session)

@pytest.fixture(scope="function")
def mock_snapshot_service(finance_snapshot: FinanceSnapshot) -> MagicMock:
    """A FinanceSnapshotService whose load_snapshot returns the sandbox."""
    mock_service = MagicMock(spec=FinanceSnapshotService)
    mock_service.load_snapshot = AsyncMock(return_value=finance_snapshot)
    return mock_service

@pytest.fixture(scope="function")
def dashboard_service(mock_snapshot_service: MagicMock) -> FinanceDashboardService:
    return FinanceDashboardService(snapshot_service=mock_snapshot_service)
