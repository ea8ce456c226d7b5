"""Test configuration and fixtures."""

import logfire
import pytest
from fastapi.testclient import TestClient

from civic.config import AuthSettings
from civic.domain.service import JWTService
from civic.interface.api.app import create_app
from tests.di import build_test_container

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)


def make_token(user_id: str, permissions: list[str] | None = None) -> str:
    """Issue a token the way the identity provider would, with default settings."""
    return JWTService(AuthSettings()).create_token(
        user_id, handle=user_id, permissions=permissions
    )


def auth_headers(user_id: str, permissions: list[str] | None = None) -> dict[str, str]:
    """Authorization header for a user."""
    return {"Authorization": f"Bearer {make_token(user_id, permissions)}"}


@pytest.fixture
def client():
    """API client backed by in-memory repositories, fresh for each test."""
    app = create_app(container=build_test_container())
    with TestClient(app) as test_client:
        yield test_client
