"""Tests for the request-scoped database session lifecycle."""

import pytest
from dishka import Scope, make_async_container, provide
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civic.domain.error import NotFoundError
from civic.interface.api.app import create_app
from civic.util.di import (
    ProdApplicationProvider,
    ProdConfigProvider,
    ProdDomainProvider,
    ProdPersistenceProvider,
)
from tests.conftest import auth_headers


class RecordingSession:
    """Session double that records how its transaction ended."""

    def __init__(self) -> None:
        self.events: list[str] = []

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.events.append("close")

    async def commit(self) -> None:
        self.events.append("commit")

    async def rollback(self) -> None:
        self.events.append("rollback")


class RecordingPersistenceProvider(ProdPersistenceProvider):
    """Production persistence wiring with the session factory swapped out."""

    def __init__(self, session: RecordingSession) -> None:
        super().__init__()
        self.session = session

    @provide(scope=Scope.APP)
    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: self.session  # type: ignore[return-value]


def _build_container(session: RecordingSession):
    return make_async_container(
        ProdConfigProvider(),
        ProdDomainProvider(),
        ProdApplicationProvider(),
        RecordingPersistenceProvider(session),
        FastapiProvider(),
    )


class TestRequestSession:
    """Tests for commit and rollback at the end of the request scope."""

    @pytest.mark.asyncio
    async def test_clean_scope_commits(self):
        # Arrange
        session = RecordingSession()
        container = _build_container(session)

        # Act
        async with container() as request_container:
            await request_container.get(AsyncSession)
        await container.close()

        # Assert
        assert session.events == ["commit", "close"]

    @pytest.mark.asyncio
    async def test_failed_scope_rolls_back(self):
        # Arrange
        session = RecordingSession()
        container = _build_container(session)

        # Act
        with pytest.raises(NotFoundError):
            async with container() as request_container:
                await request_container.get(AsyncSession)
                raise NotFoundError("Comment", "1")
        await container.close()

        # Assert
        assert session.events == ["rollback", "close"]

    def test_handled_service_error_rolls_back(self):
        """A blank comment answers 400 and leaves nothing committed."""
        # Arrange
        session = RecordingSession()
        app = create_app(container=_build_container(session))

        # Act
        with TestClient(app) as client:
            response = client.post(
                "/api/comments/petition/7",
                json={"content": "   "},
                headers=auth_headers("bob"),
            )

        # Assert
        assert response.status_code == 400
        assert session.events == ["rollback", "close"]

    def test_unauthenticated_request_rolls_back(self):
        # Arrange
        session = RecordingSession()
        app = create_app(container=_build_container(session))

        # Act
        with TestClient(app) as client:
            response = client.post("/api/comments/petition/7", json={"content": "Hi"})

        # Assert
        assert response.status_code == 401
        assert session.events == ["rollback", "close"]
