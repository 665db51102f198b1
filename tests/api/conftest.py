"""
API test fixtures.

Builds the full application with settings and services replaced through
FastAPI dependency overrides.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docqa.api.deps import get_chat_service, get_qa_service, get_settings_dependency
from docqa.configs import Settings
from docqa.configs.auth import AuthSettings
from docqa.main import create_app

TOKEN = "team-secret"
AUTH_HEADERS = {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(auth=AuthSettings(team_token=TOKEN, auth_required=True), environment="test")


@pytest.fixture
def mock_qa_service() -> MagicMock:
    service = MagicMock()
    service.run = AsyncMock(return_value=[])
    service.ingest_upload = AsyncMock()
    return service


@pytest.fixture
def mock_chat_service() -> MagicMock:
    service = MagicMock()
    service.ask = AsyncMock()
    return service


@pytest.fixture
def app(settings: Settings, mock_qa_service: MagicMock, mock_chat_service: MagicMock) -> FastAPI:
    app = create_app()
    app.dependency_overrides[get_settings_dependency] = lambda: settings
    app.dependency_overrides[get_qa_service] = lambda: mock_qa_service
    app.dependency_overrides[get_chat_service] = lambda: mock_chat_service
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
