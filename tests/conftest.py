import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.dependencies import get_llm_gateway, get_settings
from app.main import app
from tests.fakes import TEST_API_KEY, FakeGateway


@pytest.fixture
def settings():
    return Settings(openai_api_key=TEST_API_KEY, _env_file=None)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(gateway, settings):
    app.dependency_overrides[get_llm_gateway] = lambda: gateway
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
