from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from console_output.core.config import settings
from console_output.main import app


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def console_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    """Turn EnableOutputToConsole on for the application settings."""
    monkeypatch.setattr(settings, "ENABLE_OUTPUT_TO_CONSOLE", "true")


@pytest.fixture()
def console_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "ENABLE_OUTPUT_TO_CONSOLE", "false")
