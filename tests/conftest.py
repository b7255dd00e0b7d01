"""Shared test fixtures for pytest.

Environment defaults are set before any application module is imported so the
cached settings never pick up a developer's .env file, and uploads do not
wait between the file upload and the workflow run.
"""

import os
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient


os.environ["ENVIRONMENT"] = "test"
os.environ["UPLOAD_SETTLE_SECONDS"] = "0"

from core.config import get_settings
from main import app


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Drop cached settings around each test so env patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """
    Create a test client for the FastAPI application.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def no_app_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run with no workflow app keys configured."""
    for name in (
        "DIFY_RESUME_API_KEY",
        "DIFY_JD_API_KEY",
        "DIFY_RECRUIT_API_KEY",
        "DIFY_COMPLETION_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
