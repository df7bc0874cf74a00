"""
Pytest configuration and common fixtures for Wasender tests.

Provides a fake aiohttp session so client tests never touch the network.
"""

import json
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from wasender.api.routes.webhooks import create_webhook_router
from wasender.core.config.settings import Settings
from wasender.core.events import WasenderEventDispatcher
from wasender.messaging.client import WasenderClient

BASE_URL = "https://www.wasenderapi.com/api"


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse used as a context manager."""

    def __init__(self, status: int, body: Any):
        self.status = status
        self._body = body

    async def text(self) -> str:
        if isinstance(self._body, str):
            return self._body
        return json.dumps(self._body)

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class FakeSession:
    """Records requests and replays queued responses in order."""

    def __init__(self):
        self.responses: list[FakeResponse] = []
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    def queue(self, status: int, body: Any) -> "FakeSession":
        self.responses.append(FakeResponse(status, body))
        return self

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        return self.responses.pop(0)

    async def close(self) -> None:
        self.closed = True

    @property
    def last_request(self) -> dict[str, Any]:
        return self.requests[-1]


@pytest.fixture
def config() -> Settings:
    """Explicit settings independent of the developer's environment."""
    return Settings(
        api_key="testkey",
        personal_access_token="",
        base_url=BASE_URL,
        webhook_secret="testsecret",
        webhook_route="/wasender/webhook",
        webhook_signature_header="x-webhook-signature",
        log_level="DEBUG",
        environment="PROD",
    )


@pytest.fixture
def pat_config(config: Settings) -> Settings:
    """Settings with a personal access token for session endpoints."""
    return Settings(
        api_key=config.api_key,
        personal_access_token="testpat",
        base_url=config.base_url,
        log_level="DEBUG",
        environment="PROD",
    )


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def sleeps() -> list[float]:
    """Durations passed to the client's sleep function."""
    return []


@pytest.fixture
def client(fake_session: FakeSession, config: Settings, sleeps: list[float]) -> WasenderClient:
    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return WasenderClient(fake_session, config=config, sleep=fake_sleep)


@pytest.fixture
def pat_client(fake_session: FakeSession, pat_config: Settings) -> WasenderClient:
    return WasenderClient(fake_session, config=pat_config)


@pytest.fixture
def dispatcher() -> WasenderEventDispatcher:
    return WasenderEventDispatcher()


@pytest.fixture
def webhook_app(dispatcher: WasenderEventDispatcher, config: Settings) -> FastAPI:
    """FastAPI app exposing only the webhook route."""
    app = FastAPI(title="Test App")
    app.include_router(create_webhook_router(dispatcher, config))
    return app


@pytest.fixture
def test_client(webhook_app: FastAPI) -> TestClient:
    return TestClient(webhook_app)
