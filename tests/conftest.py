"""
Pytest configuration and fixtures
"""

import inspect

import httpx
import pytest
from fastapi.testclient import TestClient

from chat_relay.config import Settings, get_settings
from chat_relay.services.network_manager import get_http_client
from main import app


class UpstreamRecorder:
    """MockTransport handler that records every outbound request."""

    def __init__(self, responder=None):
        self.requests = []
        self.responder = responder or (lambda request: httpx.Response(200, json={}))

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.responder(request)
        if inspect.isawaitable(result):
            result = await result
        return result


def make_settings(**overrides) -> Settings:
    values = {
        "AI_API_KEY": "sk-test-key",
        "AI_PROVIDER": "zhipuai",
        "AI_AUTH_MODE": "raw",
        "AI_API_URL": None,
        "AI_MODEL": None,
        "AI_TIMEOUT": 30.0,
        "AI_THINKING_TYPE": "disabled",
        "LOG_LEVEL": "false",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def relay():
    """Build a TestClient whose settings and upstream transport are replaced."""

    def _build(responder=None, **settings_overrides):
        recorder = UpstreamRecorder(responder)
        upstream = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        settings = make_settings(**settings_overrides)

        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_http_client] = lambda: upstream
        return TestClient(app), recorder

    yield _build
    app.dependency_overrides.clear()
