"""
Test configuration and fixtures for the WorkBridge web backend.

The marketplace backend is replaced by ``FakeBackend``, an
``httpx.MockTransport`` handler that answers from a table of canned
responses and records every request it sees. Browser state lives in the
in-memory store, which is wiped around each test.
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generator, List, Optional, Tuple

os.environ["API_BASE_URL"] = "http://backend.test/api"
os.environ["SESSION_BACKEND"] = "memory"

import httpx
import pytest
from fastapi.testclient import TestClient

from app.platform.cache.store import get_store
from app.platform.dependencies import get_api_transport

API_PREFIX = "/api"

LOGIN_PATHS = {
    "worker": "/auth/login/user",
    "employer": "/auth/login/vendor",
    "admin": "/auth/login/admin",
}


@dataclass
class RecordedCall:
    method: str
    path: str
    params: Dict[str, str]
    headers: Dict[str, str]
    content: bytes

    @property
    def json(self) -> Any:
        return json.loads(self.content) if self.content else None

    @property
    def authorization(self) -> Optional[str]:
        return self.headers.get("authorization")


@dataclass
class FakeBackend:
    routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = field(default_factory=dict)
    calls: List[RecordedCall] = field(default_factory=list)

    def on(self, method: str, path: str, status_code: int = 200, json: Any = None, handler=None):
        """Answer ``method path`` with ``json`` (or whatever ``handler`` returns)."""
        if handler is None:
            body = {} if json is None else json

            def handler(request, body=body, status_code=status_code):
                return httpx.Response(status_code, json=body)

        self.routes[(method.upper(), path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]

        self.calls.append(
            RecordedCall(
                method=request.method,
                path=path,
                params=dict(request.url.params),
                headers=dict(request.headers),
                content=request.content,
            )
        )

        handler = self.routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json={"message": f"No route for {request.method} {path}"})
        return handler(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls_to(self, method: str, path: str) -> List[RecordedCall]:
        return [call for call in self.calls if call.method == method and call.path == path]

    def allow_otp(self, registered: bool):
        self.on("POST", "/auth/send-otp", json={"success": True, "message": "OTP sent"})
        self.on("POST", "/auth/verify-otp", json={"success": True, "message": "OTP verified"})
        self.on("GET", "/auth/registration-status", json={"isRegistered": registered})


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app, backend) -> Generator[TestClient, None, None]:
    """
    Test client whose backend calls go to ``backend``.
    Each test starts with an empty session store and a fresh cookie jar.
    """
    get_store().clear()
    test_app.dependency_overrides[get_api_transport] = backend.transport

    with TestClient(test_app) as test_client:
        yield test_client

    test_app.dependency_overrides.pop(get_api_transport, None)
    get_store().clear()


@pytest.fixture
def sign_in(client, backend):
    """Walk the sign-in flow for an existing account and return the client."""

    def _sign_in(role: str = "worker", token: str = "abc", phone: str = "9876543210"):
        backend.allow_otp(registered=True)
        backend.on("POST", LOGIN_PATHS[role], json={"token": token, "user": {"role": role}})

        assert client.post("/api/v1/signin/role", json={"role": role}).status_code == 200
        assert client.post("/api/v1/signin/phone", json={"phone": phone}).status_code == 200
        response = client.post("/api/v1/signin/otp", json={"otp": "123456"})
        assert response.status_code == 200, response.json()
        return client

    return _sign_in
