"""
Test configuration and fixtures for the session client tests.

Provides:
- Sample sessions and stored records
- A credential store in a temporary directory
- A mocked auth gateway for repository and controller tests
- A local aiohttp auth server for wire-level gateway tests
"""

import asyncio
import socket
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from SportsChaos.api.client import AuthGateway, GatewayTimeouts
from SportsChaos.core.client.auth.models import AuthenticatedSession, StoredSessionRecord
from SportsChaos.core.client.auth.repository import SessionRepository
from SportsChaos.core.client.services.credential_store import CredentialStore


@dataclass
class TestConfig:
    """Configuration for client tests."""
    __test__ = False

    timeouts: GatewayTimeouts = field(default_factory=lambda: GatewayTimeouts(connect=2, read=2, write=2))
    slow_response_seconds: float = 0.5
    short_timeouts: GatewayTimeouts = field(default_factory=lambda: GatewayTimeouts(connect=0.1, read=0.1, write=0.1))


class FakeAuthService:
    """
    In-process stand-in for the remote auth service.

    Each endpoint answers with whatever was queued for it, defaulting to
    a successful envelope, and records every request it receives.
    """

    def __init__(self, session_payload: Dict[str, Any]):
        self.session_payload = session_payload
        self.requests: List[Dict[str, Any]] = []
        self.responses: Dict[str, Callable[[], web.Response]] = {}
        self.delay: float = 0.0

    def respond(self, path: str, status: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        if text is not None:
            self.responses[path] = lambda: web.Response(status=status, text=text)
        else:
            self.responses[path] = lambda: web.json_response(body, status=status)

    def hits(self, path: str) -> int:
        return sum(1 for request in self.requests if request["path"] == path)

    async def handle(self, request: web.Request) -> web.StreamResponse:
        body = None
        if request.can_read_body:
            body = await request.json()
        self.requests.append({
            "method": request.method,
            "path": request.path,
            "headers": dict(request.headers),
            "json": body,
        })
        if self.delay:
            await asyncio.sleep(self.delay)
        if request.path in self.responses:
            return self.responses[request.path]()
        return web.json_response({"status": 200, "message": "OK", "data": self.session_payload})

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/api/auth/login", self.handle)
        app.router.add_post("/api/auth/register", self.handle)
        app.router.add_get("/api/auth/validate", self.handle)
        return app


@pytest.fixture(scope="session")
def test_config() -> TestConfig:
    """Provide test configuration."""
    return TestConfig()


@pytest.fixture
def sample_session() -> AuthenticatedSession:
    return AuthenticatedSession(token="abc", user_id=1, email="a@b.com", name="A", role="USER")


@pytest.fixture
def session_payload() -> Dict[str, Any]:
    return {"token": "abc", "userId": 1, "email": "a@b.com", "name": "A", "role": "USER"}


@pytest.fixture
def other_record() -> StoredSessionRecord:
    return StoredSessionRecord(token="old-token", user_id=7, email="old@b.com", name="Old", role="ADMIN")


@pytest.fixture
def store_path(tmp_path) -> str:
    return str(tmp_path / "auth_prefs.json")


@pytest.fixture
def store(store_path) -> CredentialStore:
    return CredentialStore(store_path)


@pytest.fixture
def gateway() -> AsyncMock:
    """Auth gateway double; tests set return values per call."""
    return AsyncMock(spec=AuthGateway)


@pytest.fixture
def repository(gateway, store) -> SessionRepository:
    return SessionRepository(gateway, store)


@pytest.fixture
def unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest_asyncio.fixture
async def auth_service(session_payload):
    """Run a fake auth service and yield (service, base_url)."""
    service = FakeAuthService(session_payload)
    server = TestServer(service.build_app())
    await server.start_server()
    try:
        yield service, str(server.make_url("/"))
    finally:
        await server.close()


@pytest_asyncio.fixture
async def http_gateway(auth_service, test_config):
    """Real gateway pointed at the fake auth service."""
    _, base_url = auth_service
    gateway = AuthGateway(base_url, test_config.timeouts)
    try:
        yield gateway
    finally:
        await gateway.close()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as talking to a local HTTP server"
    )
