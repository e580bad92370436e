import os
import tempfile
from typing import Callable, Dict, List, Optional

import httpx
import pytest

# Keep test log output out of the project logs/ directory; app.py configures logging at import
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="transaction-service-logs-"))

from fastapi.testclient import TestClient

from api.deps import get_account_service
from app import app
from clients.account_service_client import AccountServiceClient

ACCOUNT_SERVICE_URL = "http://account-service.test"
ACCOUNT_NUMBER = 121212


class StubAccountService:
    """Stands in for the downstream account service behind an httpx.MockTransport.

    Routes are keyed by (method, path). Every request that reaches the stub is
    recorded in ``requests``.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[tuple, Callable[[httpx.Request], httpx.Response]] = {}
        self.stub("GET", f"/api/accounts/{ACCOUNT_NUMBER}/balance", lambda r: httpx.Response(
            200, headers={"Content-Type": "application/json"}, content=b"435.76"
        ))
        self.stub("POST", f"/api/accounts/{ACCOUNT_NUMBER}/transaction", lambda r: httpx.Response(204))
        self.stub("POST", f"/api/accounts/{ACCOUNT_NUMBER}/transaction-headers", lambda r: httpx.Response(
            200, headers={"Content-Type": "application/json"}, content=b'{"myHeader": ["myValue"]}'
        ))

    def stub(self, method: str, path: str, responder: Callable[[httpx.Request], httpx.Response]):
        self.routes[(method, path)] = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(404)
        return responder(request)

    @property
    def last_request(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None


@pytest.fixture
def account_service_stub() -> StubAccountService:
    return StubAccountService()


@pytest.fixture
def account_service_client(account_service_stub: StubAccountService) -> AccountServiceClient:
    return AccountServiceClient(ACCOUNT_SERVICE_URL, transport=httpx.MockTransport(account_service_stub))


@pytest.fixture
def client(account_service_client: AccountServiceClient):
    """TestClient with the account service dependency pointed at the stub.

    Server exceptions are turned into 500 responses, as a real server would do.
    """
    app.dependency_overrides[get_account_service] = lambda: account_service_client
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides = {}
