import sys
import json
from pathlib import Path

# Ensure project root is on sys.path so `import guestbook` works
ROOT = str(Path(__file__).resolve().parents[2])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from guestbook.app.main import create_app
from guestbook.core.config import Settings
from guestbook.core.deps import get_backend_client

BACKEND_ADDR = "backend.test:8080"


class FakeBackend:
    """
    httpx.MockTransport 핸들러로 쓰는 가짜 방명록 백엔드.
    받은 요청을 모두 기록하며, 상태 코드/본문/네트워크 에러를 테스트마다 바꿀 수 있습니다.
    """
    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.messages: list[dict] = []
        self.get_status = 200
        self.get_body: str | None = None
        self.post_status = 200
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if request.method == "GET":
            body = self.get_body if self.get_body is not None else json.dumps(self.messages)
            return httpx.Response(self.get_status, content=body.encode())
        if self.post_status == 200:
            self.messages.append(json.loads(request.content))
        return httpx.Response(self.post_status, text="")

    @property
    def posts(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def settings():
    return Settings(GUESTBOOK_API_ADDR=BACKEND_ADDR, PORT=8080)

@pytest.fixture
def backend():
    return FakeBackend()

@pytest_asyncio.fixture(scope="function")
async def backend_client(backend):
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend)) as c:
        yield c

@pytest.fixture
def app(settings, backend):
    app = create_app(settings)

    async def override_get_backend_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(backend)) as c:
            yield c

    app.dependency_overrides[get_backend_client] = override_get_backend_client
    yield app
    app.dependency_overrides.clear()

@pytest_asyncio.fixture(scope="function")
async def client(app):
    """
    httpx.AsyncClient를 사용하여 비동기 API 테스트
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
