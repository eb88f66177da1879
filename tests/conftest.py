import json

import httpx
import pytest

import main
from config import settings
from routers import recommend
from utils import transport

KEY_VARS = ("OPENAI_API_KEY", "OPEN_AI_KEY", "OPEN_AI_KEY_FILE")


@pytest.fixture(autouse=True)
def isolated_keys(monkeypatch, tmp_path):
    """No key in the environment, the working directory or the secret mount."""
    for name in KEY_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "local_key_file", "OPEN_AI_KEY")
    monkeypatch.setattr(settings, "secret_key_file", str(tmp_path / "secrets" / "OPEN_AI_KEY"))
    monkeypatch.setattr(recommend.limiter, "enabled", False)


@pytest.fixture
async def client():
    asgi = httpx.ASGITransport(app=main.app)
    async with httpx.AsyncClient(transport=asgi, base_url="http://test") as c:
        yield c


class FakeUpstream:
    """Chat-completion API double served through httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status = 200
        self.body = ""
        self.error: Exception | None = None

    def reply_content(self, content):
        self.status = 200
        self.body = json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})

    def reply_raw(self, status: int, body: str):
        self.status = status
        self.body = body

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status, text=self.body)

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
async def upstream(monkeypatch):
    fake = FakeUpstream()
    mock_client = httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))
    monkeypatch.setattr(transport, "_client", mock_client)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    yield fake
    await mock_client.aclose()
