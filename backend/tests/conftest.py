import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config import Settings
from app.services.ban_registry import BanRegistry
from app.services.storage import UploadSigner
from app.services.uploads import UploadAuthorizationService

AUTHOR_UUID = "00000000-0000-0000-0000-000000000001"
MODULE_UUID = "00000000-0000-0000-0000-000000000002"


class DummyBanRegistry(BanRegistry):
    def __init__(self, events: list[str]) -> None:  # type: ignore[super-init-not-called]
        self.timeout = 1.0
        self.events = events
        self.restricted = False
        self.error: Exception | None = None
        self.calls: list[tuple] = []

    async def check_restricted(self, author_id, module_id) -> bool:  # type: ignore[override]
        self.calls.append((author_id, module_id))
        self.events.append("ban_check")
        if self.error is not None:
            raise self.error
        return self.restricted

    async def ping(self) -> bool:  # type: ignore[override]
        return True


class DummySigner(UploadSigner):
    def __init__(self, events: list[str]) -> None:  # type: ignore[super-init-not-called]
        self.bucket = "dummy"
        self.events = events
        self.error: Exception | None = None
        self.calls: list[dict] = []

    def issue_upload_grant(self, object_key, content_type, content_length, metadata) -> str:  # type: ignore[override]
        self.calls.append(
            {
                "object_key": object_key,
                "content_type": content_type,
                "content_length": content_length,
                "metadata": dict(metadata),
            }
        )
        self.events.append("sign")
        if self.error is not None:
            raise self.error
        return f"https://example.com/put/{object_key}"


@pytest.fixture
def make_settings():
    def _make(**overrides) -> Settings:
        values = {
            "ENV": "test",
            "DATABASE_URL": "sqlite+aiosqlite:///./test.db",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def registry(events) -> DummyBanRegistry:
    return DummyBanRegistry(events)


@pytest.fixture
def signer(events) -> DummySigner:
    return DummySigner(events)


@pytest.fixture
def upload_service(registry, signer) -> UploadAuthorizationService:
    return UploadAuthorizationService(registry, signer)


@pytest.fixture
def app_instance(make_settings, upload_service):
    from app.main import create_app

    app = create_app(make_settings())
    # Setup state for tests, mimicking lifespan events
    app.state.upload_service = upload_service
    return app


@pytest_asyncio.fixture
async def client(app_instance):
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def upload_payload() -> dict:
    return {
        "name": "test.png",
        "type": "image/png",
        "size": 1024,
        "authorUUID": AUTHOR_UUID,
        "moduleUUID": MODULE_UUID,
    }
