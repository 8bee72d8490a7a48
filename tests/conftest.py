import os
import sys
from pathlib import Path

os.environ.setdefault("TRACING_ENABLED", "false")


def _configure_path() -> None:
    src_path = Path(__file__).resolve().parents[1] / "src"
    if src_path.exists():
        sys.path.insert(0, str(src_path))


_configure_path()

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from giftcards_api.api.dependencies.reloadly import get_http_client  # noqa: E402
from giftcards_api.app import create_app  # noqa: E402
from giftcards_api.core.settings import Settings  # noqa: E402
from giftcards_api.services.reloadly.base import AccessToken  # noqa: E402

from reloadly_fakes import FakeReloadly, build_settings  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return build_settings()


@pytest.fixture
def fake_reloadly() -> FakeReloadly:
    return FakeReloadly()


@pytest.fixture
def production_token() -> AccessToken:
    return AccessToken(token="prod-token", is_sandbox=False)


@pytest.fixture
def sandbox_token() -> AccessToken:
    return AccessToken(token="sandbox-token", is_sandbox=True)


@pytest_asyncio.fixture
async def http_client(fake_reloadly):
    client = fake_reloadly.client()
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture
def app(settings, fake_reloadly):
    application = create_app(settings)

    async def override_http_client():
        async with fake_reloadly.client() as client:
            yield client

    application.dependency_overrides[get_http_client] = override_http_client
    try:
        yield application
    finally:
        application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
