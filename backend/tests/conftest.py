"""Shared test fixtures - isolated app, store and HTTP client per test.

Invariants:
    - Every test gets a fresh file-backed SQLite database under tmp_path
    - The app under test is built by create_app(), never the module-level app
    - Rate limiting is off unless a test turns it on explicitly

Design Decisions:
    - httpx ASGITransport does not run lifespan, so fixtures call
      init_schema()/dispose() themselves
    - base_url host is the allowed domain, so Host passes unless overridden
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")

import pytest
from httpx import ASGITransport, AsyncClient

from contactform.config import Settings
from contactform.infrastructure.contact_store import ContactStore
from contactform.main import create_app

ALLOWED_DOMAIN = "example.com"


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'contacts.db'}"


@pytest.fixture
def settings(database_url):
    return Settings(
        allowed_domain=ALLOWED_DOMAIN,
        database_url=database_url,
        rate_limit_enabled=False,
        log_format="text",
    )


@pytest.fixture
async def store(database_url):
    s = ContactStore(database_url)
    await s.init_schema()
    yield s
    await s.dispose()


@pytest.fixture
async def make_app():
    """Build apps from Settings; schema is created, engines disposed at teardown."""
    built = []

    async def _make(settings: Settings):
        app = create_app(settings)
        await app.state.context.store.init_schema()
        built.append(app)
        return app

    yield _make
    for built_app in built:
        await built_app.state.context.store.dispose()


@pytest.fixture
async def app(make_app, settings):
    return await make_app(settings)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url=f"http://{ALLOWED_DOMAIN}",
    ) as c:
        yield c


@pytest.fixture
def valid_form():
    return {
        "name": "Ann",
        "email": "ann@example.com",
        "subject": "Hi",
        "message": "Hello",
    }
