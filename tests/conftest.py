import httpx
import pytest
import pytest_asyncio

from moviebook.core.config import Settings
from moviebook.core.storage import ClientStorage
from moviebook.main import create_app

from tests.fake_backend import FakeBackend

TEST_EMAIL = "user@example.com"
TEST_PASSWORD = "secret123"


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def storage():
    return ClientStorage()


@pytest.fixture
def test_settings():
    settings = Settings()
    settings.BACKEND_URL = "http://test"
    settings.API_BASE = "/api"
    settings.REQUEST_TIMEOUT = 5.0
    return settings


@pytest_asyncio.fixture
async def app(backend, storage, test_settings):
    transport = httpx.ASGITransport(app=backend.app)
    app = create_app(test_settings, storage=storage, transport=transport)
    yield app
    await app.aclose()


@pytest.fixture
def user_token(backend):
    return backend.add_user(name="Test User", email=TEST_EMAIL, password=TEST_PASSWORD)


@pytest_asyncio.fixture
async def logged_in_app(app, user_token):
    result = await app.auth.login(TEST_EMAIL, TEST_PASSWORD)
    assert result["ok"] is True
    return app


@pytest.fixture
def catalog(backend):
    """One movie, one 1x3 theatre and a 250.0 showtime with A2 already booked."""
    movie = backend.add_movie("Inception")
    theatre = backend.add_theatre("PVR Cinemas", "Mumbai", rows=1, seats_per_row=3)
    showtime = backend.add_showtime(movie["id"], theatre["id"], price=250.0)
    backend.add_booking(showtime["id"], [("A", 2)], user_id="someone-else")
    return {"movie": movie, "theatre": theatre, "showtime": showtime}

