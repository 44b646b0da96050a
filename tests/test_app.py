import logging

import httpx
import pytest

from moviebook.core.config import Settings
from moviebook.core.storage import ClientStorage
from moviebook.main import MovieBookingApp, create_app
from moviebook.state.booking import BookingPhase


def test_settings_api_url():
    settings = Settings()
    settings.BACKEND_URL = "http://backend:9000"

    assert settings.api_url == "http://backend:9000/api"


@pytest.mark.asyncio
async def test_create_app_uses_storage_path(tmp_path, test_settings):
    test_settings.STORAGE_PATH = str(tmp_path / "storage.json")

    async with create_app(test_settings) as app:
        assert isinstance(app, MovieBookingApp)
        assert app.storage.path == tmp_path / "storage.json"
        assert app.api.base_url == "http://test/api"


@pytest.mark.asyncio
async def test_reload_resets_every_state(logged_in_app, catalog):
    app = logged_in_app
    await app.movies.fetch_all()
    await app.theatres.fetch_all()
    await app.showtimes.fetch_all()
    await app.booking.select_movie(app.movies.movies[0])
    app.movies.error = "stale"

    app.reload()

    assert app.movies.movies == []
    assert app.movies.error is None
    assert app.theatres.theatres == []
    assert app.showtimes.showtimes == []
    assert app.booking.selected_movie is None
    assert app.booking.phase == BookingPhase.IDLE
    # credentials are still persisted, so the session comes back
    assert app.auth.is_authenticated is True


@pytest.mark.asyncio
async def test_session_survives_restart(backend, test_settings, user_token):
    storage = ClientStorage()
    transport = httpx.ASGITransport(app=backend.app)
    async with create_app(test_settings, storage=storage, transport=transport) as first:
        await first.auth.login("user@example.com", "secret123")

    async with create_app(test_settings, storage=storage, transport=transport) as second:
        assert second.auth.is_authenticated is True
        result = await second.booking.fetch_bookings()
        assert result["ok"] is True


def test_setup_logging_honours_debug_flag(monkeypatch):
    from moviebook.core import config

    calls = {}
    monkeypatch.setattr(config, "ENABLE_DEBUG", True)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    config.setup_logging()

    assert calls["level"] == logging.DEBUG
    assert calls["format"] == config.LOG_FORMAT
