# moviebook/main.py
"""
Composition root: wires storage, session context, resource client and
every state object together, and owns the "full reload" that follows an
authorization failure.
"""
import logging
from typing import Optional

import httpx

from moviebook.core.config import Settings, settings as default_settings
from moviebook.core.session import SessionContext
from moviebook.core.storage import ClientStorage
from moviebook.services.api import ApiClient
from moviebook.state import (
    BookingWorkflow,
    MoviesState,
    SessionState,
    ShowtimesState,
    TheatresState,
)

logger = logging.getLogger(__name__)


class MovieBookingApp:
    def __init__(
        self,
        settings: Settings,
        storage: ClientStorage,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.storage = storage
        self.session = SessionContext(storage)
        self.api = ApiClient(
            self.session,
            base_url=settings.api_url,
            timeout=settings.REQUEST_TIMEOUT,
            transport=transport,
        )
        self.auth = SessionState(self.session, self.api)
        self.movies = MoviesState(self.api)
        self.theatres = TheatresState(self.api)
        self.showtimes = ShowtimesState(self.api)
        self.booking = BookingWorkflow(self.api, self.session)
        self.session.add_reload_hook(self.reload)

    def reload(self) -> None:
        """Reset every state object to its initial value and re-read the persisted session."""
        for state in (self.movies, self.theatres, self.showtimes, self.booking):
            state.reset()
        self.auth.reset()
        logger.info("🔄 Application state reloaded")

    async def aclose(self) -> None:
        await self.api.aclose()

    async def __aenter__(self) -> "MovieBookingApp":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[ClientStorage] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> MovieBookingApp:
    settings = settings or default_settings
    if storage is None:
        storage = ClientStorage(settings.STORAGE_PATH)
    app = MovieBookingApp(settings, storage, transport=transport)
    logger.info(f"✓ {settings.PROJECT_NAME} {settings.VERSION} -> {settings.api_url}")
    return app
