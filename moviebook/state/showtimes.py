"""
Showtime registry state, optionally filtered by movie or theatre.
"""
import logging
from typing import Any, Dict, List, Optional

from moviebook.database.schemas import Showtime, ShowtimeCreate
from moviebook.services.api import ApiClient, ApiError, error_message
from moviebook.services.forms import FormValidationError, validate_showtime_form
from moviebook.state.base import StateBase

logger = logging.getLogger(__name__)


class ShowtimesState(StateBase):
    def __init__(self, api: ApiClient):
        super().__init__()
        self.api = api
        self.showtimes: List[Showtime] = []

    def reset(self) -> None:
        super().reset()
        self.showtimes = []

    async def fetch_all(self, movie_id: Optional[str] = None, theatre_id: Optional[str] = None) -> Dict[str, Any]:
        self.loading = True
        self.error = None
        try:
            self.showtimes = await self.api.list_showtimes(movie_id=movie_id, theatre_id=theatre_id)
            return {"ok": True, "showtimes": self.showtimes}
        except ApiError as e:
            return self._fail(error_message(e, "Failed to fetch showtimes"))
        finally:
            self.loading = False

    async def create_one(self, payload: ShowtimeCreate) -> Dict[str, Any]:
        self.loading = True
        self.error = None
        try:
            showtime = await self.api.create_showtime(payload)
        except ApiError as e:
            return self._fail(error_message(e, "Failed to create showtime"))
        finally:
            self.loading = False

        self.showtimes = [*self.showtimes, showtime]
        logger.info(f"✓ Created showtime {showtime.id} for movie {showtime.movie_id}")
        return {"ok": True, "showtime": showtime}

    async def create_from_form(self, form: Dict[str, Any]) -> Dict[str, Any]:
        try:
            payload = validate_showtime_form(form)
        except FormValidationError as e:
            return self._fail(str(e))
        return await self.create_one(payload)
