"""
Movie catalog state.
"""
import logging
from typing import Any, Dict, List, Optional

from moviebook.database.schemas import Movie, MovieCreate
from moviebook.services.api import ApiClient, ApiError, error_message
from moviebook.services.forms import FormValidationError, validate_movie_form
from moviebook.state.base import StateBase

logger = logging.getLogger(__name__)


class MoviesState(StateBase):
    def __init__(self, api: ApiClient):
        super().__init__()
        self.api = api
        self.movies: List[Movie] = []

    def reset(self) -> None:
        super().reset()
        self.movies = []

    async def fetch_all(self) -> Dict[str, Any]:
        self.loading = True
        self.error = None
        try:
            self.movies = await self.api.list_movies()
            return {"ok": True, "movies": self.movies}
        except ApiError as e:
            return self._fail(error_message(e, "Failed to fetch movies"))
        finally:
            self.loading = False

    async def get_by_id(self, movie_id: str) -> Optional[Movie]:
        self.loading = True
        self.error = None
        try:
            return await self.api.get_movie(movie_id)
        except ApiError as e:
            self.error = error_message(e, "Failed to fetch movie details")
            return None
        finally:
            self.loading = False

    async def create_one(self, payload: MovieCreate) -> Dict[str, Any]:
        self.loading = True
        self.error = None
        try:
            movie = await self.api.create_movie(payload)
        except ApiError as e:
            return self._fail(error_message(e, "Failed to create movie"))
        finally:
            self.loading = False

        self.movies = [*self.movies, movie]
        logger.info(f"✓ Created movie {movie.id} ({movie.title})")
        return {"ok": True, "movie": movie}

    async def create_from_form(self, form: Dict[str, Any]) -> Dict[str, Any]:
        try:
            payload = validate_movie_form(form)
        except FormValidationError as e:
            return self._fail(str(e))
        return await self.create_one(payload)
