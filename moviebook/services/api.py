"""
Resource client for the booking backend.

Every request carries the session's bearer token. A 401 answer purges the
persisted credentials and triggers the session's reload hooks before the
error is raised to the caller; all other failures are raised as ApiError
and turned into display strings by the state layer.
"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from moviebook.core.config import API_ENDPOINTS, settings
from moviebook.core.session import SessionContext
from moviebook.database.schemas import (
    AuthResponse,
    Booking,
    BookingCreate,
    LoginRequest,
    Movie,
    MovieCreate,
    RegisterRequest,
    SeatsResponse,
    Showtime,
    ShowtimeCreate,
    Theatre,
    TheatreCreate,
    UserRole,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiError(Exception):
    """A failed backend request. status_code is None for network/timeout failures."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


def error_message(exc: BaseException, fallback: str) -> str:
    """Display string for a failure: the server's message when it sent one, else the fallback."""
    detail = getattr(exc, "detail", None)
    if isinstance(detail, str) and detail.strip():
        return detail
    return fallback


def _extract_detail(response: httpx.Response) -> Optional[Any]:
    if not response.headers.get("content-type", "").startswith("application/json"):
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get("detail") or body.get("message")


class ApiClient:
    def __init__(
        self,
        session: SessionContext,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self.base_url = base_url or settings.api_url
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        headers = {}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        client = self._get_http_client()
        try:
            response = await client.request(method, endpoint, json=json, params=params or None, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"✗ {method} {endpoint} timed out after {self.timeout}s")
            raise ApiError(f"Request timeout after {self.timeout}s") from e
        except httpx.HTTPError as e:
            logger.error(f"✗ {method} {endpoint} failed: {e}")
            raise ApiError(f"Request failed: {e}") from e

        if response.status_code == 401:
            self.session.force_reload()

        if response.status_code >= 400:
            detail = _extract_detail(response)
            logger.error(f"✗ {method} {endpoint} -> {response.status_code}: {detail}")
            raise ApiError(f"API error {response.status_code}", status_code=response.status_code, detail=detail)

        logger.debug(f"✓ {method} {endpoint} -> {response.status_code}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Invalid JSON in response", status_code=response.status_code) from e

    @staticmethod
    def _parse(model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            raise ApiError(f"Unexpected {model.__name__} payload") from e

    def _parse_list(self, model: Type[ModelT], data: Any) -> List[ModelT]:
        if not isinstance(data, list):
            raise ApiError(f"Expected a list of {model.__name__}")
        return [self._parse(model, item) for item in data]

    # ========================================
    # Auth
    # ========================================

    async def login(self, email: str, password: str) -> AuthResponse:
        payload = LoginRequest(email=email, password=password).to_payload()
        data = await self._request("POST", API_ENDPOINTS["AUTH"]["LOGIN"], json=payload)
        return self._parse(AuthResponse, data)

    async def register(self, name: str, email: str, password: str, role: UserRole = UserRole.USER) -> AuthResponse:
        payload = RegisterRequest(name=name, email=email, password=password, role=role).to_payload()
        data = await self._request("POST", API_ENDPOINTS["AUTH"]["REGISTER"], json=payload)
        return self._parse(AuthResponse, data)

    # ========================================
    # Movies
    # ========================================

    async def list_movies(self) -> List[Movie]:
        data = await self._request("GET", API_ENDPOINTS["MOVIES"])
        return self._parse_list(Movie, data)

    async def get_movie(self, movie_id: str) -> Movie:
        data = await self._request("GET", f"{API_ENDPOINTS['MOVIES']}/{movie_id}")
        return self._parse(Movie, data)

    async def create_movie(self, movie: MovieCreate) -> Movie:
        data = await self._request("POST", API_ENDPOINTS["MOVIES"], json=movie.to_payload())
        return self._parse(Movie, data)

    # ========================================
    # Theatres
    # ========================================

    async def list_theatres(self) -> List[Theatre]:
        data = await self._request("GET", API_ENDPOINTS["THEATRES"])
        return self._parse_list(Theatre, data)

    async def create_theatre(self, theatre: TheatreCreate) -> Theatre:
        data = await self._request("POST", API_ENDPOINTS["THEATRES"], json=theatre.to_payload())
        return self._parse(Theatre, data)

    # ========================================
    # Showtimes
    # ========================================

    async def list_showtimes(self, movie_id: Optional[str] = None, theatre_id: Optional[str] = None) -> List[Showtime]:
        params = {"movieId": movie_id, "theatreId": theatre_id}
        data = await self._request("GET", API_ENDPOINTS["SHOWTIMES"], params=params)
        return self._parse_list(Showtime, data)

    async def list_showtimes_by_movie(self, movie_id: str) -> List[Showtime]:
        return await self.list_showtimes(movie_id=movie_id)

    async def list_showtimes_by_theatre(self, theatre_id: str) -> List[Showtime]:
        return await self.list_showtimes(theatre_id=theatre_id)

    async def create_showtime(self, showtime: ShowtimeCreate) -> Showtime:
        data = await self._request("POST", API_ENDPOINTS["SHOWTIMES"], json=showtime.to_payload())
        return self._parse(Showtime, data)

    async def get_seats(self, showtime_id: str) -> SeatsResponse:
        data = await self._request("GET", f"{API_ENDPOINTS['SHOWTIMES']}/{showtime_id}/seats")
        return self._parse(SeatsResponse, data)

    # ========================================
    # Bookings
    # ========================================

    async def list_bookings(self) -> List[Booking]:
        data = await self._request("GET", API_ENDPOINTS["BOOKINGS"])
        return self._parse_list(Booking, data)

    async def get_booking(self, booking_id: str) -> Booking:
        data = await self._request("GET", f"{API_ENDPOINTS['BOOKINGS']}/{booking_id}")
        return self._parse(Booking, data)

    async def create_booking(self, booking: BookingCreate) -> Booking:
        data = await self._request("POST", API_ENDPOINTS["BOOKINGS"], json=booking.to_payload())
        return self._parse(Booking, data)

    async def cancel_booking(self, booking_id: str) -> Optional[Booking]:
        data = await self._request("DELETE", f"{API_ENDPOINTS['BOOKINGS']}/{booking_id}")
        if data is None:
            return None
        return self._parse(Booking, data)

    # ========================================
    # Health
    # ========================================

    async def health(self) -> Dict[str, Any]:
        data = await self._request("GET", API_ENDPOINTS["HEALTH"])
        return data or {}
