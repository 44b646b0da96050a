import json

import httpx
import pytest

from moviebook.core.session import SessionContext
from moviebook.core.storage import ClientStorage
from moviebook.database.schemas import BookingCreate, BookingSeat
from moviebook.services.api import ApiClient, ApiError, error_message


def _client(handler, session=None):
    session = session or SessionContext(ClientStorage())
    return ApiClient(session, base_url="http://test/api", timeout=1.0, transport=httpx.MockTransport(handler))


def test_error_message_prefers_server_detail():
    assert error_message(ApiError("x", 400, "Seat A1 is already booked"), "fallback") == "Seat A1 is already booked"
    assert error_message(ApiError("x", 500), "fallback") == "fallback"
    assert error_message(ApiError("x", 422, [{"msg": "bad"}]), "fallback") == "fallback"
    assert error_message(ValueError("boom"), "fallback") == "fallback"


@pytest.mark.asyncio
async def test_bearer_token_attached():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[])

    session = SessionContext(ClientStorage())
    session.token = "tok"
    api = _client(handler, session)

    await api.list_movies()
    await api.aclose()

    assert seen["auth"] == "Bearer tok"


@pytest.mark.asyncio
async def test_no_authorization_header_without_token():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[])

    api = _client(handler)
    await api.list_theatres()
    await api.aclose()

    assert seen["auth"] is None


@pytest.mark.asyncio
async def test_showtime_filters_drop_missing_params():
    seen = {}

    def handler(request):
        seen["url"] = request.url
        return httpx.Response(200, json=[])

    api = _client(handler)
    await api.list_showtimes(movie_id="m1")
    await api.aclose()

    assert seen["url"].path == "/api/showtimes"
    assert dict(seen["url"].params) == {"movieId": "m1"}


@pytest.mark.asyncio
async def test_timeout_becomes_api_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    api = _client(handler)
    with pytest.raises(ApiError) as exc_info:
        await api.list_movies()
    await api.aclose()

    assert exc_info.value.status_code is None
    assert error_message(exc_info.value, "Failed to fetch movies") == "Failed to fetch movies"


@pytest.mark.asyncio
async def test_message_field_used_as_detail():
    def handler(request):
        return httpx.Response(400, json={"success": False, "message": "Showtime not found"})

    api = _client(handler)
    with pytest.raises(ApiError) as exc_info:
        await api.get_seats("s1")
    await api.aclose()

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Showtime not found"


@pytest.mark.asyncio
async def test_unauthorized_triggers_reload():
    calls = []
    session = SessionContext(ClientStorage())
    session.token = "stale"
    session.add_reload_hook(lambda: calls.append(True))

    api = _client(lambda request: httpx.Response(401, json={"detail": "Invalid or expired token"}), session)
    with pytest.raises(ApiError) as exc_info:
        await api.list_bookings()
    await api.aclose()

    assert exc_info.value.is_unauthorized
    assert calls == [True]
    assert session.token is None


@pytest.mark.asyncio
async def test_invalid_json_and_bad_payload():
    api = _client(lambda request: httpx.Response(200, content=b"<html>", headers={"content-type": "text/html"}))
    with pytest.raises(ApiError, match="Invalid JSON"):
        await api.list_movies()
    await api.aclose()

    api = _client(lambda request: httpx.Response(200, json={"not": "a list"}))
    with pytest.raises(ApiError):
        await api.list_movies()
    await api.aclose()


@pytest.mark.asyncio
async def test_cancel_booking_tolerates_empty_body():
    api = _client(lambda request: httpx.Response(204))

    assert await api.cancel_booking("b1") is None
    await api.aclose()


@pytest.mark.asyncio
async def test_create_booking_payload_is_camel_case():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={
            "id": "b1", "showtimeId": "s1", "totalAmount": 250.0, "status": "CONFIRMED",
            "seats": [{"row": "A", "number": 1, "status": "BOOKED"}],
        })

    api = _client(handler)
    booking = await api.create_booking(
        BookingCreate(showtime_id="s1", seats=[BookingSeat(row="A", number=1)], total_amount=250.0)
    )
    await api.aclose()

    assert seen["body"] == {
        "showtimeId": "s1",
        "seats": [{"row": "A", "number": 1, "status": "BOOKED"}],
        "totalAmount": 250.0,
    }
    assert booking.status.value == "confirmed"
    assert booking.seats[0].is_booked


@pytest.mark.asyncio
async def test_health_against_fake_backend(app):
    assert (await app.api.health())["status"] == "UP"


@pytest.mark.asyncio
async def test_showtimes_by_movie_and_theatre(app, backend, catalog):
    other = backend.add_theatre("INOX", "Delhi", rows=8, seats_per_row=10)
    backend.add_showtime(catalog["movie"]["id"], other["id"])

    by_movie = await app.api.list_showtimes_by_movie(catalog["movie"]["id"])
    by_theatre = await app.api.list_showtimes_by_theatre(other["id"])

    assert len(by_movie) == 2
    assert [s.theatre_name for s in by_theatre] == ["INOX"]
