"""
Booking workflow state: movie -> showtime -> seat map -> booking.

Phases:
    IDLE -> MOVIE_SELECTED -> SHOWTIME_SELECTED -> SEATS_LOADED
         -> SEATS_CHOSEN -> BOOKING -> BOOKED | FAILED

Each transition awaits at most one backend request. Requests are not
fenced: if the same action runs twice concurrently, whichever response
lands last decides the state.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from moviebook.core.session import SessionContext
from moviebook.database.schemas import (
    Booking,
    BookingCreate,
    BookingSeat,
    Movie,
    Seat,
    Showtime,
    Theatre,
)
from moviebook.services.api import ApiClient, ApiError, error_message
from moviebook.services.forms import first_error
from moviebook.state.base import StateBase

logger = logging.getLogger(__name__)

NO_SEATS_SELECTED = "Please select at least one seat"
NO_SHOWTIME_SELECTED = "Please select a showtime"
LOGIN_TO_BOOK = "Please login to book tickets"
LOGIN_TO_CANCEL = "Please login to cancel bookings"
BOOKING_FAILED = "Booking failed. Please try again."


class BookingPhase(str, Enum):
    IDLE = "idle"
    MOVIE_SELECTED = "movie_selected"
    SHOWTIME_SELECTED = "showtime_selected"
    SEATS_LOADED = "seats_loaded"
    SEATS_CHOSEN = "seats_chosen"
    BOOKING = "booking"
    BOOKED = "booked"
    FAILED = "failed"


class BookingWorkflow(StateBase):
    def __init__(self, api: ApiClient, session: Optional[SessionContext] = None):
        super().__init__()
        self.api = api
        # without a session context the login gate is skipped
        self.session = session
        self.bookings: List[Booking] = []
        self._clear()

    def _clear(self) -> None:
        self.phase = BookingPhase.IDLE
        self.selected_movie: Optional[Movie] = None
        self.selected_showtime: Optional[Showtime] = None
        self.showtimes: List[Showtime] = []
        self.seats: List[Seat] = []
        self.seat_theatre: Optional[Theatre] = None
        self.selected_seats: List[Seat] = []

    def reset(self) -> None:
        super().reset()
        self._clear()
        self.bookings = []

    # ========================================
    # Derived state
    # ========================================

    @property
    def total_amount(self) -> float:
        if self.selected_showtime is None:
            return 0
        return len(self.selected_seats) * self.selected_showtime.price

    def is_seat_selected(self, seat: Seat) -> bool:
        return any(s.key == seat.key for s in self.selected_seats)

    def _login_required(self) -> bool:
        return self.session is not None and not self.session.is_authenticated

    # ========================================
    # Selection
    # ========================================

    async def select_movie(self, movie: Movie) -> Dict[str, Any]:
        """Record the movie, then load its showtimes. The selection stands even if the fetch fails."""
        self.loading = True
        self.error = None
        self.selected_movie = movie
        self.selected_showtime = None
        self.showtimes = []
        self.seats = []
        self.seat_theatre = None
        self.selected_seats = []
        self.phase = BookingPhase.MOVIE_SELECTED
        try:
            self.showtimes = await self.api.list_showtimes_by_movie(movie.id)
            return {"ok": True, "showtimes": self.showtimes}
        except ApiError as e:
            return self._fail(error_message(e, "Failed to fetch showtimes"))
        finally:
            self.loading = False

    async def select_showtime(self, showtime: Showtime) -> Dict[str, Any]:
        self.loading = True
        self.error = None
        self.selected_showtime = showtime
        self.seats = []
        self.seat_theatre = None
        self.selected_seats = []
        self.phase = BookingPhase.SHOWTIME_SELECTED
        try:
            seat_data = await self.api.get_seats(showtime.id)
        except ApiError as e:
            return self._fail(error_message(e, "Failed to fetch seats"))
        finally:
            self.loading = False

        self.seats = seat_data.seats
        self.seat_theatre = seat_data.theatre
        self.phase = BookingPhase.SEATS_LOADED
        return {"ok": True, "seats": self.seats}

    def toggle_seat(self, seat: Seat) -> None:
        """Add or remove a seat, keyed by (row, number). Booked seats are ignored."""
        if seat.is_booked:
            return
        # the loaded seat map may know better than a stale seat object
        if any(s.key == seat.key and s.is_booked for s in self.seats):
            return

        if self.is_seat_selected(seat):
            self.selected_seats = [s for s in self.selected_seats if s.key != seat.key]
        else:
            self.selected_seats = [*self.selected_seats, seat]

        self.phase = BookingPhase.SEATS_CHOSEN if self.selected_seats else BookingPhase.SEATS_LOADED

    def clear_selection(self) -> None:
        """Drop movie, showtime, seats and selection; bookings are kept."""
        self._clear()
        self.error = None

    # ========================================
    # Bookings
    # ========================================

    async def book_tickets(self) -> Dict[str, Any]:
        if not self.selected_seats:
            return {"ok": False, "error": NO_SEATS_SELECTED}
        if self.selected_showtime is None:
            return {"ok": False, "error": NO_SHOWTIME_SELECTED}
        if self._login_required():
            return {"ok": False, "error": LOGIN_TO_BOOK}

        self.loading = True
        self.error = None
        self.phase = BookingPhase.BOOKING
        showtime = self.selected_showtime
        total_amount = len(self.selected_seats) * showtime.price
        try:
            request = BookingCreate(
                showtime_id=showtime.id,
                seats=[BookingSeat(row=s.row, number=s.number) for s in self.selected_seats],
                total_amount=total_amount,
            )
            booking = await self.api.create_booking(request)
        except ValidationError as e:
            logger.error(f"✗ Invalid booking request for showtime {showtime.id}: {first_error(e)}")
            self.phase = BookingPhase.FAILED
            return self._fail(BOOKING_FAILED)
        except ApiError as e:
            # selection is kept so the user can retry
            self.phase = BookingPhase.FAILED
            return self._fail(error_message(e, BOOKING_FAILED))
        finally:
            self.loading = False

        self.selected_seats = []
        self.phase = BookingPhase.BOOKED
        logger.info(f"✓ Booked {len(request.seats)} seat(s) for showtime {showtime.id}, total {total_amount}")

        try:
            self.bookings = await self.api.list_bookings()
        except ApiError as e:
            logger.warning(f"Failed to fetch updated bookings: {e}")

        return {"ok": True, "total_amount": total_amount, "booking": booking}

    async def fetch_bookings(self) -> Dict[str, Any]:
        self.loading = True
        self.error = None
        try:
            self.bookings = await self.api.list_bookings()
            return {"ok": True, "bookings": self.bookings}
        except ApiError as e:
            return self._fail(error_message(e, "Failed to fetch bookings"))
        finally:
            self.loading = False

    async def get_booking_by_id(self, booking_id: str) -> Optional[Booking]:
        self.loading = True
        self.error = None
        try:
            return await self.api.get_booking(booking_id)
        except ApiError as e:
            self.error = error_message(e, "Failed to fetch booking details")
            return None
        finally:
            self.loading = False

    async def cancel_booking(self, booking_id: str) -> Dict[str, Any]:
        """Cancel on the backend, then drop the booking from the local list."""
        if self._login_required():
            return {"ok": False, "error": LOGIN_TO_CANCEL}

        self.loading = True
        self.error = None
        try:
            await self.api.cancel_booking(booking_id)
        except ApiError as e:
            return self._fail(error_message(e, "Failed to cancel booking"))
        finally:
            self.loading = False

        self.bookings = [b for b in self.bookings if b.id != booking_id]
        logger.info(f"Cancelled booking {booking_id}")
        return {"ok": True}
