from .auth import SessionState
from .booking import BookingPhase, BookingWorkflow
from .movies import MoviesState
from .showtimes import ShowtimesState
from .theatres import TheatresState

__all__ = [
    "SessionState",
    "BookingPhase",
    "BookingWorkflow",
    "MoviesState",
    "ShowtimesState",
    "TheatresState",
]
