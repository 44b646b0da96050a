# moviebook/database/schemas.py
# =========================================================
# 🧩 Movie Booking Resource Schemas (Pydantic v2)
# =========================================================
# The backend speaks camelCase JSON; fields here are snake_case and
# accept either spelling on input.

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from moviebook.utils.poster_url import get_poster_full_url


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_payload(self) -> dict:
        """JSON-ready dict with the backend's camelCase keys."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


# =========================================================
# 🔖 Enums
# =========================================================
class SeatStatus(str, Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    SELECTED = "selected"


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    PENDING = "pending"


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"


# =========================================================
# 🎬 Movie Schemas
# =========================================================
class Movie(ApiModel):
    id: str
    title: str
    description: Optional[str] = None
    genre: Optional[str] = None
    rating: Optional[float] = None
    duration: Optional[int] = None  # minutes
    language: Optional[str] = None
    poster_url: Optional[str] = None
    release_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def poster_full_url(self) -> Optional[str]:
        return get_poster_full_url(self.poster_url)


class MovieCreate(ApiModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    genre: str = Field(..., min_length=1)
    rating: Optional[float] = Field(None, ge=0.0, le=10.0)
    duration: Optional[int] = Field(None, gt=0)
    language: str = Field(..., min_length=1)
    poster_url: str = Field(..., min_length=1)
    release_date: datetime


# =========================================================
# 🏛 Theatre Schemas
# =========================================================
class Theatre(ApiModel):
    id: str
    name: str
    location: Optional[str] = None
    # rows * seats_per_row is expected to equal total_seats; nothing checks it
    total_seats: Optional[int] = None
    rows: Optional[int] = None
    seats_per_row: Optional[int] = None


class TheatreCreate(ApiModel):
    name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    total_seats: Optional[int] = Field(None, gt=0)
    rows: Optional[int] = Field(None, gt=0)
    seats_per_row: Optional[int] = Field(None, gt=0)


# =========================================================
# 🎞 Showtime Schemas
# =========================================================
class Showtime(ApiModel):
    id: str
    movie_id: str
    theatre_id: str
    show_date: datetime
    price: float
    available_seats: Optional[int] = None
    # display-only extras some backends join in
    theatre_name: Optional[str] = None
    movie_title: Optional[str] = None


class ShowtimeCreate(ApiModel):
    movie_id: str = Field(..., min_length=1)
    theatre_id: str = Field(..., min_length=1)
    show_date: datetime
    price: float = Field(..., gt=0)


# =========================================================
# 💺 Seat Schemas
# =========================================================
class Seat(ApiModel):
    model_config = ConfigDict(frozen=True)

    row: str
    number: int
    status: SeatStatus = SeatStatus.AVAILABLE

    @field_validator("status", mode="before")
    @classmethod
    def _lower_status(cls, value):
        # backend enums arrive upper-case ("BOOKED")
        if isinstance(value, str):
            return value.lower()
        return value

    @property
    def key(self) -> Tuple[str, int]:
        return (self.row, self.number)

    @property
    def label(self) -> str:
        return f"{self.row}{self.number}"

    @property
    def is_booked(self) -> bool:
        return self.status == SeatStatus.BOOKED


class SeatsResponse(ApiModel):
    showtime_id: Optional[str] = None
    theatre: Optional[Theatre] = None
    seats: List[Seat] = Field(default_factory=list)


# =========================================================
# 🎟 Booking Schemas
# =========================================================
class BookingSeat(ApiModel):
    """Seat as submitted in a booking request."""
    row: str
    number: int
    status: str = "BOOKED"


class BookingCreate(ApiModel):
    showtime_id: str = Field(..., min_length=1)
    seats: List[BookingSeat] = Field(..., min_length=1)
    total_amount: float = Field(..., gt=0)


class Booking(ApiModel):
    id: str
    showtime_id: str
    seats: List[Seat] = Field(default_factory=list)
    total_amount: float
    status: BookingStatus = BookingStatus.CONFIRMED
    booking_date: Optional[datetime] = None
    user_id: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _lower_status(cls, value):
        if isinstance(value, str):
            return value.lower()
        return value

    @property
    def is_cancellable(self) -> bool:
        return self.status == BookingStatus.CONFIRMED


# =========================================================
# 👤 Session / Auth Schemas
# =========================================================
class SessionUser(ApiModel):
    id: str
    name: str
    # the backend may hand back addresses EmailStr rejects (e.g. .local)
    email: str
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class LoginRequest(ApiModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(ApiModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)
    role: UserRole = UserRole.USER


class AuthResponse(ApiModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUser
