"""
Admin form validation.

Forms arrive as raw string fields (as typed into an input); each validator
checks the required fields, converts the rest and returns the typed create
payload, or raises FormValidationError with a message fit for display.
"""
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError

from moviebook.database.schemas import MovieCreate, ShowtimeCreate, TheatreCreate


class FormValidationError(ValueError):
    pass


def first_error(exc: ValidationError) -> str:
    """Human readable text for the first pydantic error."""
    errors = exc.errors()
    if not errors:
        return "Invalid input."
    err = errors[0]
    field = ".".join(str(part) for part in err.get("loc", ()))
    message = err.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


def _clean(form: Dict[str, Any]) -> Dict[str, Optional[str]]:
    cleaned = {}
    for key, value in form.items():
        if isinstance(value, str):
            value = value.strip()
        cleaned[key] = value if value not in ("", None) else None
    return cleaned


def _require(form: Dict[str, Optional[str]], fields: Iterable[str], message: str) -> None:
    if any(form.get(field) is None for field in fields):
        raise FormValidationError(message)


def validate_movie_form(form: Dict[str, Any]) -> MovieCreate:
    data = _clean(form)
    _require(
        data,
        ("title", "description", "genre", "language", "poster_url"),
        "Title, description, genre, language, and poster URL are required.",
    )
    _require(data, ("release_date",), "Release date is required.")
    try:
        return MovieCreate(
            title=data["title"],
            description=data["description"],
            genre=data["genre"],
            rating=data.get("rating"),
            duration=data.get("duration"),
            language=data["language"],
            poster_url=data["poster_url"],
            release_date=data["release_date"],
        )
    except ValidationError as e:
        raise FormValidationError(first_error(e)) from e


def validate_theatre_form(form: Dict[str, Any]) -> TheatreCreate:
    data = _clean(form)
    _require(data, ("name", "location"), "Name and location are required.")
    try:
        return TheatreCreate(
            name=data["name"],
            location=data["location"],
            total_seats=data.get("total_seats"),
            rows=data.get("rows"),
            seats_per_row=data.get("seats_per_row"),
        )
    except ValidationError as e:
        raise FormValidationError(first_error(e)) from e


def validate_showtime_form(form: Dict[str, Any]) -> ShowtimeCreate:
    data = _clean(form)
    _require(data, ("movie_id", "theatre_id", "show_date", "price"), "All fields are required.")
    try:
        return ShowtimeCreate(
            movie_id=data["movie_id"],
            theatre_id=data["theatre_id"],
            show_date=data["show_date"],
            price=data["price"],
        )
    except ValidationError as e:
        raise FormValidationError(first_error(e)) from e
