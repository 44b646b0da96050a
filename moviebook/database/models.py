# moviebook/database/models.py
# Tables written by the seed script; column names follow the backend's documents.
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from moviebook.database.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


# ==========================
# ✅ MOVIE MODEL
# ==========================
class Movie(Base):
    __tablename__ = "movies"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(150), nullable=False, index=True)
    description = Column(Text, nullable=True)
    genre = Column(String(50), nullable=True, index=True)
    rating = Column(Float, nullable=True)
    duration = Column(Integer, nullable=True)
    language = Column(String(50), nullable=True)
    poster_url = Column(String(500), nullable=True)
    release_date = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    showtimes = relationship("Showtime", back_populates="movie", cascade="all, delete")


# ==========================
# ✅ THEATRE MODEL
# ==========================
class Theatre(Base):
    __tablename__ = "theatres"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(150), nullable=False, index=True)
    location = Column(String(150), nullable=True, index=True)
    total_seats = Column(Integer, nullable=True)
    rows = Column(Integer, nullable=True)
    seats_per_row = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    showtimes = relationship("Showtime", back_populates="theatre", cascade="all, delete")


# ==========================
# ✅ SHOWTIME MODEL
# ==========================
class Showtime(Base):
    __tablename__ = "showtimes"

    id = Column(String(36), primary_key=True, default=new_id)
    movie_id = Column(String(36), ForeignKey("movies.id"), nullable=False, index=True)
    theatre_id = Column(String(36), ForeignKey("theatres.id"), nullable=False, index=True)
    show_date = Column(DateTime, nullable=False, index=True)
    price = Column(Float, nullable=False)
    available_seats = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    movie = relationship("Movie", back_populates="showtimes")
    theatre = relationship("Theatre", back_populates="showtimes")

    __table_args__ = (
        Index("ix_showtimes_movie_theatre_date", "movie_id", "theatre_id", "show_date"),
    )
