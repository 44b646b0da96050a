"""Seed the database with the sample catalog: movies, theatres and their showtimes.

Run with the virtualenv activated:
python scripts/seed_data.py        (or: moviebook-seed)

Existing movies, theatres and showtimes are removed first.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.engine import Engine

from moviebook.core.config import setup_logging
from moviebook.database import models
from moviebook.database.database import Base, SessionLocal, engine as default_engine

logger = logging.getLogger(__name__)

SHOWTIME_PRICE = 250.0

MOVIES: List[Dict] = [
    {
        "title": "The Dark Knight",
        "description": "When the menace known as the Joker wreaks havoc and chaos on the people of Gotham, Batman must accept one of the greatest psychological and physical tests of his ability to fight injustice.",
        "genre": "Action",
        "rating": 9.0,
        "duration": 152,
        "language": "English",
        "poster_url": "https://images.pexels.com/photos/3137890/pexels-photo-3137890.jpeg",
        "release_date": datetime(2024, 3, 15),
    },
    {
        "title": "Inception",
        "description": "A thief who steals corporate secrets through dream-sharing technology is given the inverse task of planting an idea into the mind of a C.E.O.",
        "genre": "Sci-Fi",
        "rating": 8.8,
        "duration": 148,
        "language": "English",
        "poster_url": "https://images.unsplash.com/photo-1572188863110-46d457c9234d",
        "release_date": datetime(2024, 3, 20),
    },
    {
        "title": "Interstellar",
        "description": "A team of explorers travel through a wormhole in space in an attempt to ensure humanity's survival.",
        "genre": "Sci-Fi",
        "rating": 8.6,
        "duration": 169,
        "language": "English",
        "poster_url": "https://images.pexels.com/photos/109669/pexels-photo-109669.jpeg",
        "release_date": datetime(2024, 3, 25),
    },
    {
        "title": "Avengers: Endgame",
        "description": "After the devastating events of Infinity War, the Avengers assemble once more to reverse Thanos' actions and restore balance to the universe.",
        "genre": "Action",
        "rating": 8.4,
        "duration": 181,
        "language": "English",
        "poster_url": "https://images.pexels.com/photos/33129/popcorn-movie-party-entertainment.jpg",
        "release_date": datetime(2024, 4, 1),
    },
    {
        "title": "Spider-Man: No Way Home",
        "description": "Spider-Man's identity is revealed and he asks Doctor Strange for help, but when a spell goes wrong, dangerous foes from other worlds appear.",
        "genre": "Action",
        "rating": 8.2,
        "duration": 148,
        "language": "English",
        "poster_url": "https://images.pexels.com/photos/375885/pexels-photo-375885.jpeg",
        "release_date": datetime(2024, 4, 5),
    },
    {
        "title": "Dune",
        "description": "Paul Atreides leads nomadic tribes in a revolt against the evil Harkonnen oppressors on the desert planet Arrakis.",
        "genre": "Sci-Fi",
        "rating": 8.0,
        "duration": 155,
        "language": "English",
        "poster_url": "https://images.unsplash.com/photo-1517604931442-7e0c8ed2963c",
        "release_date": datetime(2024, 4, 10),
    },
]

THEATRES: List[Dict] = [
    {"name": "PVR Cinemas", "location": "Mumbai", "total_seats": 100, "rows": 10, "seats_per_row": 10},
    {"name": "INOX", "location": "Delhi", "total_seats": 80, "rows": 8, "seats_per_row": 10},
    {"name": "Cinepolis", "location": "Bangalore", "total_seats": 120, "rows": 12, "seats_per_row": 10},
]

# daily slots (UTC)
SHOW_TIMES: List[datetime] = [
    datetime(2024, 3, 16, 10, 0),
    datetime(2024, 3, 16, 13, 30),
    datetime(2024, 3, 16, 17, 0),
    datetime(2024, 3, 16, 20, 30),
]


def build_corpus():
    """Movies, theatres, and one showtime per movie x theatre x slot."""
    movies = [models.Movie(id=models.new_id(), **m) for m in MOVIES]
    theatres = [models.Theatre(id=models.new_id(), **t) for t in THEATRES]
    showtimes = []
    for movie in movies:
        for theatre in theatres:
            for show_time in SHOW_TIMES:
                showtimes.append(models.Showtime(
                    id=models.new_id(),
                    movie_id=movie.id,
                    theatre_id=theatre.id,
                    show_date=show_time,
                    price=SHOWTIME_PRICE,
                    available_seats=theatre.total_seats,
                ))
    return movies, theatres, showtimes


def seed(engine: Optional[Engine] = None) -> Dict[str, int]:
    engine = engine or default_engine
    # ensure tables (and their indexes) exist
    Base.metadata.create_all(bind=engine)
    db = SessionLocal(bind=engine)
    try:
        logger.info("Clearing existing movies, theatres and showtimes...")
        db.query(models.Showtime).delete()
        db.query(models.Theatre).delete()
        db.query(models.Movie).delete()

        movies, theatres, showtimes = build_corpus()
        db.add_all(movies)
        db.add_all(theatres)
        db.flush()
        db.add_all(showtimes)
        db.commit()
        logger.info(f"Inserted {len(movies)} movies, {len(theatres)} theatres, {len(showtimes)} showtimes")

        summary = {
            "movies": db.query(models.Movie).count(),
            "theatres": db.query(models.Theatre).count(),
            "showtimes": db.query(models.Showtime).count(),
        }
        if summary != {"movies": len(movies), "theatres": len(theatres), "showtimes": len(showtimes)}:
            logger.error(f"✗ Seed verification mismatch: {summary}")
        else:
            logger.info(f"✓ Seed verified: {summary}")
        return summary
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()


def main() -> None:
    setup_logging()
    seed()


if __name__ == "__main__":
    main()
