import pytest

from moviebook.core.config import POSTER_BASE_URL
from moviebook.database.schemas import Movie
from moviebook.utils import get_poster_base_url, get_poster_full_url, normalize_poster_url


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://example.com/poster.jpg", "https://example.com/poster.jpg"),
        ("/images/foo.jpg", "/images/foo.jpg"),
        ("D:\\posters\\foo.jpg", "/images/foo.jpg"),
        ("/srv/posters/foo.jpg", "/images/foo.jpg"),
        ("foo.jpg", "/images/foo.jpg"),
        ("   ", None),
        (None, None),
    ],
)
def test_normalize_poster_url(raw, expected):
    assert normalize_poster_url(raw) == expected


def test_full_url_uses_env_base(monkeypatch):
    monkeypatch.setenv("POSTER_BASE_URL", "https://cdn.example.com/")

    assert get_poster_full_url("foo.jpg") == "https://cdn.example.com/images/foo.jpg"
    assert get_poster_full_url("http://other/x.jpg") == "http://other/x.jpg"
    assert get_poster_full_url("") is None


def test_movie_poster_full_url(monkeypatch):
    monkeypatch.setenv("POSTER_BASE_URL", "https://cdn.example.com")
    movie = Movie.model_validate({"id": "m1", "title": "Dune", "posterUrl": "dune.jpg"})

    assert movie.poster_full_url == "https://cdn.example.com/images/dune.jpg"


def test_base_url_falls_back_to_config(monkeypatch):
    monkeypatch.delenv("POSTER_BASE_URL", raising=False)

    assert get_poster_base_url() == POSTER_BASE_URL
