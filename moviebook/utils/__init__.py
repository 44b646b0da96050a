"""
Utility modules for the client
"""
from .poster_url import get_poster_base_url, normalize_poster_url, get_poster_full_url

__all__ = [
    "get_poster_base_url",
    "normalize_poster_url",
    "get_poster_full_url",
]
