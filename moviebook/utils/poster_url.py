"""
Utility functions for resolving movie poster URLs.

The backend stores posters either as absolute URLs (kept as-is) or as
paths/filenames relative to the poster host. Relative values are turned
into `/images/<filename>` and prefixed with the poster origin, e.g.
`http://localhost:8080/images/<filename>`.

Examples in this file use forward slashes to avoid escape-sequence issues.
"""
import os
from typing import Optional

from moviebook.core.config import POSTER_BASE_URL


def get_poster_base_url() -> str:
    """
    Origin used for relative poster paths.

    Checks POSTER_BASE_URL at call time, falling back to the configured backend.
    """
    base = os.getenv("POSTER_BASE_URL")
    if base:
        return base.rstrip("/")
    return POSTER_BASE_URL


def normalize_poster_url(raw: Optional[str]) -> Optional[str]:
    """
    Normalize a stored poster reference to a web path.

    - HTTP URL: https://example.com/poster.jpg  -> unchanged
    - Already normalized: /images/foo.jpg       -> unchanged
    - Windows path: D:/posters/foo.jpg          -> /images/foo.jpg
    - Unix path: /srv/posters/foo.jpg           -> /images/foo.jpg
    - Bare filename: foo.jpg                    -> /images/foo.jpg
    - None or blank                             -> None
    """
    if not raw:
        return None

    raw_str = str(raw).strip()
    if raw_str == "":
        return None

    if raw_str.startswith(("http://", "https://")):
        return raw_str

    if raw_str.startswith("/images/"):
        return raw_str

    filename = raw_str.replace("\\", "/").split("/")[-1]
    if not filename:
        return None
    return f"/images/{filename}"


def get_poster_full_url(raw: Optional[str]) -> Optional[str]:
    """
    Full URL for a poster: absolute URLs unchanged, relative ones prefixed with get_poster_base_url().
    """
    normalized = normalize_poster_url(raw)
    if not normalized:
        return None

    if normalized.startswith(("http://", "https://")):
        return normalized

    return f"{get_poster_base_url()}{normalized}"
