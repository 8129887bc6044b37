"""Blog post slug derivation and collision resolution."""

from __future__ import annotations

import logging
import re
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)

FALLBACK_SLUG = "post"

_TURKISH_TO_ASCII = str.maketrans(
    {
        "ç": "c",
        "ğ": "g",
        "ı": "i",
        "ö": "o",
        "ş": "s",
        "ü": "u",
        "Ç": "C",
        "Ğ": "G",
        "İ": "I",
        "Ö": "O",
        "Ş": "S",
        "Ü": "U",
    }
)
_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


def transliterate(text: str) -> str:
    """Map Turkish diacritics to their closest ASCII letters."""
    return text.translate(_TURKISH_TO_ASCII)


def slugify(text: str) -> str:
    """Normalize ``text`` into lowercase ASCII letters, digits and single hyphens.

    >>> slugify("İleri Seviye Web Geliştirme")
    'ileri-seviye-web-gelistirme'
    """
    value = transliterate(text).lower()
    value = _DISALLOWED.sub("", value)
    value = _WHITESPACE_RUN.sub("-", value.strip())
    value = _HYPHEN_RUN.sub("-", value)
    return value.strip("-")


class MonotonicMillis:
    """Wall-clock milliseconds that never repeat within one process.

    Two allocators running in different processes can still draw the same value
    inside the same millisecond; the store's unique constraint rejects the loser.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            value = max(int(self._clock() * 1000), self._last + 1)
            self._last = value
            return value


class SlugAllocator:
    """Produces a slug that does not collide with any slug already stored.

    ``slug_exists`` answers whether a candidate is taken. ``disambiguator``
    supplies the suffix appended on collision.
    """

    def __init__(
        self,
        slug_exists: Callable[[str], bool],
        disambiguator: Callable[[], int] | None = None,
    ) -> None:
        self._slug_exists = slug_exists
        self._disambiguator = disambiguator or MonotonicMillis()

    def allocate(self, title: str, override: str | None = None) -> str:
        if override is not None and override.strip():
            base = override
        else:
            base = slugify(title) or FALLBACK_SLUG

        candidate = base
        while self._slug_exists(candidate):
            suffixed = f"{base}-{self._disambiguator()}"
            logger.info("slug.collision taken=%s resolved=%s", candidate, suffixed)
            candidate = suffixed
        return candidate


__all__ = ["FALLBACK_SLUG", "MonotonicMillis", "SlugAllocator", "slugify", "transliterate"]
