"""Reusable field checks for form schemas."""

from __future__ import annotations

import re
from urllib.parse import urlparse

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def blank_to_none(value: str | None) -> str | None:
    """Forms post empty inputs as ``""``; store them as missing."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def ensure_http_url(value: str | None) -> str | None:
    value = blank_to_none(value)
    if value is None:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid URL: {value}")
    return value


def ensure_email(value: str) -> str:
    value = value.strip()
    if not _EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value
