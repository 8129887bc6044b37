"""Translation of store failures into API errors."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from portfolio_api.errors import NotFoundError, StoreError
from portfolio_api.repositories.memory import NoRowsError, StoreFailure

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(*, not_found: str = "Resource not found", failure: str | None = None) -> Iterator[None]:
    """Map ``NoRowsError`` to 404 and any other store failure to 500.

    ``failure`` replaces the store's own message when the caller must report a
    generic error instead.
    """
    try:
        yield
    except NoRowsError as exc:
        raise NotFoundError(not_found) from exc
    except StoreFailure as exc:
        logger.error("store.failure error=%s", exc)
        raise StoreError(failure or str(exc) or "Server error") from exc
