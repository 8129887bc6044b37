"""Response envelopes shared by every resource."""

from __future__ import annotations

import math
from typing import Any, Generic, Iterable, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    data: list[T]
    count: int
    page: int
    per_page: int
    total_pages: int

    @classmethod
    def build(cls, items: list[T], *, count: int, page: int, per_page: int) -> "Page[T]":
        return cls(
            data=items,
            count=count,
            page=page,
            per_page=per_page,
            total_pages=math.ceil(count / per_page),
        )


class DataResponse(BaseModel, Generic[T]):
    data: T


class DataMessageResponse(BaseModel, Generic[T]):
    data: T
    message: str


class MessageResponse(BaseModel):
    message: str


def update_values(changes: BaseModel, *, nullable: Iterable[str] = ()) -> dict[str, Any]:
    """Fields the client actually sent.

    An explicit ``null`` clears a field only when it is listed in ``nullable``;
    for required columns it is ignored.
    """
    allowed_nulls = set(nullable)
    values = changes.model_dump(exclude_unset=True)
    return {key: value for key, value in values.items() if value is not None or key in allowed_nulls}
