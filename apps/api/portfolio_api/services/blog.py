"""Blog post service layer."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Callable

from portfolio_api.domain.slugs import SlugAllocator
from portfolio_api.repositories.memory import InMemoryStore
from portfolio_api.schemas.blog import BlogPost, BlogPostForm, BlogPostUpdate
from portfolio_api.schemas.common import Page, update_values
from portfolio_api.services.store_errors import store_errors

logger = logging.getLogger(__name__)

_TABLE = "blog_posts"
_NOT_FOUND = "Blog post not found"


class BlogService:
    """Blog posts are addressed by slug for every single-item operation."""

    def __init__(self, store: InMemoryStore, disambiguator: Callable[[], int] | None = None) -> None:
        self._store = store
        self._allocator = SlugAllocator(self._slug_exists, disambiguator)

    def list_posts(self, *, page: int, per_page: int, published: bool | None = None) -> Page[BlogPost]:
        with store_errors():
            result = self._store.select(
                _TABLE,
                filters=None if published is None else {"published": published},
                order_by=[("created_at", True)],
                offset=(page - 1) * per_page,
                limit=per_page,
            )
        items = [BlogPost.model_validate(row) for row in result.rows]
        return Page[BlogPost].build(items, count=result.count, page=page, per_page=per_page)

    def get_post(self, slug: str) -> BlogPost:
        with store_errors(not_found=_NOT_FOUND):
            row = self._store.get_one(_TABLE, column="slug", value=slug)
        return BlogPost.model_validate(row)

    def create_post(self, form: BlogPostForm) -> BlogPost:
        # The store's unique slug constraint is the last line against a racing writer.
        with store_errors(failure="Blog post could not be created"):
            slug = self._allocator.allocate(form.title, form.slug)
            values = form.model_dump()
            values["slug"] = slug
            values["updated_at"] = datetime.now(UTC)
            row = self._store.insert(_TABLE, values)

        logger.info("blog.created slug=%s published=%s", slug, form.published)
        return BlogPost.model_validate(row)

    def update_post(self, slug: str, changes: BlogPostUpdate) -> BlogPost:
        values = update_values(changes, nullable=("excerpt", "image_url"))
        values["updated_at"] = datetime.now(UTC)
        with store_errors(not_found=_NOT_FOUND):
            row = self._store.update(_TABLE, column="slug", value=slug, changes=values)
        return BlogPost.model_validate(row)

    def delete_post(self, slug: str) -> None:
        with store_errors():
            self._store.delete(_TABLE, column="slug", value=slug)

    def _slug_exists(self, slug: str) -> bool:
        return self._store.exists(_TABLE, column="slug", value=slug)
