"""Admin dashboard aggregation."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from portfolio_api.repositories.memory import InMemoryStore, StoreFailure
from portfolio_api.schemas.dashboard import (
    BlogStats,
    DashboardStats,
    ExperienceStats,
    MessageStats,
    ProjectStats,
    SkillStats,
)

logger = logging.getLogger(__name__)


class DashboardService:
    """Counts every content section in one concurrent batch.

    All reads are joined before the result is built. A section whose read
    fails is reported as failed; the other sections keep their counts.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def collect_stats(self) -> DashboardStats:
        reads: dict[str, Callable[[], BaseModel]] = {
            "projects": self._project_stats,
            "experiences": self._experience_stats,
            "skills": self._skill_stats,
            "messages": self._message_stats,
            "blog": self._blog_stats,
        }
        results = await asyncio.gather(
            *(run_in_threadpool(read) for read in reads.values()),
            return_exceptions=True,
        )

        sections: dict[str, BaseModel | None] = {}
        failed: list[str] = []
        for name, result in zip(reads, results):
            if isinstance(result, StoreFailure):
                logger.error("dashboard.read_failed section=%s error=%s", name, result)
                sections[name] = None
                failed.append(name)
            elif isinstance(result, BaseException):
                raise result
            else:
                sections[name] = result

        return DashboardStats(**sections, failed=failed)

    def _project_stats(self) -> ProjectStats:
        return ProjectStats(
            total=self._store.count("projects"),
            featured=self._store.count("projects", filters={"featured": True}),
        )

    def _experience_stats(self) -> ExperienceStats:
        return ExperienceStats(total=self._store.count("experiences"))

    def _skill_stats(self) -> SkillStats:
        return SkillStats(total=self._store.count("skills"))

    def _message_stats(self) -> MessageStats:
        return MessageStats(
            total=self._store.count("messages"),
            unread=self._store.count("messages", filters={"is_read": False}),
        )

    def _blog_stats(self) -> BlogStats:
        return BlogStats(
            total=self._store.count("blog_posts"),
            published=self._store.count("blog_posts", filters={"published": True}),
        )
