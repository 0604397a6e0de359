"""Public site service — read models for the visitor-facing pages."""

import asyncio
import logging
from typing import Any

from portfolio.application.interfaces import TableGateway
from portfolio.application.services.search_filter import (
    filter_public,
    group_by,
    unique_categories,
)
from portfolio.domain.entities import GatewayResult, OrderClause
from portfolio.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

HOME_STATISTICS = ("happy_clients", "projects_completed")
WORK_SEARCH_FIELDS = ("title", "description", "technologies")
BLOG_SEARCH_FIELDS = ("title", "excerpt", "tags")

_NEWEST_FIRST = (OrderClause("created_at", ascending=False),)
_LATEST_PUBLISHED = (OrderClause("published_at", ascending=False),)
_BY_START_DATE = (OrderClause("start_date", ascending=False),)


class PublicSiteService:
    """Assembles page data from the table gateway."""

    def __init__(self, gateway: TableGateway):
        self._gateway = gateway

    async def home(self) -> dict[str, Any]:
        """Counters, top skills, featured works, latest posts and brands.

        Each section degrades to empty on its own when its read fails.
        """
        stats, skills, works, posts, brands = await asyncio.gather(
            self._gateway.select("statistics"),
            self._gateway.select(
                "skills", order=(OrderClause("level", ascending=False),), limit=6
            ),
            self._gateway.select("works", filters={"featured": True}, limit=3),
            self._gateway.select(
                "blog_posts", order=_LATEST_PUBLISHED, filters={"published": True}, limit=3
            ),
            self._gateway.select("brands", order=_NEWEST_FIRST),
        )

        by_key = {row.get("key"): row.get("value") for row in _tolerant(stats, "statistics")}
        return {
            "statistics": {key: by_key.get(key) or 0 for key in HOME_STATISTICS},
            "skills": _tolerant(skills, "skills"),
            "featured_works": [_normalize_work(w) for w in _tolerant(works, "works")],
            "latest_posts": _tolerant(posts, "blog_posts"),
            "brands": _tolerant(brands, "brands"),
        }

    async def about(self) -> dict[str, Any]:
        education, experience, skills = await asyncio.gather(
            self._gateway.select("education", order=_BY_START_DATE),
            self._gateway.select("experience", order=_BY_START_DATE),
            self._gateway.select("skills", order=(OrderClause("category"),)),
        )
        skill_rows = skills.unwrap() or []
        return {
            "education": education.unwrap() or [],
            "experience": experience.unwrap() or [],
            "skills": skill_rows,
            "skills_by_category": group_by(skill_rows, "category"),
        }

    async def works(self, search: str | None = None, category: str | None = None) -> dict[str, Any]:
        result = await self._gateway.select("works", order=_NEWEST_FIRST)
        rows = [_normalize_work(w) for w in result.unwrap() or []]
        return {
            "items": filter_public(rows, search, category, WORK_SEARCH_FIELDS),
            "categories": unique_categories(rows),
            "total": len(rows),
        }

    async def project(self, work_id: str) -> dict[str, Any]:
        """One work plus its gallery (cover image first).

        Raises:
            EntityNotFoundError: If no work has ``work_id``.
        """
        result = await self._gateway.select("works", filters={"id": work_id}, limit=1)
        result.unwrap()
        rows = result.rows
        if not rows:
            raise EntityNotFoundError("works", work_id)
        work = _normalize_work(rows[0])
        gallery = [work["image_url"], *work["images"]] if work.get("image_url") else list(work["images"])
        return {"work": work, "gallery": gallery}

    async def blog(self, search: str | None = None, category: str | None = None) -> dict[str, Any]:
        result = await self._gateway.select(
            "blog_posts", order=_LATEST_PUBLISHED, filters={"published": True}
        )
        rows = result.unwrap() or []
        return {
            "items": filter_public(rows, search, category, BLOG_SEARCH_FIELDS),
            "categories": unique_categories(rows),
            "total": len(rows),
        }

    async def submit_contact(self, name: str, email: str, subject: str, message: str) -> None:
        """Store a visitor's message in the admin inbox."""
        payload = {"name": name, "email": email, "subject": subject, "message": message}
        result = await self._gateway.insert("contact_submissions", payload)
        result.unwrap()
        logger.info("Contact submission received from %s", email)


def _tolerant(result: GatewayResult, table: str) -> list[dict[str, Any]]:
    if not result.ok:
        logger.error("Error fetching %s: %s", table, result.error)
        return []
    return result.rows


def _normalize_work(work: dict[str, Any]) -> dict[str, Any]:
    return {**work, "images": list(work.get("images") or [])}
