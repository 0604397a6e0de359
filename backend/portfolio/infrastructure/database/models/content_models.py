"""SQLAlchemy ORM models for the portfolio content tables.

Column names mirror the hosted backend's schema so the same row dicts flow
through either table gateway. Array columns are stored as JSON.
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.infrastructure.database.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class _IdMixin:
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)


class _CreatedMixin:
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=_now, nullable=True
    )


class _UpdatedMixin:
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=_now, onupdate=_now, nullable=True
    )


class BlogPostModel(_IdMixin, _CreatedMixin, _UpdatedMixin, Base):
    """ORM model — maps to the 'blog_posts' table."""

    __tablename__ = "blog_posts"

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tags: Mapped[list | None] = mapped_column(JSON, nullable=True, default=list)
    featured_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    published: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reading_time: Mapped[int | None] = mapped_column(Integer, nullable=True, default=5)

    def __repr__(self) -> str:
        return f"<BlogPostModel(id={self.id}, title='{self.title}')>"


class WorkModel(_IdMixin, _CreatedMixin, _UpdatedMixin, Base):
    """ORM model — maps to the 'works' table."""

    __tablename__ = "works"

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    technologies: Mapped[list | None] = mapped_column(JSON, nullable=True, default=list)
    client: Mapped[str | None] = mapped_column(String(200), nullable=True)
    project_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    github_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    images: Mapped[list | None] = mapped_column(JSON, nullable=True, default=list)
    featured: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)

    def __repr__(self) -> str:
        return f"<WorkModel(id={self.id}, title='{self.title}')>"


class SkillModel(_IdMixin, _CreatedMixin, _UpdatedMixin, Base):
    __tablename__ = "skills"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=80)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)


class EducationModel(_IdMixin, _CreatedMixin, _UpdatedMixin, Base):
    __tablename__ = "education"

    degree: Mapped[str] = mapped_column(String(200), nullable=False)
    institution: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class ExperienceModel(_IdMixin, _CreatedMixin, _UpdatedMixin, Base):
    __tablename__ = "experience"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    company: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class StatisticModel(_IdMixin, _UpdatedMixin, Base):
    """Keyed counters shown on the home page (``happy_clients`` …)."""

    __tablename__ = "statistics"

    key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    label: Mapped[str] = mapped_column(String(200), nullable=False)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)


class BrandModel(_IdMixin, _CreatedMixin, _UpdatedMixin, Base):
    __tablename__ = "brands"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    logo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    website_url: Mapped[str | None] = mapped_column(Text, nullable=True)


class ContactSubmissionModel(_IdMixin, _CreatedMixin, Base):
    __tablename__ = "contact_submissions"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(300), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    read: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)

    def __repr__(self) -> str:
        return f"<ContactSubmissionModel(id={self.id}, email='{self.email}')>"


class ProfileModel(_IdMixin, _CreatedMixin, _UpdatedMixin, Base):
    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    username: Mapped[str | None] = mapped_column(String(200), nullable=True)
    role: Mapped[str | None] = mapped_column(String(50), nullable=True)
