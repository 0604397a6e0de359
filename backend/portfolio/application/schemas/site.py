"""Pydantic DTOs for the public site."""

from typing import Any

from pydantic import BaseModel, Field


class HomeResponse(BaseModel):
    statistics: dict[str, int]
    skills: list[dict[str, Any]]
    featured_works: list[dict[str, Any]]
    latest_posts: list[dict[str, Any]]
    brands: list[dict[str, Any]]


class AboutResponse(BaseModel):
    education: list[dict[str, Any]]
    experience: list[dict[str, Any]]
    skills: list[dict[str, Any]]
    skills_by_category: dict[str, list[dict[str, Any]]]


class FilteredListResponse(BaseModel):
    """A searchable public list plus the categories it contains."""

    items: list[dict[str, Any]]
    categories: list[str]
    total: int


class ProjectResponse(BaseModel):
    work: dict[str, Any]
    gallery: list[str]


class ContactSubmissionCreate(BaseModel):
    """Message sent from the contact page."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    subject: str = Field(..., min_length=1, max_length=300)
    message: str = Field(..., min_length=1, max_length=10_000)
