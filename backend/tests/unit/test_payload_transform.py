"""Unit tests for the draft → write payload transform."""

from datetime import datetime, timedelta, timezone

import pytest

from portfolio.application.services.entity_catalog import load_entity_catalog
from portfolio.application.services.payload_transform import (
    build_write_payload,
    missing_required,
    split_csv,
)
from portfolio.domain.entities import Draft
from portfolio.domain.exceptions import InvalidFieldValueError


@pytest.fixture(scope="module")
def catalog():
    return load_entity_catalog()


def test_split_csv_trims_and_drops_empties():
    assert split_csv("react, design ,  ") == ["react", "design"]


def test_split_csv_preserves_order_and_accepts_lists():
    assert split_csv("b,a,c") == ["b", "a", "c"]
    assert split_csv([" x ", "", "y"]) == ["x", "y"]
    assert split_csv(None) == []
    assert split_csv("") == []


def test_published_post_gets_current_timestamp(catalog):
    draft = Draft.empty(catalog.get("blog_posts"))
    draft.update({"title": "Hello", "content": "Body", "published": True, "tags": "a, b"})

    before = datetime.now(timezone.utc)
    payload = build_write_payload(draft)
    after = datetime.now(timezone.utc)

    stamp = datetime.fromisoformat(payload["published_at"])
    assert before - timedelta(seconds=1) <= stamp <= after + timedelta(seconds=1)
    assert payload["tags"] == ["a", "b"]


def test_unpublished_post_clears_timestamp(catalog):
    draft = Draft.seeded(
        catalog.get("blog_posts"),
        {"title": "Hello", "content": "Body", "published": False, "published_at": "2024-01-01T00:00:00"},
    )
    payload = build_write_payload(draft)
    assert payload["published_at"] is None
    assert payload["published"] is False


def test_integer_fields_are_parsed(catalog):
    draft = Draft.empty(catalog.get("skills"))
    draft.update({"name": "Python", "category": "Backend", "level": " 90 "})
    assert build_write_payload(draft)["level"] == 90


def test_malformed_integer_is_rejected(catalog):
    draft = Draft.empty(catalog.get("skills"))
    draft.update({"name": "Python", "category": "Backend", "level": "ninety"})
    with pytest.raises(InvalidFieldValueError) as exc_info:
        build_write_payload(draft)
    assert exc_info.value.field == "level"


def test_boolean_passes_through(catalog):
    draft = Draft.empty(catalog.get("works"))
    draft.update({"title": "T", "category": "C", "featured": True})
    assert build_write_payload(draft)["featured"] is True


def test_first_image_becomes_primary(catalog):
    draft = Draft.empty(catalog.get("works"))
    draft.update({"title": "T", "category": "C", "images": ["u1", "u2"], "image_url": "old"})
    payload = build_write_payload(draft)
    assert payload["image_url"] == "u1"
    assert payload["images"] == ["u1", "u2"]


def test_primary_falls_back_when_no_images(catalog):
    draft = Draft.empty(catalog.get("works"))
    draft.update({"title": "T", "category": "C", "image_url": "typed"})
    assert build_write_payload(draft)["image_url"] == "typed"

    draft.set("image_url", "")
    assert build_write_payload(draft)["image_url"] is None


def test_nullable_fields_write_null_for_empty(catalog):
    draft = Draft.empty(catalog.get("brands"))
    draft.update({"name": "Acme"})
    payload = build_write_payload(draft)
    assert payload["logo_url"] is None
    assert payload["website_url"] is None


def test_missing_required_lists_blank_fields(catalog):
    draft = Draft.empty(catalog.get("experience"))
    draft.update({"title": "Engineer", "company": "  "})
    assert missing_required(draft) == ["company", "start_date"]
