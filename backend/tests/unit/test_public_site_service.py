"""Unit tests for the public site read models."""

import pytest

from portfolio.application.services.public_site_service import PublicSiteService
from portfolio.domain.exceptions import EntityNotFoundError, GatewayError
from tests.fakes import RecordingGateway, blog_row, work_row


def _gateway():
    return RecordingGateway({
        "statistics": [
            {"id": "s1", "key": "happy_clients", "label": "Happy clients", "value": 40},
            {"id": "s2", "key": "years", "label": "Years", "value": 8},
        ],
        "skills": [
            {"id": f"k{i}", "name": f"Skill {i}", "category": "Design" if i % 2 else "Code", "level": 50 + i}
            for i in range(8)
        ],
        "works": [
            work_row(id="w1", title="Cafe", category="Web", featured=True, created_at="2024-01-01"),
            work_row(id="w2", title="Poster", category="Print", created_at="2024-02-01", images=None,
                     image_url=None),
            work_row(id="w3", title="Shop", category="Web", technologies=["Shopify"], created_at="2024-03-01"),
        ],
        "blog_posts": [
            blog_row(id="b1", title="Old", published_at="2023-01-01T00:00:00+00:00"),
            blog_row(id="b2", title="Draft", published=False, published_at=None),
            blog_row(id="b3", title="New", category="Dev", published_at="2024-06-01T00:00:00+00:00"),
        ],
        "brands": [{"id": "x1", "name": "Acme"}],
        "education": [],
        "experience": [],
    })


@pytest.mark.asyncio
async def test_home_sections():
    home = await PublicSiteService(_gateway()).home()

    assert home["statistics"] == {"happy_clients": 40, "projects_completed": 0}
    assert [s["level"] for s in home["skills"]] == [57, 56, 55, 54, 53, 52]
    assert [w["id"] for w in home["featured_works"]] == ["w1"]
    assert [p["id"] for p in home["latest_posts"]] == ["b3", "b1"]
    assert home["brands"][0]["name"] == "Acme"


@pytest.mark.asyncio
async def test_home_degrades_per_section():
    gateway = _gateway()
    gateway.fail["select"] = "offline"
    home = await PublicSiteService(gateway).home()
    assert home["skills"] == [] and home["brands"] == []
    assert home["statistics"] == {"happy_clients": 0, "projects_completed": 0}


@pytest.mark.asyncio
async def test_works_filters_and_lists_categories():
    service = PublicSiteService(_gateway())

    everything = await service.works()
    assert [w["id"] for w in everything["items"]] == ["w3", "w2", "w1"]
    assert everything["categories"] == ["Web", "Print"]
    assert everything["items"][1]["images"] == []

    web = await service.works(search="shopify", category="Web")
    assert [w["id"] for w in web["items"]] == ["w3"]
    assert web["total"] == 3


@pytest.mark.asyncio
async def test_blog_lists_only_published_posts():
    blog = await PublicSiteService(_gateway()).blog(category="all")
    assert [p["id"] for p in blog["items"]] == ["b3", "b1"]
    assert blog["categories"] == ["Dev", "Design"]


@pytest.mark.asyncio
async def test_project_gallery_puts_cover_first():
    service = PublicSiteService(_gateway())
    project = await service.project("w1")
    cover = project["work"]["image_url"]
    assert project["gallery"][0] == cover
    assert project["gallery"][1:] == project["work"]["images"]

    bare = await service.project("w2")
    assert bare["gallery"] == []

    with pytest.raises(EntityNotFoundError):
        await service.project("nope")


@pytest.mark.asyncio
async def test_about_groups_skills_and_raises_on_failure():
    gateway = _gateway()
    about = await PublicSiteService(gateway).about()
    assert list(about["skills_by_category"]) == ["Code", "Design"]

    gateway.fail["select"] = "offline"
    with pytest.raises(GatewayError):
        await PublicSiteService(gateway).about()


@pytest.mark.asyncio
async def test_submit_contact_stores_unread_message():
    gateway = _gateway()
    await PublicSiteService(gateway).submit_contact("Ada", "ada@example.com", "Hi", "Hello there")
    stored = gateway.rows("contact_submissions")
    assert stored[0]["email"] == "ada@example.com"
    assert "read" not in gateway.calls_of("insert")[0][2]
