"""Unit tests for EntityListCache."""

import pytest

from portfolio.application.services.entity_catalog import load_entity_catalog
from portfolio.application.services.entity_list_cache import EntityListCache
from tests.fakes import RecordingGateway


@pytest.fixture
def experience():
    return load_entity_catalog().get("experience")


@pytest.mark.asyncio
async def test_refresh_uses_descriptor_order(experience):
    gateway = RecordingGateway({
        "experience": [
            {"id": "e1", "title": "Junior", "company": "A", "start_date": "2018-01-01"},
            {"id": "e2", "title": "Lead", "company": "B", "start_date": "2022-06-01"},
            {"id": "e3", "title": "Senior", "company": "C", "start_date": "2020-03-01"},
        ]
    })
    cache = EntityListCache(experience, gateway)

    assert cache.loaded is False
    assert await cache.refresh() is True

    assert [row["id"] for row in cache.items] == ["e2", "e3", "e1"]
    assert cache.loaded is True
    assert len(cache) == 3
    _, table, info = gateway.calls_of("select")[0]
    assert table == "experience"
    assert info["order"] == experience.order


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_items(experience):
    gateway = RecordingGateway({"experience": [{"id": "e1", "title": "Dev", "company": "A"}]})
    cache = EntityListCache(experience, gateway)
    await cache.refresh()
    before = cache.items

    gateway.fail["select"] = "relation does not exist"
    assert await cache.refresh() is False

    assert cache.items is before
    assert cache.last_error.message == "relation does not exist"

    del gateway.fail["select"]
    assert await cache.refresh() is True
    assert cache.last_error is None


class FlakySelectGateway(RecordingGateway):
    """Selects raise an OSError while ``down`` is set."""

    down = False

    async def select(self, table, **kwargs):
        if self.down:
            raise OSError("Connection reset by peer")
        return await super().select(table, **kwargs)


@pytest.mark.asyncio
async def test_raised_driver_error_keeps_previous_items(experience):
    gateway = FlakySelectGateway({"experience": [{"id": "e1", "title": "Dev", "company": "A"}]})
    cache = EntityListCache(experience, gateway)
    await cache.refresh()
    before = cache.items

    gateway.down = True
    assert await cache.refresh() is False

    assert cache.items is before
    assert cache.last_error.operation == "select"
    assert "Connection reset by peer" in cache.last_error.message


@pytest.mark.asyncio
async def test_get_compares_ids_as_strings(experience):
    gateway = RecordingGateway({"experience": [{"id": "42", "title": "Dev", "company": "A"}]})
    cache = EntityListCache(experience, gateway)
    await cache.refresh()
    assert cache.get(42)["title"] == "Dev"
    assert cache.get("nope") is None
