"""Integration tests for SQLAlchemyTableGateway on a throwaway SQLite file."""

from pathlib import Path

import pytest

from portfolio.application.services.entity_catalog import load_entity_catalog
from portfolio.application.services.form_controller import EntityFormController
from portfolio.domain.entities import OrderClause
from portfolio.infrastructure.database import Base, SQLAlchemyTableGateway, build_engine, build_session_factory
from tests.fakes import RecordingNotifier, ScriptedConfirmer, blog_row


async def _gateway(tmp_path: Path):
    engine = build_engine(f"sqlite:///{tmp_path / 'portfolio.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine, SQLAlchemyTableGateway(build_session_factory(engine))


@pytest.mark.asyncio
async def test_insert_select_update_delete(tmp_path):
    engine, gateway = await _gateway(tmp_path)
    try:
        inserted = await gateway.insert("education", {
            "degree": "BSc Design",
            "institution": "Art School",
            "start_date": "2016-09-01",
            "end_date": None,
            "description": "",
        })
        assert inserted.ok
        row = inserted.rows[0]
        assert len(row["id"]) == 36
        assert row["start_date"] == "2016-09-01"
        assert row["created_at"] is not None

        await gateway.insert("education", {
            "degree": "MA Interaction",
            "institution": "Uni",
            "start_date": "2020-09-01",
        })
        ordered = await gateway.select("education", order=(OrderClause("start_date", ascending=False),))
        assert [r["degree"] for r in ordered.rows] == ["MA Interaction", "BSc Design"]

        updated = await gateway.update("education", {"end_date": "2019-06-30"}, row["id"])
        assert updated.rows[0]["end_date"] == "2019-06-30"

        assert (await gateway.delete("education", row["id"])).ok
        assert (await gateway.count("education")).count == 1
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_json_arrays_and_boolean_filters(tmp_path):
    engine, gateway = await _gateway(tmp_path)
    try:
        await gateway.insert("blog_posts", blog_row(published=True))
        await gateway.insert("blog_posts", blog_row(title="Draft", published=False, published_at=None))

        published = await gateway.select("blog_posts", filters={"published": True})
        assert [r["tags"] for r in published.rows] == [["ux", "design"]]
        assert (await gateway.count("blog_posts", {"published_at": None})).count == 1
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_errors_come_back_as_values(tmp_path):
    engine, gateway = await _gateway(tmp_path)
    try:
        assert (await gateway.select("testimonials")).error.status_code == 404
        assert (await gateway.update("skills", {"level": 1}, "missing")).error.status_code == 404
        assert (await gateway.delete("skills", "missing")).error.status_code == 404
        assert not (await gateway.insert("skills", {"name": "Go", "nope": 1})).ok
        # NOT NULL violation from the database itself
        assert not (await gateway.insert("skills", {"name": "Go"})).ok
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_form_controller_against_database(tmp_path):
    engine, gateway = await _gateway(tmp_path)
    try:
        notifier = RecordingNotifier()
        controller = EntityFormController(
            load_entity_catalog().get("experience"), gateway, notifier, ScriptedConfirmer(True)
        )
        await controller.mount()

        controller.open_create()
        controller.update_draft(title="Designer", company="Studio", start_date="2021-02-01", end_date="")
        assert await controller.submit() is True

        created = controller.items[0]
        assert created["end_date"] is None
        controller.open_edit(created["id"])
        controller.set_field("end_date", "2023-12-31")
        assert await controller.submit() is True
        assert controller.cache.get(created["id"])["end_date"] == "2023-12-31"

        assert await controller.delete(created["id"]) is True
        assert controller.items == ()
        assert notifier.errors == []
    finally:
        await engine.dispose()


class _UnreachableDatabase:
    """Session factory whose sessions fail the way asyncpg does with the server down."""

    def __call__(self):
        return self

    async def __aenter__(self):
        raise ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 1)")

    async def __aexit__(self, *exc_info):
        return False


@pytest.mark.asyncio
async def test_refused_connection_is_returned_as_error():
    gateway = SQLAlchemyTableGateway(_UnreachableDatabase())

    selected = await gateway.select("skills")
    assert not selected.ok
    assert "Connect call failed" in selected.error.message
    assert not (await gateway.count("skills")).ok
    assert not (await gateway.insert("skills", {"name": "Go", "level": 3, "category": "dev"})).ok
    assert not (await gateway.delete("skills", "any")).ok


@pytest.mark.asyncio
async def test_controller_mount_with_database_down():
    notifier = RecordingNotifier()
    controller = EntityFormController(
        load_entity_catalog().get("skills"), SQLAlchemyTableGateway(_UnreachableDatabase()),
        notifier, ScriptedConfirmer(True),
    )

    assert await controller.mount() is False
    assert [n.description for n in notifier.errors] == ["Failed to fetch skills"]
