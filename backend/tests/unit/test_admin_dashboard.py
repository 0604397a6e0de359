"""Unit tests for AdminDashboard and AdminSessionRegistry."""

import asyncio

import pytest

from portfolio.application.services.admin_dashboard import AdminDashboard, AdminSessionRegistry
from portfolio.application.services.entity_catalog import EntityCatalog, load_entity_catalog
from portfolio.application.services.form_controller import ContactMessagesController
from portfolio.domain.entities import AuthSession, AuthUser, DashboardStats
from portfolio.domain.exceptions import UnknownEntityTypeError
from tests.fakes import RecordingGateway, RecordingNotifier, ScriptedConfirmer, blog_row, work_row


def _gateway():
    return RecordingGateway({
        "blog_posts": [blog_row(id="b1"), blog_row(id="b2", published=False)],
        "works": [work_row(id="w1")],
        "skills": [],
        "brands": [{"id": "x1", "name": "Acme"}],
        "contact_submissions": [
            {"id": "m1", "name": "A", "email": "a@x.io", "subject": "s", "message": "m", "read": False},
            {"id": "m2", "name": "B", "email": "b@x.io", "subject": "s", "message": "m", "read": True},
        ],
    })


def _dashboard(gateway):
    return AdminDashboard(load_entity_catalog(), gateway, RecordingNotifier(), ScriptedConfirmer(True))


@pytest.mark.asyncio
async def test_mount_loads_every_list_and_counts():
    dashboard = _dashboard(_gateway())

    await dashboard.mount()

    assert dashboard.mounted
    assert len(dashboard.controller("blog_posts").items) == 2
    assert dashboard.stats == DashboardStats(blogs=2, works=1, skills=0, brands=1, messages=2, unread=1)
    assert isinstance(dashboard.messages(), ContactMessagesController)
    assert "profiles" not in dashboard.controllers


@pytest.mark.asyncio
async def test_mutation_recounts_stats():
    gateway = _gateway()
    dashboard = _dashboard(gateway)
    await dashboard.mount()

    await dashboard.controller("brands").delete("x1")
    await dashboard.messages().set_read("m1", True)

    assert dashboard.stats.brands == 0
    assert dashboard.stats.unread == 0


@pytest.mark.asyncio
async def test_failed_count_keeps_previous_stats():
    gateway = _gateway()
    dashboard = _dashboard(gateway)
    await dashboard.mount()
    before = dashboard.stats

    gateway.fail["count"] = "timeout"
    await dashboard.refresh_stats()

    assert dashboard.stats is before


def test_unknown_controller():
    with pytest.raises(UnknownEntityTypeError):
        _dashboard(_gateway()).controller("testimonials")


@pytest.mark.asyncio
async def test_registry_builds_one_dashboard_per_user():
    built = []

    def factory(session):
        dashboard = _dashboard(_gateway())
        built.append(session.user.id)
        return dashboard

    registry = AdminSessionRegistry(factory)
    alice = AuthSession(access_token="t1", user=AuthUser(id="u1", email="alice@x.io"))
    alice_again = AuthSession(access_token="t2", user=AuthUser(id="u1", email="alice@x.io"))
    bob = AuthSession(access_token="t3", user=AuthUser(id="u2", email="bob@x.io"))

    first = await registry.get(alice)
    assert await registry.get(alice) is first
    assert await registry.get(bob) is not first
    assert first.mounted
    assert built == ["u1", "u2"]
    assert len(registry) == 2

    registry.discard("u1")
    assert "u1" not in registry
    assert "u2" in registry


@pytest.mark.asyncio
async def test_registry_rebuilds_dashboard_for_new_token():
    tokens = []

    def factory(session):
        tokens.append(session.access_token)
        return _dashboard(_gateway())

    registry = AdminSessionRegistry(factory)
    alice = AuthSession(access_token="expired", user=AuthUser(id="u1", email="alice@x.io"))
    alice_again = AuthSession(access_token="fresh", user=AuthUser(id="u1", email="alice@x.io"))

    first = await registry.get(alice)
    first.search = "cafe"
    second = await registry.get(alice_again)

    assert second is not first
    assert second.mounted
    assert second.search == "cafe"
    assert tokens == ["expired", "fresh"]
    assert len(registry) == 1
    assert await registry.get(alice_again) is second


@pytest.mark.asyncio
async def test_concurrent_first_requests_mount_once():
    gateway = _gateway()
    registry = AdminSessionRegistry(lambda session: _dashboard(gateway))
    alice = AuthSession(access_token="t1", user=AuthUser(id="u1", email="alice@x.io"))

    first, second = await asyncio.gather(registry.get(alice), registry.get(alice))

    assert first is second
    assert first.mounted
    selected = [table for _, table, _ in gateway.calls_of("select")]
    assert selected.count("works") == 1
    assert selected.count("contact_submissions") == 1


@pytest.mark.asyncio
async def test_ensure_mounted_is_idempotent_under_concurrency():
    gateway = _gateway()
    dashboard = _dashboard(gateway)

    await asyncio.gather(dashboard.ensure_mounted(), dashboard.ensure_mounted(), dashboard.ensure_mounted())

    selected = [table for _, table, _ in gateway.calls_of("select")]
    assert selected.count("blog_posts") == 1


def test_messages_without_inbox_entity():
    catalog = EntityCatalog([d for d in load_entity_catalog() if d.name != "contact_submissions"])
    dashboard = AdminDashboard(catalog, _gateway(), RecordingNotifier(), ScriptedConfirmer(True))
    with pytest.raises(UnknownEntityTypeError):
        dashboard.messages()
