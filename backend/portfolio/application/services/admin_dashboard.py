"""Admin dashboard — hosts one form controller per managed entity.

The dashboard owns a shared search string and a summary of row counts that
every controller refreshes after a successful mutation.
"""

import asyncio
import logging
from collections.abc import Callable

from portfolio.application.interfaces import Confirmer, Notifier, ObjectStore, TableGateway
from portfolio.application.services.entity_catalog import EntityCatalog
from portfolio.application.services.form_controller import (
    ContactMessagesController,
    EntityFormController,
)
from portfolio.domain.entities import AuthSession, DashboardStats
from portfolio.domain.exceptions import UnknownEntityTypeError

logger = logging.getLogger(__name__)

CONTACT_ENTITY = "contact_submissions"

# DashboardStats field → entity name it counts
_STAT_SOURCES = {
    "blogs": "blog_posts",
    "works": "works",
    "skills": "skills",
    "brands": "brands",
    "messages": CONTACT_ENTITY,
}


class AdminDashboard:
    """All admin forms of one signed-in user."""

    def __init__(
        self,
        catalog: EntityCatalog,
        gateway: TableGateway,
        notifier: Notifier,
        confirmer: Confirmer,
        object_store: ObjectStore | None = None,
    ):
        self._catalog = catalog
        self._gateway = gateway
        self.notifier = notifier
        self.search = ""
        self.stats = DashboardStats()
        self._mounted = False
        self._mount_lock = asyncio.Lock()

        self._controllers: dict[str, EntityFormController] = {}
        for descriptor in catalog.admin_entities():
            controller_cls = (
                ContactMessagesController if descriptor.name == CONTACT_ENTITY else EntityFormController
            )
            self._controllers[descriptor.name] = controller_cls(
                descriptor,
                gateway,
                notifier,
                confirmer,
                object_store=object_store,
                on_mutation=self.refresh_stats,
            )

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def controllers(self) -> dict[str, EntityFormController]:
        return dict(self._controllers)

    def controller(self, name: str) -> EntityFormController:
        try:
            return self._controllers[name]
        except KeyError:
            raise UnknownEntityTypeError(name) from None

    def messages(self) -> ContactMessagesController:
        controller = self.controller(CONTACT_ENTITY)
        if not isinstance(controller, ContactMessagesController):
            raise UnknownEntityTypeError(CONTACT_ENTITY)
        return controller

    async def mount(self) -> None:
        """Fetch every list and the stats summary concurrently."""
        await asyncio.gather(
            *(c.mount() for c in self._controllers.values()),
            self.refresh_stats(),
        )
        self._mounted = True

    async def ensure_mounted(self) -> None:
        """Mount once; concurrent callers wait for the first mount."""
        async with self._mount_lock:
            if not self._mounted:
                await self.mount()

    async def refresh_stats(self) -> None:
        """Recount the summary tables. Failures are logged and keep the old numbers."""
        names = list(_STAT_SOURCES.items())
        results = await asyncio.gather(
            *(self._count(entity) for _, entity in names),
            self._count(CONTACT_ENTITY, {"read": False}),
        )

        values = {}
        for (stat, _), count in zip(names, results):
            if count is None:
                return
            values[stat] = count
        unread = results[-1]
        if unread is None:
            return

        self.stats = DashboardStats(unread=unread, **values)
        logger.debug("Dashboard stats refreshed: %s", self.stats)

    async def _count(self, entity: str, filters: dict | None = None) -> int | None:
        if entity not in self._catalog:
            return 0
        table = self._catalog.get(entity).table
        try:
            result = await self._gateway.count(table, filters)
        except Exception:
            logger.exception("Error fetching stats for %s", table)
            return None
        if not result.ok:
            logger.error("Error fetching stats for %s: %s", table, result.error)
            return None
        return result.count or 0


DashboardFactory = Callable[[AuthSession], AdminDashboard]


class AdminSessionRegistry:
    """One dashboard per signed-in user, kept between requests.

    A dashboard is bound to the access token it was built with. When the
    same user shows up with a new token (after re-signing in), the dashboard
    is rebuilt so its gateway stops sending the old one.
    """

    def __init__(self, factory: DashboardFactory):
        self._factory = factory
        self._dashboards: dict[str, AdminDashboard] = {}
        self._tokens: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def get(self, session: AuthSession) -> AdminDashboard:
        """Return the user's dashboard, creating and mounting it on first use."""
        user_id = session.user.id
        async with self._lock:
            dashboard = self._dashboards.get(user_id)
            if dashboard is None:
                dashboard = self._factory(session)
                logger.info("Created admin dashboard for user %s", user_id)
            elif self._tokens.get(user_id) != session.access_token:
                previous = dashboard
                dashboard = self._factory(session)
                dashboard.search = previous.search
                logger.info("Rebuilt admin dashboard for user %s with a new access token", user_id)
            self._dashboards[user_id] = dashboard
            self._tokens[user_id] = session.access_token
        await dashboard.ensure_mounted()
        return dashboard

    def discard(self, user_id: str) -> None:
        """Forget a user's dashboard, e.g. after sign-out."""
        self._dashboards.pop(user_id, None)
        self._tokens.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._dashboards)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._dashboards
