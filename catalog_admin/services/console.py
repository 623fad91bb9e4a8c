"""
Console wiring: one HTTP client, one session store, and the services built on them.

Usage::

    async with AdminConsole() as console:
        await console.auth.login("admin@example.com", "secret")
        await console.categories.load()
"""
import logging
from typing import Optional

import httpx

from catalog_admin.core.config import Settings, settings as default_settings
from catalog_admin.core.http import create_http_client
from catalog_admin.repositories.auth_repository import AuthRepository
from catalog_admin.repositories.resource_repository import ResourceRepository
from catalog_admin.repositories.session_store import SessionStore
from catalog_admin.services.auth_service import AuthService
from catalog_admin.services.product_controller import ProductController
from catalog_admin.services.resource_controller import ResourceController
from catalog_admin.services.resources import CATEGORIES, PRODUCTS
from catalog_admin.services.session_guard import SessionValidityGuard

logger = logging.getLogger(__name__)


class AdminConsole:
    """Entry point bundling the category and product consoles with authentication."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        store: Optional[SessionStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = config or default_settings
        logger.info("Starting %s %s", self.settings.APP_NAME, self.settings.APP_VERSION)
        self.store = store or SessionStore(self.settings.SESSION_FILE_PATH)
        self.client = create_http_client(
            self.settings, lambda: self.store.token, transport=transport
        )

        self.guard = SessionValidityGuard(self.store)
        self.auth = AuthService(AuthRepository(self.client), self.store, self.guard)

        category_repo = ResourceRepository(self.client, CATEGORIES.name)
        product_repo = ResourceRepository(self.client, PRODUCTS.name)
        self.categories = ResourceController(
            CATEGORIES, category_repo, load_sequencing=self.settings.LOAD_SEQUENCING
        )
        self.products = ProductController(
            product_repo,
            ResourceRepository(self.client, CATEGORIES.name),
            load_sequencing=self.settings.LOAD_SEQUENCING,
        )

    async def aclose(self) -> None:
        logger.info("Closing HTTP client")
        await self.client.aclose()

    async def __aenter__(self) -> "AdminConsole":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
