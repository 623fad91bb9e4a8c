"""
Product administration controller.

Adds a read-only category list used to show category names and to fill
the category selection of the product form. Categories are fetched
independently and never written back.
"""
import asyncio
import logging
from typing import Any, Optional

from catalog_admin.core.exceptions import BackendError, MalformedResponse, TransportError
from catalog_admin.repositories.resource_repository import ResourceRepository
from catalog_admin.services.normalizer import normalize_collection
from catalog_admin.services.resource_controller import ResourceController
from catalog_admin.services.resources import CATEGORIES, PRODUCTS
from catalog_admin.services.validation import entity_value

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"


class ProductController(ResourceController):
    """Product console with a secondary, read-only category lookup."""

    def __init__(
        self,
        repository: ResourceRepository,
        category_repository: ResourceRepository,
        load_sequencing: bool = False,
    ) -> None:
        super().__init__(PRODUCTS, repository, load_sequencing=load_sequencing)
        self._category_repo = category_repository
        self._categories: list[Any] = []
        self.categories_error: Optional[str] = None
        self.loading_categories = False

    @property
    def categories(self) -> list[Any]:
        return list(self._categories)

    async def load_categories(self) -> bool:
        """Fetch the category list used for display and selection."""
        self.loading_categories = True
        self.categories_error = None
        logger.info("Loading categories for product console")
        try:
            response = await self._category_repo.fetch_all()
            self._categories = normalize_collection(response, CATEGORIES.name)
        except MalformedResponse as exc:
            self._categories = []
            self.categories_error = f"Error: {exc}."
            return False
        except (TransportError, BackendError) as exc:
            logger.warning("Loading categories for products failed: %s", exc)
            self.categories_error = f"Could not load categories: {exc}"
            return False
        finally:
            self.loading_categories = False
        return True

    async def load_all(self) -> bool:
        """Load products and categories concurrently."""
        products_ok, categories_ok = await asyncio.gather(
            self.load(), self.load_categories()
        )
        return products_ok and categories_ok

    def category_name(self, category_id: Any) -> str:
        """Resolve *category_id* to a display name."""
        for category in self._categories:
            if entity_value(category, "id") == category_id:
                return entity_value(category, "name") or UNCATEGORIZED
        return UNCATEGORIZED

    def category_options(self) -> list[tuple[Any, str]]:
        """(id, name) pairs for the category selection control."""
        return [
            (entity_value(category, "id"), entity_value(category, "name"))
            for category in self._categories
        ]
