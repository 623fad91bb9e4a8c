"""
Resource definitions: what differs between the category and product consoles.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from catalog_admin.models.category import CategoryDraft
from catalog_admin.models.product import ProductDraft
from catalog_admin.services.validation import CATEGORY_RULES, PRODUCT_RULES, Rule


@dataclass(frozen=True)
class ResourceDefinition:
    """
    Parameters of one administered resource.

    ``name`` is the REST collection segment and the envelope key tolerated
    by the normalizer; ``label`` is used in user-facing messages.
    """

    name: str
    label: str
    draft_type: Callable[..., Any]
    rules: Sequence[Rule] = field(default_factory=list)

    def new_draft(self) -> Any:
        return self.draft_type()

    def draft_from_entity(self, entity: Any) -> Any:
        return self.draft_type.from_entity(entity)


CATEGORIES = ResourceDefinition(
    name="categories",
    label="category",
    draft_type=CategoryDraft,
    rules=CATEGORY_RULES,
)

PRODUCTS = ResourceDefinition(
    name="products",
    label="product",
    draft_type=ProductDraft,
    rules=PRODUCT_RULES,
)
