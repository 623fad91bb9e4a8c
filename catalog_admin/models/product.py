"""
Draft model for a Product being created or edited.
Numeric fields hold raw form input until validation coerces them.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Union

from catalog_admin.schemas.product import ProductPayload

logger = logging.getLogger(__name__)


def coerce_price(value: Any) -> Optional[Decimal]:
    """Return *value* as a finite Decimal, or None if it is not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def coerce_stock(value: Any) -> Optional[int]:
    """Return *value* as an int, or None if it is not a whole number."""
    number = coerce_price(value)
    if number is None or number != number.to_integral_value():
        return None
    return int(number)


@dataclass
class ProductDraft:
    name: str = ""
    description: str = ""
    price: Union[str, int, float, Decimal, None] = ""
    stock: Union[str, int, None] = ""
    category_id: Optional[Any] = ""
    image_url: str = ""
    id: Optional[Any] = None

    def __post_init__(self) -> None:
        """Log the creation of the ProductDraft instance."""
        logger.trace("Initialized ProductDraft id=%s", self.id)

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "ProductDraft":
        """Build an edit buffer from a product returned by the backend."""
        logger.trace("Hydrating ProductDraft from entity")
        return cls(
            id=entity.get("id"),
            name=entity.get("name") or "",
            description=entity.get("description") or "",
            price=entity.get("price", ""),
            stock=entity.get("stock", ""),
            category_id=entity.get("categoryId", ""),
            image_url=entity.get("imageUrl") or "",
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase request body; only call on a validated draft."""
        payload = ProductPayload(
            name=self.name.strip(),
            description=self.description.strip(),
            price=coerce_price(self.price),
            stock=coerce_stock(self.stock),
            category_id=self.category_id,
            image_url=self.image_url.strip(),
        )
        return payload.model_dump(mode="json", by_alias=True)
