"""
Draft model for a Category being created or edited.
"""
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from catalog_admin.schemas.category import CategoryPayload

logger = logging.getLogger(__name__)


@dataclass
class CategoryDraft:
    name: str = ""
    description: str = ""
    id: Optional[Any] = None

    def __post_init__(self) -> None:
        """Log the creation of the CategoryDraft instance."""
        logger.trace("Initialized CategoryDraft id=%s", self.id)

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "CategoryDraft":
        """Build an edit buffer from a category returned by the backend."""
        logger.trace("Hydrating CategoryDraft from entity")
        return cls(
            id=entity.get("id"),
            name=entity.get("name") or "",
            description=entity.get("description") or "",
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the request body; only call on a validated draft."""
        payload = CategoryPayload(
            name=self.name.strip(),
            description=self.description.strip(),
        )
        return payload.model_dump(mode="json")
