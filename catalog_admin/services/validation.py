"""
Client-side draft validation.

Each resource declares an ordered list of rules. ``validate`` runs them in
order and returns the first failure, so a form only ever shows one
message. Passing validation makes a draft eligible for submission; the
backend remains the final authority.
"""
import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional, Sequence

from catalog_admin.core.exceptions import FieldError
from catalog_admin.models.category import CategoryDraft
from catalog_admin.models.editor import ValidationMode
from catalog_admin.models.product import ProductDraft, coerce_price, coerce_stock

logger = logging.getLogger(__name__)

Rule = Callable[[Any, Sequence[Any], ValidationMode], Optional[FieldError]]

CATEGORY_NAME_MIN_LENGTH = 3


def entity_value(entity: Any, key: str) -> Any:
    """Read *key* from a backend entity, whether a mapping or an object."""
    if isinstance(entity, Mapping):
        return entity.get(key)
    return getattr(entity, key, None)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _name_key(value: Any) -> str:
    return str(value if value is not None else "").strip().lower()


# ---------------------------------------------------------------------------
# Rule factories
# ---------------------------------------------------------------------------

def required(fields: Iterable[tuple[str, str]]) -> Rule:
    """Every listed attribute must be present and, for strings, non-blank."""
    fields = list(fields)

    def _check(draft: Any, collection: Sequence[Any], mode: ValidationMode) -> Optional[FieldError]:
        for field, message in fields:
            if _is_blank(getattr(draft, field, None)):
                return FieldError(field, message)
        return None

    return _check


def min_length(field: str, length: int, message: str) -> Rule:
    def _check(draft: Any, collection: Sequence[Any], mode: ValidationMode) -> Optional[FieldError]:
        if len(str(getattr(draft, field, "")).strip()) < length:
            return FieldError(field, message)
        return None

    return _check


def non_negative(
    field: str,
    coerce: Callable[[Any], Any],
    invalid_message: str,
    negative_message: str,
) -> Rule:
    """The attribute must coerce to a number, and that number must be >= 0."""

    def _check(draft: Any, collection: Sequence[Any], mode: ValidationMode) -> Optional[FieldError]:
        value = coerce(getattr(draft, field, None))
        if value is None:
            return FieldError(field, invalid_message)
        if value < 0:
            return FieldError(field, negative_message)
        return None

    return _check


def unique_name(message: str) -> Rule:
    """No other entity may share the draft's trimmed, case-insensitive name."""

    def _check(draft: Any, collection: Sequence[Any], mode: ValidationMode) -> Optional[FieldError]:
        wanted = _name_key(draft.name)
        for entity in collection:
            if mode is ValidationMode.EDIT and entity_value(entity, "id") == draft.id:
                continue
            if _name_key(entity_value(entity, "name")) == wanted:
                return FieldError("name", message)
        return None

    return _check


# ---------------------------------------------------------------------------
# Per-resource rule sets
# ---------------------------------------------------------------------------

CATEGORY_RULES: list[Rule] = [
    required([
        ("name", "Category name is required."),
        ("description", "Category description is required."),
    ]),
    min_length(
        "name",
        CATEGORY_NAME_MIN_LENGTH,
        f"Name must be at least {CATEGORY_NAME_MIN_LENGTH} characters long.",
    ),
    unique_name("A category with that name already exists."),
]

_PRODUCT_REQUIRED = "Please fill in all required fields."

PRODUCT_RULES: list[Rule] = [
    required([
        ("name", _PRODUCT_REQUIRED),
        ("description", _PRODUCT_REQUIRED),
        ("price", _PRODUCT_REQUIRED),
        ("stock", _PRODUCT_REQUIRED),
        ("category_id", _PRODUCT_REQUIRED),
        ("image_url", _PRODUCT_REQUIRED),
    ]),
    non_negative(
        "price", coerce_price, "Price must be a number.", "Price must not be negative."
    ),
    non_negative(
        "stock", coerce_stock, "Stock must be a whole number.", "Stock must not be negative."
    ),
    unique_name("A product with that name already exists."),
]

_RULES_BY_DRAFT: dict[type, list[Rule]] = {
    CategoryDraft: CATEGORY_RULES,
    ProductDraft: PRODUCT_RULES,
}


def validate(
    draft: Any,
    collection: Sequence[Any],
    mode: ValidationMode,
    rules: Optional[Sequence[Rule]] = None,
) -> Optional[FieldError]:
    """Return the first failing rule's FieldError, or None if *draft* is valid."""
    mode = ValidationMode(mode)
    if rules is None:
        rules = _RULES_BY_DRAFT[type(draft)]
    for rule in rules:
        error = rule(draft, collection, mode)
        if error is not None:
            logger.info("Draft rejected on %s: %s", error.field, error.message)
            return error
    logger.trace("Draft passed %s validation", mode.value)
    return None
