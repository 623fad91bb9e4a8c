"""
List envelope normalization.

The backend has been seen answering list endpoints with a bare array,
``{"data": [...]}`` or ``{"<resource>": [...]}``; all three reduce to the
same ordered list here. Entities themselves pass through untouched.
"""
import logging
from collections.abc import Mapping
from typing import Any

from catalog_admin.core.exceptions import MalformedResponse

logger = logging.getLogger(__name__)


def normalize_collection(response: Any, resource: str) -> list[Any]:
    """
    Return the entity list carried by *response*.

    Raises:
        MalformedResponse: if no tolerated envelope shape matches.
    """
    if isinstance(response, (list, tuple)):
        logger.trace("%s response is a bare list", resource)
        return list(response)

    if isinstance(response, Mapping):
        for key in ("data", resource):
            value = response.get(key)
            if isinstance(value, (list, tuple)):
                logger.trace("%s response wrapped under '%s'", resource, key)
                return list(value)

    logger.warning("Malformed %s response of type %s", resource, type(response).__name__)
    raise MalformedResponse(resource, response)
