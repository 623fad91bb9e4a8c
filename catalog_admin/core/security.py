"""
Security utilities: unverified decoding of bearer token claims.

The console never holds the signing key, so claims are read without
verifying the signature. The result is only good enough to tell a live
token from an obviously stale or malformed one.
"""
import json
import logging
from typing import Any

from jose.utils import base64url_decode

from catalog_admin.core.exceptions import TokenMalformed

logger = logging.getLogger(__name__)

TOKEN_SEGMENTS = 3


def _reject_constant(name: str) -> None:
    raise TokenMalformed(f"Token claims contain the non-JSON literal {name}")


def read_unverified_claims(token: str) -> dict[str, Any]:
    """
    Return the claims object carried in the second segment of *token*.

    Raises:
        TokenMalformed: if the token does not have three segments, or the
            claims segment is not base64-encoded JSON describing an object.
    """
    logger.trace("Reading unverified token claims")
    parts = token.split(".")
    if len(parts) != TOKEN_SEGMENTS:
        raise TokenMalformed(f"Expected {TOKEN_SEGMENTS} segments, got {len(parts)}")

    try:
        raw = base64url_decode(parts[1].encode("ascii"))
        claims = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError) as exc:
        raise TokenMalformed("Token claims could not be decoded") from exc

    if not isinstance(claims, dict):
        raise TokenMalformed("Token claims are not an object")
    return claims
