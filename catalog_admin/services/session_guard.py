"""
Local session validity check.

Validity is recomputed from the stored token on every call and never
cached. The token signature is NOT verified: the console has no signing
key, so this only keeps obviously expired or malformed tokens from being
treated as live. The backend still decides on every request.
"""
import logging
import time
from typing import Callable

from catalog_admin.core.exceptions import TokenMalformed
from catalog_admin.core.security import read_unverified_claims
from catalog_admin.repositories.session_store import SessionStore

logger = logging.getLogger(__name__)


class SessionValidityGuard:
    def __init__(self, store: SessionStore, clock: Callable[[], float] = time.time) -> None:
        logger.trace("Initializing SessionValidityGuard")
        self._store = store
        self._clock = clock

    def is_valid(self) -> bool:
        """Return True when a display name and an unexpired, well-formed token are stored."""
        token = self._store.token
        if not token or not self._store.full_name:
            logger.trace("No stored session")
            return False

        try:
            claims = read_unverified_claims(token)
        except TokenMalformed as exc:
            logger.warning("Stored token is malformed: %s", exc)
            return False

        exp = claims.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            logger.info("Stored token carries no usable expiry")
            return False

        now = int(self._clock())
        if exp > now:
            return True
        logger.info("Stored token expired at %s", exp)
        return False
