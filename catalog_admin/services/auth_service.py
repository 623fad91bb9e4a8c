"""
Authentication service: login, logout and account lookups.
"""
import logging
from typing import Optional

from catalog_admin.repositories.auth_repository import AuthRepository
from catalog_admin.repositories.session_store import SessionStore
from catalog_admin.schemas.auth import LoginRequest, LoginResponse
from catalog_admin.services.session_guard import SessionValidityGuard

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        repository: AuthRepository,
        store: SessionStore,
        guard: SessionValidityGuard,
    ) -> None:
        logger.trace("Initializing AuthService")
        self._repo = repository
        self._store = store
        self._guard = guard

    # ------------------------------------------------------------------
    # Login / logout
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Exchange credentials for a token and persist it with the display name.

        Raises:
            BackendError: if the backend rejects the credentials.
            TransportError: if the backend cannot be reached.
        """
        logger.info("Logging in '%s'", email)
        result = await self._repo.login(LoginRequest(email=email, password=password))
        self._store.save_session(result.token, result.full_name)
        logger.info("Login successful for '%s'", email)
        return result

    def logout(self) -> None:
        """Forget the stored token and display name. The backend is not contacted."""
        logger.info("Logging out")
        self._store.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def check_email_exists(self, email: str) -> bool:
        logger.info("Checking whether '%s' is registered", email)
        return await self._repo.check_email(email)

    def is_authenticated(self) -> bool:
        return self._guard.is_valid()

    @property
    def display_name(self) -> Optional[str]:
        return self._store.full_name
