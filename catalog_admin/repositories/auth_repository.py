"""
Repository layer for the authentication endpoints.
"""
import logging

import httpx

from catalog_admin.core.exceptions import BackendError
from catalog_admin.core.http import read_json, send_request
from catalog_admin.core.logging_config import log_api_timing
from catalog_admin.schemas.auth import CheckEmailResponse, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)


class AuthRepository:
    """Backend access for login and account lookups."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        logger.trace("Initializing AuthRepository")
        self._client = client

    def __repr__(self) -> str:
        return "AuthRepository"

    @log_api_timing
    async def login(self, credentials: LoginRequest) -> LoginResponse:
        """Post credentials and return the issued token and display name."""
        logger.info("Posting login for %s", credentials.email)
        response = await send_request(
            self._client, "POST", "/login", json=credentials.model_dump()
        )
        body = read_json(response)
        try:
            return LoginResponse.model_validate(body)
        except ValueError as exc:
            logger.warning("Login response missing token or fullName")
            raise BackendError(response.status_code, "Unexpected login response") from exc

    @log_api_timing
    async def check_email(self, email: str) -> bool:
        """Return True when an account already uses *email*."""
        logger.trace("Checking e-mail availability")
        response = await send_request(
            self._client, "GET", "/users/check-email", params={"email": email}
        )
        body = read_json(response)
        try:
            return CheckEmailResponse.model_validate(body).exists
        except ValueError as exc:
            raise BackendError(response.status_code, "Unexpected check-email response") from exc
