"""
Repository layer for locally persisted session state.
The bearer token and the display name live here under fixed keys.
"""
import json
import logging
import os
import tempfile
from typing import Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
FULL_NAME_KEY = "fullName"


class SessionStore:
    """
    Key/value store for the session token and display name.

    Values are written through to a JSON file when *path* is given;
    without a path the store only lives in memory.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        """Load any previously persisted values from *path*."""
        logger.trace("Initializing SessionStore path=%s", path)
        self._path = path
        self._values: dict[str, str] = self._read()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    @property
    def token(self) -> Optional[str]:
        return self.get(TOKEN_KEY)

    @property
    def full_name(self) -> Optional[str]:
        return self.get(FULL_NAME_KEY)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def set(self, key: str, value: str) -> None:
        logger.trace("Persisting session key=%s", key)
        self._commit({**self._values, key: value})

    def remove(self, key: str) -> None:
        logger.trace("Removing session key=%s", key)
        if key in self._values:
            self._commit({k: v for k, v in self._values.items() if k != key})

    def save_session(self, token: str, full_name: str) -> None:
        """Persist the token and display name together."""
        logger.info("Saving session for %s", full_name)
        self._commit({**self._values, TOKEN_KEY: token, FULL_NAME_KEY: full_name})

    def clear(self) -> None:
        """Remove the token and display name together."""
        logger.info("Clearing stored session")
        self._commit({
            k: v for k, v in self._values.items() if k not in (TOKEN_KEY, FULL_NAME_KEY)
        })

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read(self) -> dict[str, str]:
        if not self._path or not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError):
            logger.warning("Session file %s is unreadable, starting empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Session file %s does not hold an object", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _commit(self, values: dict[str, str]) -> None:
        """Persist *values*, then adopt them; a failed write changes nothing."""
        if self._path:
            self._write(values)
        self._values = values

    def _write(self, values: dict[str, str]) -> None:
        directory = os.path.dirname(self._path) or "."
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".session-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(values, fh)
            os.replace(tmp_path, self._path)
        except BaseException:
            os.unlink(tmp_path)
            raise
