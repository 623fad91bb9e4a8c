import httpx
import pytest

from catalog_admin.core.config import Settings
from catalog_admin.repositories.session_store import SessionStore
from catalog_admin.services.console import AdminConsole
from tests.fake_backend import FakeBackend

BASE_URL = "http://testserver/api"


@pytest.fixture()
def test_settings():
    return Settings(
        API_BASE_URL=BASE_URL,
        SESSION_FILE_PATH=None,
        LOG_FILE_PATH=None,
    )


@pytest.fixture()
def backend():
    return FakeBackend()


@pytest.fixture()
def store():
    return SessionStore()


@pytest.fixture()
def console(backend, store, test_settings):
    return AdminConsole(
        config=test_settings,
        store=store,
        transport=httpx.ASGITransport(app=backend.app),
    )


@pytest.fixture()
def unreachable_console(store, test_settings):
    """A console whose every request fails before reaching a server."""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return AdminConsole(
        config=test_settings,
        store=store,
        transport=httpx.MockTransport(refuse),
    )
