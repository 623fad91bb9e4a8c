import asyncio
import logging

import httpx
import pytest

from catalog_admin.core.exceptions import FieldError, InvalidTransition
from catalog_admin.models.category import CategoryDraft
from catalog_admin.models.editor import (
    Closed,
    ConfirmingDelete,
    ConfirmingEdit,
    Creating,
    Editing,
)
from catalog_admin.repositories.resource_repository import ResourceRepository
from catalog_admin.services.resource_controller import ResourceController
from catalog_admin.services.resources import CATEGORIES

LIST_PATH = "/api/categories"


@pytest.fixture()
def shoes(backend):
    return backend.seed("categories", name="Shoes", description="Footwear")


@pytest.fixture()
def controller(console):
    return console.categories


class TestLoad:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("envelope", ["list", "data", "resource"])
    async def test_load_accepts_every_envelope(self, backend, controller, shoes, envelope):
        backend.envelope = envelope
        assert await controller.load() is True
        assert controller.items == [shoes]
        assert controller.error is None
        assert controller.loading is False

    @pytest.mark.asyncio
    async def test_malformed_envelope_empties_collection(self, backend, controller, shoes, caplog):
        await controller.load()
        backend.envelope = "broken"
        caplog.set_level(logging.WARNING, logger="catalog_admin.services.resource_controller")
        assert await controller.load() is False
        assert controller.items == []
        assert "not a list" in controller.error
        assert "unexpected dict envelope" in caplog.text

    @pytest.mark.asyncio
    async def test_backend_failure_keeps_last_good_collection(self, backend, controller, shoes):
        await controller.load()
        backend.fail("GET", LIST_PATH, 503)
        assert await controller.load() is False
        assert controller.items == [shoes]
        assert "Injected failure" in controller.error

    @pytest.mark.asyncio
    async def test_transport_failure_is_reported_not_raised(self, unreachable_console):
        controller = unreachable_console.categories
        assert await controller.load() is False
        assert controller.items == []
        assert controller.error.startswith("Could not load categories")

    @pytest.mark.asyncio
    async def test_successful_load_clears_previous_error(self, backend, controller, shoes):
        backend.fail("GET", LIST_PATH)
        await controller.load()
        backend.failures.clear()
        await controller.load()
        assert controller.error is None

    @pytest.mark.asyncio
    async def test_items_cannot_be_patched_from_outside(self, controller, shoes):
        await controller.load()
        controller.items.append({"id": 99, "name": "Ghost"})
        assert controller.items == [shoes]

    @pytest.mark.asyncio
    async def test_find(self, controller, shoes):
        await controller.load()
        assert controller.find(shoes["id"]) == shoes
        assert controller.find(12345) is None


class TestCreate:
    @pytest.mark.asyncio
    async def test_duplicate_name_is_rejected_without_network(self, backend, controller, shoes):
        await controller.load()
        requests_before = len(backend.requests)

        draft = controller.open_create()
        draft.name = "shoes"
        draft.description = "Lowercase clone"
        assert await controller.submit() is False

        assert controller.form_error == FieldError(
            "name", "A category with that name already exists."
        )
        assert len(backend.requests) == requests_before
        assert controller.state == Creating(draft)

    @pytest.mark.asyncio
    async def test_create_posts_then_reloads_once(self, backend, controller, shoes):
        await controller.load()
        draft = controller.open_create()
        draft.name = "  Bags "
        draft.description = "Carry things"

        assert await controller.submit() is True

        assert backend.calls("POST", LIST_PATH) == 1
        assert backend.calls("GET", LIST_PATH) == 2
        assert [c["name"] for c in controller.items] == ["Shoes", "Bags"]
        assert controller.state == Closed()
        assert controller.form_error is None

    @pytest.mark.asyncio
    async def test_create_skips_confirmation(self, controller):
        draft = CategoryDraft(name="Bags", description="Carry things")
        assert await controller.create(draft) is True
        assert controller.workflow.pending is None

    @pytest.mark.asyncio
    async def test_rejected_create_keeps_draft_open(self, backend, controller):
        backend.fail("POST", LIST_PATH, 409)
        draft = controller.open_create()
        draft.name = "Bags"
        draft.description = "Carry things"

        assert await controller.submit() is False
        assert controller.error == "Could not create category: Injected failure"
        assert controller.state == Creating(draft)
        assert backend.calls("GET", LIST_PATH) == 0

    @pytest.mark.asyncio
    async def test_collection_equals_independent_load_after_create(self, backend, console, controller):
        await controller.create(CategoryDraft(name="Bags", description="d"))
        other = ResourceController(CATEGORIES, ResourceRepository(console.client, "categories"))
        await other.load()
        assert controller.items == other.items


class TestEdit:
    @pytest.mark.asyncio
    async def test_edit_waits_for_confirmation(self, backend, controller, shoes):
        await controller.load()
        draft = controller.open_edit(shoes)
        assert controller.state == Editing(draft)
        draft.description = "All kinds of footwear"

        assert await controller.submit() is True
        assert controller.state == ConfirmingEdit(draft)
        assert backend.calls("PUT") == 0

    @pytest.mark.asyncio
    async def test_keeping_own_name_passes_uniqueness(self, controller, shoes):
        await controller.load()
        draft = controller.open_edit(shoes)
        assert controller.request_edit(draft) is True
        assert controller.form_error is None

    @pytest.mark.asyncio
    async def test_confirmed_edit_updates_then_reloads(self, backend, controller, shoes):
        await controller.load()
        draft = controller.open_edit(shoes)
        draft.description = "All kinds of footwear"
        controller.request_edit(draft)

        assert await controller.confirm() is True

        path = f"{LIST_PATH}/{shoes['id']}"
        assert backend.calls("PUT", path) == 1
        assert backend.calls("GET", LIST_PATH) == 2
        assert controller.items[0]["description"] == "All kinds of footwear"
        assert controller.state == Closed()

    @pytest.mark.asyncio
    async def test_cancelled_edit_sends_nothing(self, backend, controller, shoes):
        await controller.load()
        draft = controller.open_edit(shoes)
        draft.description = "Changed"
        controller.request_edit(draft)

        controller.cancel()

        assert backend.calls("PUT") == 0
        assert controller.state == Closed()
        assert controller.items == [shoes]

    @pytest.mark.asyncio
    async def test_invalid_edit_never_reaches_confirmation(self, backend, controller, shoes):
        other = backend.seed("categories", name="Hats", description="Headwear")
        await controller.load()
        draft = controller.open_edit(other)
        draft.name = "SHOES"

        assert controller.request_edit(draft) is False
        assert controller.form_error.field == "name"
        assert controller.workflow.pending is None
        assert controller.state == Editing(draft)

    @pytest.mark.asyncio
    async def test_failed_update_keeps_draft_for_retry(self, backend, controller, shoes):
        await controller.load()
        draft = controller.open_edit(shoes)
        controller.request_edit(draft)
        backend.fail("PUT", f"{LIST_PATH}/{shoes['id']}")

        assert await controller.confirm() is False
        assert controller.error.startswith("Could not update category")
        assert controller.state == Editing(draft)
        assert controller.workflow.pending is None
        assert backend.calls("GET", LIST_PATH) == 1

    def test_edit_requires_an_id(self, controller):
        with pytest.raises(ValueError):
            controller.request_edit(CategoryDraft(name="Bags", description="d"))


class TestDelete:
    @pytest.mark.asyncio
    async def test_cancelled_delete_issues_no_request(self, backend, controller, shoes):
        await controller.load()
        controller.request_delete(shoes["id"])
        assert controller.state == ConfirmingDelete(shoes["id"])

        controller.cancel()

        assert backend.calls("DELETE") == 0
        assert controller.items == [shoes]
        assert controller.state == Closed()

    @pytest.mark.asyncio
    async def test_confirmed_delete_then_exactly_one_load(self, backend, controller, shoes):
        await controller.load()
        loads_before = backend.calls("GET", LIST_PATH)
        controller.request_delete(shoes["id"])

        assert await controller.confirm() is True

        assert backend.calls("DELETE", f"{LIST_PATH}/{shoes['id']}") == 1
        assert backend.calls("GET", LIST_PATH) == loads_before + 1
        assert controller.items == []

    @pytest.mark.asyncio
    async def test_failed_delete_keeps_collection(self, backend, controller, shoes):
        await controller.load()
        backend.fail("DELETE", f"{LIST_PATH}/{shoes['id']}", 409)
        controller.request_delete(shoes["id"])

        assert await controller.confirm() is False
        assert controller.items == [shoes]
        assert controller.error == "Could not delete category: Injected failure"
        # The web page kept its delete modal open here; the console closes it
        # and the user re-requests the delete to retry.
        assert controller.state == Closed()

    @pytest.mark.asyncio
    async def test_confirm_with_nothing_pending_is_a_no_op(self, backend, controller):
        assert await controller.confirm() is False
        assert backend.requests == []


class TestEditorState:
    def test_starts_closed(self, controller):
        assert controller.state == Closed()

    def test_second_confirmation_cannot_open(self, controller):
        controller.request_delete(1)
        with pytest.raises(InvalidTransition):
            controller.request_delete(2)
        with pytest.raises(InvalidTransition):
            controller.open_create()
        assert controller.state == ConfirmingDelete(1)

    @pytest.mark.asyncio
    async def test_submit_without_open_form(self, controller):
        with pytest.raises(InvalidTransition):
            await controller.submit()

    def test_cancel_closes_open_form(self, controller):
        controller.open_create()
        controller.cancel()
        assert controller.state == Closed()


class GatedTransport(httpx.AsyncBaseTransport):
    """Answers list requests with a given body once the test releases them."""

    def __init__(self):
        self.gates = []

    async def handle_async_request(self, request):
        gate = asyncio.Event()
        slot = {"event": gate, "body": None}
        self.gates.append(slot)
        await gate.wait()
        return httpx.Response(200, json=slot["body"], request=request)

    def release(self, index, body):
        self.gates[index]["body"] = body
        self.gates[index]["event"].set()


async def _overlapping_loads(load_sequencing):
    transport = GatedTransport()
    async with httpx.AsyncClient(base_url="http://testserver/api", transport=transport) as client:
        controller = ResourceController(
            CATEGORIES,
            ResourceRepository(client, "categories"),
            load_sequencing=load_sequencing,
        )
        first = asyncio.create_task(controller.load())
        second = asyncio.create_task(controller.load())
        while len(transport.gates) < 2:
            await asyncio.sleep(0)
        assert controller.loading is True

        transport.release(1, [{"id": 2, "name": "Second"}])
        await second
        transport.release(0, [{"id": 1, "name": "First"}])
        await first
        assert controller.loading is False
        return controller.items


@pytest.mark.asyncio
async def test_overlapping_loads_last_completed_wins_by_default():
    assert await _overlapping_loads(load_sequencing=False) == [{"id": 1, "name": "First"}]


@pytest.mark.asyncio
async def test_overlapping_loads_last_issued_wins_with_sequencing():
    assert await _overlapping_loads(load_sequencing=True) == [{"id": 2, "name": "Second"}]
