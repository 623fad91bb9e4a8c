"""
Resource administration controller.

One instance per resource owns that resource's collection. Mutations are
validated, edits and deletes are gated by a ConfirmationWorkflow, and every
successful mutation is followed by exactly one full reload. The collection
is only ever written by ``load()`` and always replaced as a whole.
"""
import logging
from typing import Any, Optional

from catalog_admin.core.exceptions import (
    BackendError,
    FieldError,
    InvalidTransition,
    MalformedResponse,
    TransportError,
)
from catalog_admin.models.editor import (
    ActionKind,
    Closed,
    ConfirmingDelete,
    ConfirmingEdit,
    Creating,
    EditorState,
    Editing,
    PendingAction,
    ValidationMode,
)
from catalog_admin.repositories.resource_repository import ResourceRepository
from catalog_admin.services.confirmation import ConfirmationWorkflow
from catalog_admin.services.normalizer import normalize_collection
from catalog_admin.services.resources import ResourceDefinition
from catalog_admin.services.validation import entity_value, validate

logger = logging.getLogger(__name__)


class ResourceController:
    """State and workflows for administering one resource collection."""

    def __init__(
        self,
        definition: ResourceDefinition,
        repository: ResourceRepository,
        load_sequencing: bool = False,
    ) -> None:
        """
        With *load_sequencing* off, overlapping loads each replace the
        collection and the last to complete wins. With it on, only the most
        recently issued load may replace it.
        """
        logger.trace("Initializing ResourceController resource=%s", definition.name)
        self.definition = definition
        self._repo = repository
        self._load_sequencing = load_sequencing
        self._items: list[Any] = []
        self._form: EditorState = Closed()
        self._workflow = ConfirmationWorkflow(self._execute)
        self._issued_loads = 0
        self._loads_in_flight = 0

        self.error: Optional[str] = None
        self.form_error: Optional[FieldError] = None

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def items(self) -> list[Any]:
        """A copy of the collection from the most recent successful load."""
        return list(self._items)

    @property
    def loading(self) -> bool:
        return self._loads_in_flight > 0

    @property
    def state(self) -> EditorState:
        pending = self._workflow.pending
        if pending is None:
            return self._form
        if pending.kind is ActionKind.EDIT:
            return ConfirmingEdit(pending.draft)
        return ConfirmingDelete(pending.target_id)

    @property
    def workflow(self) -> ConfirmationWorkflow:
        return self._workflow

    def find(self, entity_id: Any) -> Optional[Any]:
        """Return the loaded entity with *entity_id*, if any."""
        for entity in self._items:
            if entity_value(entity, "id") == entity_id:
                return entity
        return None

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """
        Fetch the collection and replace it wholesale.

        Returns True when the collection was replaced. Failures are
        reported through ``error``; a malformed envelope also empties the
        collection, a transport or backend failure leaves it untouched.
        """
        self._issued_loads += 1
        ticket = self._issued_loads
        self._loads_in_flight += 1
        self.error = None
        logger.info("Loading %s", self.definition.name)
        try:
            response = await self._repo.fetch_all()
            items = normalize_collection(response, self.definition.name)
        except MalformedResponse as exc:
            if self._is_superseded(ticket):
                return False
            logger.warning(
                "Discarding %s collection: unexpected %s envelope",
                self.definition.name,
                exc.received_type,
            )
            self._items = []
            self.error = f"Error: {exc}."
            return False
        except (TransportError, BackendError) as exc:
            if self._is_superseded(ticket):
                return False
            logger.warning("Loading %s failed: %s", self.definition.name, exc)
            self.error = f"Could not load {self.definition.name}: {exc}"
            return False
        finally:
            self._loads_in_flight -= 1

        if self._is_superseded(ticket):
            return False
        self._items = items
        logger.info("Loaded %s %s", len(items), self.definition.name)
        return True

    def _is_superseded(self, ticket: int) -> bool:
        if self._load_sequencing and ticket != self._issued_loads:
            logger.trace(
                "Discarding %s load #%s, superseded by #%s",
                self.definition.name,
                ticket,
                self._issued_loads,
            )
            return True
        return False

    # ------------------------------------------------------------------
    # Editor
    # ------------------------------------------------------------------

    def open_create(self) -> Any:
        """Open an empty draft for a new entity and return it."""
        self._ensure_not_confirming("open a create form")
        draft = self.definition.new_draft()
        self._form = Creating(draft)
        self.form_error = None
        logger.trace("Opened create form for %s", self.definition.label)
        return draft

    def open_edit(self, entity: Any) -> Any:
        """Open a draft pre-filled from *entity* and return it."""
        self._ensure_not_confirming("open an edit form")
        draft = self.definition.draft_from_entity(entity)
        self._form = Editing(draft)
        self.form_error = None
        logger.trace("Opened edit form for %s id=%s", self.definition.label, draft.id)
        return draft

    async def submit(self) -> bool:
        """Create or request an edit, depending on which form is open."""
        form = self._form
        if isinstance(form, Creating):
            return await self.create(form.draft)
        if isinstance(form, Editing):
            return self.request_edit(form.draft)
        raise InvalidTransition(f"No {self.definition.label} form is open")

    def cancel(self) -> None:
        """Discard any pending confirmation and close the form."""
        self._workflow.cancel()
        self._form = Closed()
        self.form_error = None

    def _ensure_not_confirming(self, what: str) -> None:
        if self._workflow.is_awaiting:
            raise InvalidTransition(f"Cannot {what} while a confirmation is pending")

    def _close_if_current(self, draft: Any) -> None:
        if getattr(self._form, "draft", None) is draft:
            self._form = Closed()
            self.form_error = None

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create(self, draft: Any) -> bool:
        """Validate and submit *draft* immediately; creation is not confirmed."""
        if not isinstance(self._form, Creating) or self._form.draft is not draft:
            self._ensure_not_confirming("create")
            self._form = Creating(draft)

        self.form_error = validate(
            draft, self._items, ValidationMode.CREATE, self.definition.rules
        )
        if self.form_error is not None:
            return False

        logger.info("Creating %s %s", self.definition.label, draft.name)
        try:
            await self._repo.create(draft.to_payload())
        except (TransportError, BackendError) as exc:
            logger.warning("Creating %s failed: %s", self.definition.label, exc)
            self.error = f"Could not create {self.definition.label}: {exc}"
            return False

        await self.load()
        self._close_if_current(draft)
        return True

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def request_edit(self, draft: Any) -> bool:
        """Validate *draft* and, if it passes, hold it for confirmation."""
        if draft.id is None:
            raise ValueError(f"Cannot edit a {self.definition.label} without an id")
        self._ensure_not_confirming("request an edit")
        self._form = Editing(draft)

        self.form_error = validate(
            draft, self._items, ValidationMode.EDIT, self.definition.rules
        )
        if self.form_error is not None:
            return False

        self._workflow.request(PendingAction.edit(draft))
        return True

    async def commit_edit(self, draft: Any) -> bool:
        """Send the confirmed edit, then reload."""
        logger.info("Updating %s id=%s", self.definition.label, draft.id)
        try:
            await self._repo.update(draft.id, draft.to_payload())
        except (TransportError, BackendError) as exc:
            logger.warning("Updating %s id=%s failed: %s", self.definition.label, draft.id, exc)
            self.error = f"Could not update {self.definition.label}: {exc}"
            return False

        await self.load()
        self._close_if_current(draft)
        return True

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def request_delete(self, target_id: Any) -> bool:
        """Hold a delete of *target_id* for confirmation; deletes carry no fields to validate."""
        self._ensure_not_confirming("request a delete")
        self._form = Closed()
        self.form_error = None
        self._workflow.request(PendingAction.delete(target_id))
        return True

    async def commit_delete(self, target_id: Any) -> bool:
        """Send the confirmed delete, then reload."""
        logger.info("Deleting %s id=%s", self.definition.label, target_id)
        try:
            await self._repo.delete(target_id)
        except (TransportError, BackendError) as exc:
            logger.warning("Deleting %s id=%s failed: %s", self.definition.label, target_id, exc)
            self.error = f"Could not delete {self.definition.label}: {exc}"
            return False

        await self.load()
        return True

    # ------------------------------------------------------------------
    # Confirmation
    # ------------------------------------------------------------------

    async def confirm(self) -> bool:
        """Run the pending edit or delete. Returns False if nothing was pending or it failed."""
        if not self._workflow.is_awaiting:
            logger.warning("Confirm requested for %s with nothing pending", self.definition.name)
            return False
        return await self._workflow.confirm()

    async def _execute(self, action: PendingAction) -> bool:
        if action.kind is ActionKind.EDIT:
            return await self.commit_edit(action.draft)
        return await self.commit_delete(action.target_id)
