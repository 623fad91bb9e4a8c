"""
Confirmation gate for edit and delete actions.

    IDLE --request()--> AWAITING_CONFIRMATION --confirm()/cancel()--> IDLE

The workflow is reusable: every resolution returns it to IDLE. Create
actions never pass through here.
"""
import enum
import logging
from typing import Awaitable, Callable, Optional

from catalog_admin.core.exceptions import InvalidTransition
from catalog_admin.models.editor import PendingAction

logger = logging.getLogger(__name__)

Executor = Callable[[PendingAction], Awaitable[bool]]


class WorkflowState(str, enum.Enum):
    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"


class ConfirmationWorkflow:
    """Holds at most one PendingAction until it is confirmed or cancelled."""

    def __init__(self, executor: Executor) -> None:
        """*executor* performs the backend call for a confirmed action."""
        logger.trace("Initializing ConfirmationWorkflow")
        self._executor = executor
        self._pending: Optional[PendingAction] = None

    @property
    def state(self) -> WorkflowState:
        if self._pending is None:
            return WorkflowState.IDLE
        return WorkflowState.AWAITING_CONFIRMATION

    @property
    def pending(self) -> Optional[PendingAction]:
        return self._pending

    @property
    def is_awaiting(self) -> bool:
        return self._pending is not None

    def request(self, action: PendingAction) -> None:
        """Hold *action* until the user confirms or cancels it."""
        if self._pending is not None:
            raise InvalidTransition(
                f"Cannot request {action.kind.value}: a {self._pending.kind.value} "
                "is already awaiting confirmation"
            )
        logger.info("Awaiting confirmation for %s id=%s", action.kind.value, action.target_id)
        self._pending = action

    async def confirm(self) -> bool:
        """
        Execute the held action exactly once and return to IDLE.

        Returns the executor's result (True when the backend call succeeded).

        Raises:
            InvalidTransition: if nothing is awaiting confirmation.
        """
        action = self._pending
        if action is None:
            raise InvalidTransition("Nothing is awaiting confirmation")
        # Released before the call so a second confirm() cannot run it again.
        self._pending = None
        logger.info("Confirmed %s id=%s", action.kind.value, action.target_id)
        return await self._executor(action)

    def cancel(self) -> None:
        """Discard any held action without touching the backend."""
        if self._pending is not None:
            logger.info(
                "Cancelled %s id=%s", self._pending.kind.value, self._pending.target_id
            )
        self._pending = None
