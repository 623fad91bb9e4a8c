"""
Domain models for the draft / confirmation lifecycle of one resource.

The editor of a resource is always in exactly one of the states below,
so an edit form and a delete confirmation can never be open together.
"""
import enum
from dataclasses import dataclass
from typing import Any, Optional, Union


class ActionKind(str, enum.Enum):
    EDIT = "edit"
    DELETE = "delete"


class ValidationMode(str, enum.Enum):
    CREATE = "create"
    EDIT = "edit"


@dataclass(frozen=True)
class PendingAction:
    """An edit or delete waiting for explicit confirmation."""

    kind: ActionKind
    draft: Optional[Any] = None
    target_id: Optional[Any] = None

    @classmethod
    def edit(cls, draft: Any) -> "PendingAction":
        return cls(kind=ActionKind.EDIT, draft=draft, target_id=draft.id)

    @classmethod
    def delete(cls, target_id: Any) -> "PendingAction":
        return cls(kind=ActionKind.DELETE, target_id=target_id)


# ---------------------------------------------------------------------------
# Editor state variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class Creating:
    draft: Any


@dataclass(frozen=True)
class Editing:
    draft: Any


@dataclass(frozen=True)
class ConfirmingEdit:
    draft: Any


@dataclass(frozen=True)
class ConfirmingDelete:
    target_id: Any


EditorState = Union[Closed, Creating, Editing, ConfirmingEdit, ConfirmingDelete]
