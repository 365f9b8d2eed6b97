"""Editor modes for a single appointment as an explicit tagged union.

An appointment dialog is either being viewed, edited (rescheduled), completed
(extras and price being assembled) or saved. Editing and completing exclude
each other by construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ...errors import InvalidTransitionError
from ..billing.calculator import CompletionDraft


@dataclass(frozen=True)
class Viewing:
    pass


@dataclass(frozen=True)
class Editing:
    date: str = ""
    time: str = ""
    employee_id: str | None = None


@dataclass(frozen=True)
class Completing:
    draft: CompletionDraft = field(default_factory=lambda: CompletionDraft(base_price=0.0))


@dataclass(frozen=True)
class Saving:
    origin: Union[Editing, Completing]


EditorMode = Union[Viewing, Editing, Completing, Saving]


class EditorEvent(str, Enum):
    START_EDIT = "start_edit"
    START_COMPLETE = "start_complete"
    SUBMIT = "submit"
    SUCCEED = "succeed"
    FAIL = "fail"
    CANCEL = "cancel"


def transition(
    mode: EditorMode,
    event: EditorEvent | str,
    *,
    editing: Editing | None = None,
    draft: CompletionDraft | None = None,
) -> EditorMode:
    """Next mode for ``event``; disallowed combinations raise InvalidTransitionError."""

    event = EditorEvent(event)
    match mode, event:
        case Viewing(), EditorEvent.START_EDIT:
            return editing or Editing()
        case Viewing(), EditorEvent.START_COMPLETE:
            return Completing(draft=draft) if draft is not None else Completing()
        case (Editing() | Completing()), EditorEvent.SUBMIT:
            return Saving(origin=mode)
        case (Editing() | Completing()), EditorEvent.CANCEL:
            return Viewing()
        case Saving(), EditorEvent.SUCCEED:
            return Viewing()
        case Saving(origin=origin), EditorEvent.FAIL:
            return origin
        case _:
            raise InvalidTransitionError(
                f"Cannot apply '{event.value}' while in {type(mode).__name__.lower()} mode."
            )
