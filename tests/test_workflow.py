import pytest

from src.salon.errors import InvalidTransitionError
from src.salon.services.appointments.workflow import (
    Completing,
    EditorEvent,
    Editing,
    Saving,
    Viewing,
    transition,
)
from src.salon.services.billing.calculator import CompletionDraft


def test_edit_round_trip_returns_to_viewing() -> None:
    editing = transition(Viewing(), EditorEvent.START_EDIT, editing=Editing(date="2026-03-02", time="10:00"))
    saving = transition(editing, EditorEvent.SUBMIT)

    assert isinstance(saving, Saving)
    assert saving.origin == Editing(date="2026-03-02", time="10:00")
    assert transition(saving, EditorEvent.SUCCEED) == Viewing()


def test_failed_save_returns_to_originating_mode() -> None:
    draft = CompletionDraft(base_price=40.0)
    completing = transition(Viewing(), "start_complete", draft=draft)

    restored = transition(transition(completing, "submit"), "fail")

    assert isinstance(restored, Completing)
    assert restored.draft is draft


def test_cancel_discards_mode() -> None:
    assert transition(Editing(), EditorEvent.CANCEL) == Viewing()
    assert isinstance(transition(Completing(), EditorEvent.CANCEL), Viewing)


@pytest.mark.parametrize(
    ("mode", "event"),
    [
        (Editing(), EditorEvent.START_COMPLETE),
        (Completing(), EditorEvent.START_EDIT),
        (Viewing(), EditorEvent.SUBMIT),
        (Saving(origin=Editing()), EditorEvent.CANCEL),
    ],
)
def test_disallowed_transitions_raise(mode, event) -> None:
    with pytest.raises(InvalidTransitionError):
        transition(mode, event)
