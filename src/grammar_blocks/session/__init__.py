"""Session state machine and the engine that drives it."""

from .state import (
    Acknowledge,
    ClickCell,
    Phase,
    PickToken,
    PlacePiece,
    SelectPiece,
    Session,
    Submit,
    TerminalReason,
    UnpickToken,
    WrongItem,
    new_session,
    reduce,
)

__all__ = [
    "Acknowledge",
    "ClickCell",
    "Phase",
    "PickToken",
    "PlacePiece",
    "SelectPiece",
    "Session",
    "Submit",
    "TerminalReason",
    "UnpickToken",
    "WrongItem",
    "new_session",
    "reduce",
]
