"""Session state and the reducers that advance it.

A `Session` is an immutable value. Every player action is an event, and
`reduce(session, event, generator, rng)` returns the next session. Once a
session is terminal every reducer hands it back unchanged, so the first
terminal reason is the only one that sticks.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

from grammar_blocks.game import GameConfig, GameGrid, Piece, PieceGenerator, has_any_placement
from grammar_blocks.sentence import Round, check_round, pick_token, start_round, unpick_token


class Phase(str, Enum):
    ARRANGE = "arrange"
    PUZZLE = "puzzle"
    TERMINAL = "terminal"


class TerminalReason(str, Enum):
    COMPLETED = "completed"
    NO_FIT = "no-fit"
    WRONG_LIMIT = "wrong-limit"


@dataclass(frozen=True)
class WrongItem:
    question: str
    correct: str


# Events


@dataclass(frozen=True)
class PickToken:
    index: int


@dataclass(frozen=True)
class UnpickToken:
    index: int


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class Acknowledge:
    pass


@dataclass(frozen=True)
class SelectPiece:
    piece_id: str


@dataclass(frozen=True)
class ClickCell:
    row: int
    col: int


@dataclass(frozen=True)
class PlacePiece:
    piece_id: str
    row: int
    col: int


@dataclass(frozen=True, eq=False)
class Session:
    config: GameConfig
    targets: Tuple[str, ...]
    round: Round
    grid: GameGrid
    round_index: int = 0
    bag: Tuple[Piece, ...] = ()
    selected: Optional[str] = None
    lines_cleared: int = 0
    wrong_count: int = 0
    wrong_items: Tuple[WrongItem, ...] = field(default_factory=tuple)
    phase: Phase = Phase.ARRANGE
    reason: Optional[TerminalReason] = None

    @property
    def score(self) -> int:
        return self.lines_cleared

    @property
    def rounds_played(self) -> int:
        return self.round_index + 1 if self.targets else 0

    @property
    def is_terminal(self) -> bool:
        return self.phase is Phase.TERMINAL

    def find_piece(self, piece_id: Optional[str]) -> Optional[Piece]:
        for piece in self.bag:
            if piece.id == piece_id:
                return piece
        return None


def new_session(
    targets: Sequence[str],
    rng: random.Random,
    config: Optional[GameConfig] = None,
) -> Session:
    config = config or GameConfig()
    rounds = list(targets)
    if config.shuffle_targets:
        rng.shuffle(rounds)
    grid = GameGrid(config.grid_size)
    if not rounds:
        empty = Round(sentence="", answer=(), tray=())
        return Session(config=config, targets=(), round=empty, grid=grid,
                       phase=Phase.TERMINAL, reason=TerminalReason.COMPLETED)
    return Session(config=config, targets=tuple(rounds), round=start_round(rounds[0], rng), grid=grid)


def terminate(session: Session, reason: TerminalReason) -> Session:
    if session.is_terminal:
        return session
    return replace(session, phase=Phase.TERMINAL, reason=reason, selected=None)


def advance(session: Session, rng: random.Random) -> Session:
    next_idx = session.round_index + 1
    if next_idx >= len(session.targets):
        return terminate(session, TerminalReason.COMPLETED)
    return replace(
        session,
        round_index=next_idx,
        round=start_round(session.targets[next_idx], rng),
        bag=(),
        selected=None,
        phase=Phase.ARRANGE,
    )


def deal(session: Session, generator: PieceGenerator) -> Session:
    bag = generator.draw_batch(session.config.pieces_per_set)
    session = replace(session, bag=bag, selected=None, phase=Phase.PUZZLE)
    if not has_any_placement(session.grid, bag):
        return terminate(session, TerminalReason.NO_FIT)
    return session


def submit(session: Session, generator: PieceGenerator) -> Session:
    if session.phase is not Phase.ARRANGE or session.round.checked is not None:
        return session
    checked = check_round(session.round)
    session = replace(session, round=checked)
    if checked.checked:
        return deal(session, generator)
    return replace(
        session,
        wrong_count=session.wrong_count + 1,
        wrong_items=session.wrong_items + (WrongItem(checked.sentence, checked.correct_text),),
    )


def acknowledge(session: Session, rng: random.Random) -> Session:
    if session.phase is not Phase.ARRANGE or session.round.checked is not False:
        return session
    if session.wrong_count >= session.config.wrong_limit:
        return terminate(session, TerminalReason.WRONG_LIMIT)
    return advance(session, rng)


def place_piece(session: Session, piece_id: str, row: int, col: int, rng: random.Random) -> Session:
    if session.phase is not Phase.PUZZLE:
        return session
    piece = session.find_piece(piece_id)
    if piece is None:
        return session
    grid = session.grid.copy()
    result = grid.place(piece, row, col)
    if not result.placed:
        return session
    rest = tuple(p for p in session.bag if p.id != piece.id)
    session = replace(
        session,
        grid=grid,
        bag=rest,
        selected=None,
        lines_cleared=session.lines_cleared + result.lines_cleared,
    )
    if not rest:
        return advance(session, rng)
    if not has_any_placement(session.grid, rest):
        return terminate(session, TerminalReason.NO_FIT)
    return session


def select_piece(session: Session, piece_id: str) -> Session:
    if session.phase is not Phase.PUZZLE or session.find_piece(piece_id) is None:
        return session
    return replace(session, selected=None if session.selected == piece_id else piece_id)


def reduce(session: Session, event, generator: PieceGenerator, rng: random.Random) -> Session:
    if session.is_terminal:
        return session
    if isinstance(event, PickToken):
        if session.phase is not Phase.ARRANGE:
            return session
        return replace(session, round=pick_token(session.round, event.index))
    elif isinstance(event, UnpickToken):
        if session.phase is not Phase.ARRANGE:
            return session
        return replace(session, round=unpick_token(session.round, event.index))
    elif isinstance(event, Submit):
        return submit(session, generator)
    elif isinstance(event, Acknowledge):
        return acknowledge(session, rng)
    elif isinstance(event, SelectPiece):
        return select_piece(session, event.piece_id)
    elif isinstance(event, ClickCell):
        if session.selected is None:
            return session
        return place_piece(session, session.selected, event.row, event.col, rng)
    elif isinstance(event, PlacePiece):
        return place_piece(session, event.piece_id, event.row, event.col, rng)
    raise TypeError(f"Unknown event: {event!r}")
