from __future__ import annotations

import logging
import random
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from grammar_blocks.game import GameConfig, PieceGenerator
from grammar_blocks.report import Clock, Report, ReportListener, ReportLog, build_report

from .state import (
    Acknowledge,
    ClickCell,
    PickToken,
    PlacePiece,
    SelectPiece,
    Session,
    Submit,
    UnpickToken,
    new_session,
    reduce,
)

logger = logging.getLogger(__name__)


class GrammarBlocksGame:
    """Main game engine: sentence rounds gating block placement.

    Holds the current `Session` value and applies player actions to it.
    When an action ends the session, the report is appended to the log,
    broadcast to listeners, and the score is passed to `on_finished`.
    This happens once per session; failures in any of those steps are
    logged and do not affect the game state.
    """

    def __init__(
        self,
        targets: Sequence[str],
        on_finished: Optional[Callable[[int], None]] = None,
        listeners: Iterable[ReportListener] = (),
        report_log: Optional[ReportLog] = None,
        config: Optional[GameConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.targets = tuple(targets)
        self.on_finished = on_finished
        self.listeners: List[ReportListener] = list(listeners)
        self.report_log = report_log
        self.clock = clock
        self.rng = random.Random(self.config.random_seed)
        self.generator = PieceGenerator(self.rng)
        self.last_report: Optional[Report] = None
        self.session: Session = new_session(self.targets, self.rng, self.config)
        logger.debug("Session started with %d rounds", len(self.targets))
        if self.session.is_terminal:
            self._finish()

    def add_listener(self, listener: ReportListener) -> None:
        self.listeners.append(listener)

    def reset(self, seed: Optional[int] = None) -> None:
        """Start a new session over the same targets."""
        if seed is not None:
            self.rng.seed(seed)
        self.last_report = None
        self.session = new_session(self.targets, self.rng, self.config)
        logger.debug("Session reset")
        if self.session.is_terminal:
            self._finish()

    def dispatch(self, event) -> Session:
        before = self.session
        self.session = reduce(before, event, self.generator, self.rng)
        if self.session.is_terminal and not before.is_terminal:
            self._finish()
        return self.session

    def pick_token(self, index: int) -> Session:
        return self.dispatch(PickToken(index))

    def unpick_token(self, index: int) -> Session:
        return self.dispatch(UnpickToken(index))

    def submit(self) -> Session:
        return self.dispatch(Submit())

    def acknowledge(self) -> Session:
        return self.dispatch(Acknowledge())

    def select_piece(self, piece_id: str) -> Session:
        return self.dispatch(SelectPiece(piece_id))

    def click_cell(self, row: int, col: int) -> Session:
        return self.dispatch(ClickCell(row, col))

    def place_piece(self, piece_id: str, row: int, col: int) -> Session:
        return self.dispatch(PlacePiece(piece_id, row, col))

    def _finish(self) -> None:
        session = self.session
        report = build_report(session, self.clock)
        self.last_report = report
        logger.info(
            "Session over (%s): score=%d rounds=%d wrong=%d",
            report.reason.value, report.lines_cleared, report.rounds_played, report.wrong_count,
        )
        if self.report_log is not None:
            try:
                self.report_log.append(report)
            except Exception:
                logger.exception("Failed to append report to %s", self.report_log.path)
        for listener in self.listeners:
            try:
                listener(report)
            except Exception:
                logger.exception("Report listener %r failed", listener)
        if self.on_finished is not None:
            try:
                self.on_finished(session.score)
            except Exception:
                logger.exception("on_finished callback failed")

    @property
    def game_over(self) -> bool:
        return self.session.is_terminal

    def get_state(self) -> Dict[str, Any]:
        s = self.session
        return {
            "phase": s.phase.value,
            "round_index": s.round_index,
            "rounds_total": len(s.targets),
            "sentence": s.round.sentence,
            "tray": list(s.round.tray),
            "picked": list(s.round.picked),
            "checked": s.round.checked,
            "grid": s.grid.clone_state(),
            "pieces": [p.id for p in s.bag],
            "selected": s.selected,
            "score": s.score,
            "wrong_count": s.wrong_count,
            "wrong_limit": s.config.wrong_limit,
            "game_over": s.is_terminal,
            "reason": s.reason.value if s.reason is not None else None,
        }
