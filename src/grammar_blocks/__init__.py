"""Grammar Blocks: sentence reordering rounds that unlock a 10x10 block puzzle."""

from grammar_blocks.game import GameConfig, GameGrid, Piece, PieceGenerator
from grammar_blocks.report import Report, ReportLog
from grammar_blocks.session import Phase, Session, TerminalReason
from grammar_blocks.session.engine import GrammarBlocksGame

__all__ = [
    "GameConfig",
    "GameGrid",
    "Piece",
    "PieceGenerator",
    "Report",
    "ReportLog",
    "Phase",
    "Session",
    "TerminalReason",
    "GrammarBlocksGame",
]
