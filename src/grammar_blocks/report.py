from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from grammar_blocks.session.state import Session, TerminalReason, WrongItem


@dataclass(frozen=True)
class Report:
    """End-of-run record for one session."""
    timestamp: str
    rounds_played: int
    lines_cleared: int
    wrong_count: int
    wrong_items: Tuple[WrongItem, ...]
    reason: TerminalReason

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "rounds_played": self.rounds_played,
            "lines_cleared": self.lines_cleared,
            "wrong_count": self.wrong_count,
            "wrong_items": [{"question": w.question, "correct": w.correct} for w in self.wrong_items],
            "reason": self.reason.value,
        }


ReportListener = Callable[[Report], None]
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_report(session: Session, clock: Optional[Clock] = None) -> Report:
    if session.reason is None:
        raise ValueError("Session has not terminated")
    now = (clock or utc_now)()
    return Report(
        timestamp=now.isoformat(),
        rounds_played=session.rounds_played,
        lines_cleared=session.lines_cleared,
        wrong_count=session.wrong_count,
        wrong_items=session.wrong_items,
        reason=session.reason,
    )


class ReportLog:
    """Append-only JSON-lines file of reports."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def append(self, report: Report) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(report.to_dict(), ensure_ascii=False) + "\n")

    def read_all(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
