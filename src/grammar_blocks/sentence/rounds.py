from __future__ import annotations

import random
import re
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple


# A word (letters, digits, underscore, straight or curly apostrophe) or any
# single non-space symbol.
_TOKEN_RE = re.compile(r"[\w'’]+|[^\s]")
_SPACE_RE = re.compile(r"\s+")


def tokenize(sentence: str) -> List[str]:
    """Split a sentence into words and punctuation marks.

    >>> tokenize("Hello, world!")
    ['Hello', ',', 'world', '!']
    """
    s = _SPACE_RE.sub(" ", sentence.strip())
    return _TOKEN_RE.findall(s)


def shuffle_tokens(tokens: Sequence[str], rng: random.Random) -> List[str]:
    """Shuffle tokens, retrying once if the shuffle kept the source order."""
    shuffled = list(tokens)
    rng.shuffle(shuffled)
    if shuffled == list(tokens):
        shuffled = list(tokens)
        rng.shuffle(shuffled)
    return shuffled


@dataclass(frozen=True)
class Round:
    sentence: str
    answer: Tuple[str, ...]
    tray: Tuple[str, ...]
    picked: Tuple[str, ...] = ()
    checked: Optional[bool] = None

    @property
    def correct_text(self) -> str:
        return " ".join(self.answer)


def start_round(sentence: str, rng: random.Random) -> Round:
    answer = tuple(tokenize(sentence))
    return Round(sentence=sentence, answer=answer, tray=tuple(shuffle_tokens(answer, rng)))


def pick_token(round_: Round, index: int) -> Round:
    """Move tray[index] to the end of the picked sequence."""
    if round_.checked is not None or not 0 <= index < len(round_.tray):
        return round_
    token = round_.tray[index]
    return replace(
        round_,
        tray=round_.tray[:index] + round_.tray[index + 1:],
        picked=round_.picked + (token,),
    )


def unpick_token(round_: Round, index: int) -> Round:
    """Move picked[index] back to the end of the tray."""
    if round_.checked is not None or not 0 <= index < len(round_.picked):
        return round_
    token = round_.picked[index]
    return replace(
        round_,
        tray=round_.tray + (token,),
        picked=round_.picked[:index] + round_.picked[index + 1:],
    )


def check_round(round_: Round) -> Round:
    if round_.checked is not None:
        return round_
    return replace(round_, checked=round_.picked == round_.answer)


def solve_order(round_: Round) -> List[int]:
    """Tray indices that, picked one after another, rebuild the answer.

    Indices refer to the tray as it is at each pick, so every pick removes
    one token and shifts the ones after it. Only meaningful for an empty
    picked sequence.
    """
    tray = list(round_.tray)
    order: List[int] = []
    for token in round_.answer:
        idx = tray.index(token)
        order.append(idx)
        tray.pop(idx)
    return order
