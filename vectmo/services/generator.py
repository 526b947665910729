"""
Greedy, cycle-avoiding character generator.

At each step the most frequent follower of the current character is taken,
unless appending it would repeat a recent window of characters that already
occurred earlier in the sequence. When every follower would do that, the top
follower is taken anyway (a "forced move"), trading cycle avoidance for
guaranteed progress.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import NoContinuationError
from .transitions import TransitionTable

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 50
DEFAULT_WINDOW = 6

STOP_DEAD_END = "dead_end"
STOP_MAX_CHARS = "max_chars"


@dataclass
class GenerationTrace:
    """Outcome of one generation run (seed excluded from `text`)."""
    seed: str
    text: str
    steps: int
    forced_moves: int
    stop_reason: str


def creates_cycle(sequence: str, candidate: str, window: int = DEFAULT_WINDOW) -> bool:
    """
    True if appending `candidate` makes the trailing `window` characters
    repeat an earlier occurrence in the sequence.
    """
    hyp = sequence + candidate
    if len(hyp) < window:
        return False
    tail_start = len(hyp) - window
    return hyp.find(hyp[tail_start:]) < tail_start


class Generator:
    """Walks a transition table from a seed character."""

    def __init__(self, table: TransitionTable, window: int = DEFAULT_WINDOW):
        self.table = table
        self.window = max(1, window)

    def generate(self, seed: str, max_chars: int = DEFAULT_MAX_CHARS) -> GenerationTrace:
        """
        Produce up to `max_chars` characters following `seed`.

        Args:
            seed: Seed character (only its last character is used)
            max_chars: Character budget for the continuation

        Raises:
            NoContinuationError: if nothing could be appended to the seed
        """
        current = seed[-1:] if seed else ""
        sequence = current
        forced = 0
        stop_reason = STOP_MAX_CHARS

        for _ in range(max(0, max_chars)):
            followers = self.table.top_followers(current)
            if not followers:
                stop_reason = STOP_DEAD_END
                break

            chosen = next(
                (c for c in followers if not creates_cycle(sequence, c, self.window)),
                None,
            )
            if chosen is None:
                chosen = followers[0]
                forced += 1

            sequence += chosen
            current = chosen

        text = sequence[1:]
        if not text:
            raise NoContinuationError(current)

        if forced:
            logger.debug(f"[PREDICT] {forced} forced move(s) while generating")

        return GenerationTrace(
            seed=sequence[:1],
            text=text,
            steps=len(text),
            forced_moves=forced,
            stop_reason=stop_reason,
        )


def generate(
    table: TransitionTable,
    seed: str,
    max_chars: int = DEFAULT_MAX_CHARS,
    window: int = DEFAULT_WINDOW,
) -> str:
    return Generator(table, window=window).generate(seed, max_chars).text
